import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from wallet_api.core.config import get_settings
from wallet_api.core.errors import register_exception_handlers
from wallet_api.database import engine, Base

# Import all models to register them with SQLAlchemy
from wallet_api.models import User, WalletType, Wallet, Transaction, AccessToken, PasswordResetToken

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app instance with OpenAPI security schemes
app = FastAPI(
    title=settings.APP_NAME,
    description="REST API for users, wallets, wallet types and transactions with bearer token authentication.",
    version="1.0.0",
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Users",
            "description": "Registration, login, logout and user management"
        },
        {
            "name": "Password Reset",
            "description": "Forgot-password and reset-password flow"
        },
        {
            "name": "Wallets",
            "description": "Wallet CRUD and search"
        },
        {
            "name": "Wallet Types",
            "description": "Wallet type CRUD and filtered search"
        },
        {
            "name": "Transactions",
            "description": "Transaction records and multi-filter search"
        }
    ],
    # Configure security schemes for Swagger UI
    swagger_ui_parameters={
        "persistAuthorization": True,
    }
)

register_exception_handlers(app)

# CORS middleware - allows frontend from different origins to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], # Allow all origins for simplicity; restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    """
    Runs when the application starts up.
    Creates all database tables if they don't exist.
    :return:
    """
    logger.info("Starting up %s...", settings.APP_NAME)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created!")


@app.on_event("shutdown")
async def shutdown_event():
    """
    Runs when the application shuts down.
    :return:
    """
    logger.info("Shutting down %s...", settings.APP_NAME)


@app.get("/")
async def root():
    """
    Health check endpoint.
    :return:
    """
    return {
        "message": f"Welcome to {settings.APP_NAME}!",
        "status": "healthy",
        "version": "1.0.0"
    }

@app.get("/health")
async def health_check():
    """
    Health check endpoint.
    :return:
    """
    return {
        "status": "healthy",
        "database": "connected",
        "app_name": settings.APP_NAME
    }

# Import and include API routers
from wallet_api.api import auth, users, wallets, wallet_types, transactions

app.include_router(users.router)
app.include_router(auth.router)
app.include_router(wallets.router)
app.include_router(wallet_types.router)
app.include_router(transactions.router)
