"""
Tests for the /users endpoints: registration, login, logout and user management.
"""
from datetime import datetime, timedelta
from fastapi import status
from conftest import TEST_PASSWORD, login, register_user
from wallet_api.core.security import verify_password
from wallet_api.models import AccessToken, User, Wallet


class TestRegister:

    def test_register_creates_user_without_exposing_password(self, client, test_db):
        response = client.post(
            "/users/register",
            json={"name": "Ada Obi", "email": "ada@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()["user"]
        assert body["email"] == "ada@example.com"
        assert body["name"] == "Ada Obi"
        assert body["role"] == "user"
        assert "password" not in body

        stored = test_db.query(User).filter(User.email == "ada@example.com").first()
        assert stored.password != TEST_PASSWORD
        assert verify_password(TEST_PASSWORD, stored.password)

    def test_register_duplicate_email_returns_422_on_email(self, client, user):
        response = client.post(
            "/users/register",
            json={"name": "Someone Else", "email": "ada@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        body = response.json()
        assert "email" in body["errors"]
        assert body["message"] == "The email has already been taken."

    def test_register_short_password_is_rejected(self, client):
        response = client.post(
            "/users/register",
            json={"name": "Ada", "email": "ada@example.com", "password": "short"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "password" in response.json()["errors"]

    def test_register_blank_name_is_rejected(self, client):
        response = client.post(
            "/users/register",
            json={"name": "   ", "email": "ada@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "name" in response.json()["errors"]

    def test_register_trims_name(self, client):
        response = client.post(
            "/users/register",
            json={"name": "  Ada Obi  ", "email": "ada@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["user"]["name"] == "Ada Obi"

    def test_register_invalid_email_is_rejected(self, client):
        response = client.post(
            "/users/register",
            json={"name": "Ada", "email": "not-an-email", "password": TEST_PASSWORD},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "email" in response.json()["errors"]


class TestLogin:

    def test_login_returns_bearer_token(self, client, user):
        response = client.post("/users/login", json={"email": "ada@example.com", "password": TEST_PASSWORD})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["token"]
        assert body["token_type"] == "Bearer"
        assert body["user"]["id"] == user["id"]

    def test_login_wrong_password_returns_401_and_issues_no_token(self, client, test_db, user):
        response = client.post("/users/login", json={"email": "ada@example.com", "password": "wrong-password"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Invalid credentials"}
        assert test_db.query(AccessToken).count() == 0

    def test_login_unknown_email_returns_401(self, client):
        response = client.post("/users/login", json={"email": "ghost@example.com", "password": TEST_PASSWORD})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_missing_fields_returns_422(self, client):
        response = client.post("/users/login", json={"email": "ada@example.com"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "password" in response.json()["errors"]


class TestAuthentication:

    def test_protected_route_without_token_returns_401(self, client):
        response = client.get("/users")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Unauthenticated."}

    def test_protected_route_with_garbage_token_returns_401(self, client):
        response = client.get("/users", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token_returns_401(self, client, test_db, auth_headers):
        for token in test_db.query(AccessToken).all():
            token.expires_at = datetime.utcnow() - timedelta(minutes=1)
        test_db.commit()

        response = client.get("/users", headers=auth_headers)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Unauthenticated."}

    def test_logout_revokes_the_token(self, client, auth_headers):
        response = client.post("/users/logout", headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK

        response = client.get("/users", headers=auth_headers)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_only_revokes_the_current_token(self, client, auth_headers):
        other_headers = {"Authorization": f"Bearer {login(client)}"}

        client.get("/users/logout", headers=auth_headers)

        assert client.get("/users", headers=other_headers).status_code == status.HTTP_200_OK


class TestUserResource:

    def test_list_users_is_paginated(self, client, auth_headers):
        register_user(client, name="Bola", email="bola@example.com")
        register_user(client, name="Chi", email="chi@example.com")

        response = client.get("/users", params={"per_page": 2, "page": 2}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["total"] == 3
        assert body["last_page"] == 2
        assert body["current_page"] == 2
        assert [u["email"] for u in body["data"]] == ["chi@example.com"]

    def test_get_user(self, client, user, auth_headers):
        response = client.get(f"/users/{user['id']}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["email"] == "ada@example.com"

    def test_get_unknown_user_returns_404(self, client, auth_headers):
        response = client.get("/users/999", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "message" in response.json()

    def test_update_user_is_partial(self, client, user, auth_headers):
        response = client.put(f"/users/{user['id']}", json={"name": "Ada Updated"}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()["user"]
        assert body["name"] == "Ada Updated"
        assert body["email"] == "ada@example.com"

    def test_update_user_keeping_own_email_is_allowed(self, client, user, auth_headers):
        response = client.put(f"/users/{user['id']}", json={"email": "ada@example.com"}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK

    def test_update_user_to_taken_email_returns_422(self, client, user, auth_headers):
        register_user(client, name="Bola", email="bola@example.com")

        response = client.put(f"/users/{user['id']}", json={"email": "bola@example.com"}, headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "email" in response.json()["errors"]

    def test_update_user_password_is_hashed(self, client, test_db, user, auth_headers):
        response = client.put(f"/users/{user['id']}", json={"password": "another-password"}, headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK

        stored = test_db.query(User).filter(User.id == user["id"]).first()
        test_db.refresh(stored)
        assert verify_password("another-password", stored.password)

    def test_delete_user_keeps_wallets_as_orphans(self, client, test_db, auth_headers):
        other = register_user(client, name="Bola", email="bola@example.com")
        wallet = client.post(
            "/wallets",
            json={"name": "Bola main", "balance": "10.00", "user_id": other["id"]},
            headers=auth_headers,
        ).json()["wallet"]

        response = client.delete(f"/users/{other['id']}", headers=auth_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        assert client.get(f"/users/{other['id']}", headers=auth_headers).status_code == status.HTTP_404_NOT_FOUND

        remaining = client.get(f"/wallets/{wallet['id']}", headers=auth_headers).json()
        assert remaining["user_id"] is None
        assert test_db.query(Wallet).count() == 1


class TestUserSearch:

    def test_search_matches_name_or_email(self, client, auth_headers):
        register_user(client, name="Bola Tinubu", email="bola@example.com")
        register_user(client, name="Chi", email="chi.bolade@example.com")
        register_user(client, name="Dayo", email="dayo@example.com")

        response = client.get("/users/search", params={"query": "bola"}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        emails = {u["email"] for u in response.json()["data"]}
        assert emails == {"bola@example.com", "chi.bolade@example.com"}

    def test_search_filters_by_role(self, client, test_db, auth_headers):
        admin = register_user(client, name="Admin", email="admin@example.com")
        stored = test_db.query(User).filter(User.id == admin["id"]).first()
        stored.role = "admin"
        test_db.commit()

        response = client.get("/users/search", params={"role": "admin"}, headers=auth_headers)

        body = response.json()
        assert body["total"] == 1
        assert body["data"][0]["email"] == "admin@example.com"

    def test_search_defaults_to_ten_per_page(self, client, auth_headers):
        response = client.get("/users/search", headers=auth_headers)

        body = response.json()
        assert body["per_page"] == 10
        assert body["total"] == 1
