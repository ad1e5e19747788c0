"""
Tests for the /wallets endpoints.
"""
from fastapi import status


def create_wallet(client, headers, **fields):
    payload = {"name": "Main wallet", "balance": "100.00"}
    payload.update(fields)
    response = client.post("/wallets", json=payload, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["wallet"]


class TestWalletCrud:

    def test_create_wallet(self, client, user, auth_headers):
        response = client.post(
            "/wallets",
            json={"name": "Main wallet", "balance": 250.5, "user_id": user["id"]},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["message"] == "Wallet created successfully"
        assert body["wallet"]["name"] == "Main wallet"
        assert body["wallet"]["balance"] == 250.5
        assert body["wallet"]["currency"] == "NGN"
        assert body["wallet"]["user_id"] == user["id"]
        assert body["wallet"]["wallet_type"] is None

    def test_create_wallet_requires_name_and_balance(self, client, auth_headers):
        response = client.post("/wallets", json={"currency": "USD"}, headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        errors = response.json()["errors"]
        assert "name" in errors
        assert "balance" in errors

    def test_create_wallet_with_blank_name_returns_422(self, client, auth_headers):
        response = client.post("/wallets", json={"name": "   ", "balance": "1.00"}, headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "name" in response.json()["errors"]

    def test_create_wallet_rejects_non_numeric_balance(self, client, auth_headers):
        response = client.post("/wallets", json={"name": "W", "balance": "lots"}, headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "balance" in response.json()["errors"]

    def test_create_wallet_with_unknown_wallet_type_returns_422(self, client, auth_headers):
        response = client.post(
            "/wallets",
            json={"name": "W", "balance": "1.00", "wallet_type_id": 42},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "wallet_type_id" in response.json()["errors"]

    def test_create_wallet_embeds_wallet_type(self, client, auth_headers):
        wallet_type = client.post("/wallet-types", json={"name": "Savings"}, headers=auth_headers).json()

        wallet = create_wallet(client, auth_headers, wallet_type_id=wallet_type["id"])

        assert wallet["wallet_type_id"] == wallet_type["id"]
        assert wallet["wallet_type"] == {"id": wallet_type["id"], "name": "Savings", "status": "active"}

    def test_get_wallet(self, client, auth_headers):
        wallet = create_wallet(client, auth_headers, currency="usd")

        response = client.get(f"/wallets/{wallet['id']}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == wallet["id"]
        assert response.json()["currency"] == "USD"

    def test_get_unknown_wallet_returns_404(self, client, auth_headers):
        response = client.get("/wallets/999", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_wallet(self, client, auth_headers):
        wallet = create_wallet(client, auth_headers)

        response = client.put(f"/wallets/{wallet['id']}", json={"balance": "75.25"}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Wallet updated successfully"
        assert body["wallet"]["balance"] == 75.25
        assert body["wallet"]["name"] == "Main wallet"

    def test_update_unknown_wallet_returns_404(self, client, auth_headers):
        response = client.put("/wallets/999", json={"balance": "1.00"}, headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_wallet(self, client, auth_headers):
        wallet = create_wallet(client, auth_headers)

        response = client.delete(f"/wallets/{wallet['id']}", headers=auth_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/wallets/{wallet['id']}", headers=auth_headers).status_code == status.HTTP_404_NOT_FOUND

    def test_delete_wallet_keeps_its_transactions(self, client, auth_headers):
        wallet = create_wallet(client, auth_headers)
        transaction = client.post(
            "/transactions",
            json={"amount": "5.00", "wallet_id": wallet["id"]},
            headers=auth_headers,
        ).json()["data"]

        client.delete(f"/wallets/{wallet['id']}", headers=auth_headers)

        response = client.get(f"/transactions/{transaction['id']}", headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["wallet_id"] is None

    def test_wallets_require_authentication(self, client):
        assert client.get("/wallets").status_code == status.HTTP_401_UNAUTHORIZED
        assert client.post("/wallets", json={"name": "W", "balance": 1}).status_code == status.HTTP_401_UNAUTHORIZED


class TestWalletListAndSearch:

    def test_list_wallets_is_paginated(self, client, auth_headers):
        for i in range(3):
            create_wallet(client, auth_headers, name=f"Wallet {i}")

        response = client.get("/wallets", params={"per_page": 2}, headers=auth_headers)

        body = response.json()
        assert body["total"] == 3
        assert body["per_page"] == 2
        assert body["last_page"] == 2
        assert len(body["data"]) == 2

    def test_search_matches_name_substring_newest_first(self, client, auth_headers):
        first = create_wallet(client, auth_headers, name="Holiday savings")
        create_wallet(client, auth_headers, name="Rent")
        second = create_wallet(client, auth_headers, name="School savings")

        response = client.get("/wallets/search", params={"query": "savings"}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert [w["id"] for w in response.json()["data"]] == [second["id"], first["id"]]

    def test_search_without_query_returns_422(self, client, auth_headers):
        response = client.get("/wallets/search", headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "query" in response.json()["errors"]

    def test_search_with_blank_query_returns_422(self, client, auth_headers):
        create_wallet(client, auth_headers)

        response = client.get("/wallets/search", params={"query": "   "}, headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "query" in response.json()["errors"]

    def test_search_trims_query(self, client, auth_headers):
        wallet = create_wallet(client, auth_headers)

        response = client.get("/wallets/search", params={"query": "  Main  "}, headers=auth_headers)

        assert [w["id"] for w in response.json()["data"]] == [wallet["id"]]

    def test_search_with_empty_query_returns_422(self, client, auth_headers):
        response = client.get("/wallets/search", params={"query": ""}, headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
