"""
Tests for the chart of accounts and bank account endpoints.
"""


def create_group_and_leaf(client):
    group = client.post("/coa/accounts", json={
        "code": "1", "name": "Assets", "account_type": "ASSET", "is_leaf": False,
    }).json()
    leaf = client.post("/coa/accounts", json={
        "code": "1.1", "name": "Bank", "account_type": "ASSET",
        "parent_id": group["id"],
    }).json()
    return group, leaf


class TestCOAEndpoints:

    def test_create_and_fetch(self, client):
        group, leaf = create_group_and_leaf(client)

        response = client.get(f"/coa/accounts/{leaf['id']}")
        assert response.status_code == 200
        assert response.json()["parent_id"] == group["id"]

        children = client.get(f"/coa/accounts/{group['id']}/children").json()
        assert [c["code"] for c in children] == ["1.1"]
        assert len(client.get("/coa/accounts").json()) == 2

    def test_duplicate_code_is_409(self, client):
        create_group_and_leaf(client)
        response = client.post("/coa/accounts", json={
            "code": "1", "name": "Again", "account_type": "ASSET",
        })
        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "CONFLICT"

    def test_leaf_parent_is_422(self, client):
        _, leaf = create_group_and_leaf(client)
        response = client.post("/coa/accounts", json={
            "code": "1.1.1", "name": "Child", "account_type": "ASSET",
            "parent_id": leaf["id"],
        })
        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "VALIDATION_ERROR"

    def test_unknown_account_is_404(self, client):
        response = client.get("/coa/accounts/999")
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "NOT_FOUND"


class TestBankAccountEndpoints:

    def test_lifecycle(self, client):
        _, leaf = create_group_and_leaf(client)
        response = client.post("/bank-accounts", json={
            "code": "SBI-INR", "name": "SBI", "account_type": "BANK",
            "currency": "inr", "ledger_account_id": leaf["id"],
        })
        assert response.status_code == 201
        bank = response.json()
        assert bank["currency"] == "INR"

        response = client.post(f"/bank-accounts/{bank['id']}/deactivate")
        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert client.get("/bank-accounts").json() == []
        assert len(client.get("/bank-accounts?include_inactive=true").json()) == 1

        response = client.post(f"/bank-accounts/{bank['id']}/reactivate")
        assert response.json()["is_active"] is True

    def test_balance_of_new_account(self, client):
        _, leaf = create_group_and_leaf(client)
        bank = client.post("/bank-accounts", json={
            "code": "SBI-INR", "name": "SBI", "currency": "INR",
            "ledger_account_id": leaf["id"],
        }).json()

        balance = client.get(f"/bank-accounts/{bank['id']}/balance").json()
        assert balance["currency"] == "INR"
        assert float(balance["foreign_balance"]) == 0
        assert float(balance["local_balance"]) == 0

    def test_second_bank_on_same_ledger_is_409(self, client):
        _, leaf = create_group_and_leaf(client)
        client.post("/bank-accounts", json={
            "code": "SBI-INR", "name": "SBI", "currency": "INR",
            "ledger_account_id": leaf["id"],
        })
        response = client.post("/bank-accounts", json={
            "code": "SBI-USD", "name": "SBI USD", "currency": "USD",
            "ledger_account_id": leaf["id"],
        })
        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "CONFLICT"

    def test_unknown_bank_is_404(self, client):
        assert client.get("/bank-accounts/42").status_code == 404
