import pytest

from tests.helpers import fund, ledger_total


@pytest.fixture
def funded_client(user_client, storage, user):
    fund(storage, user.id, 100_000)
    return user_client


def test_invest_debits_wallet_and_records_stake(funded_client, storage, user):
    response = funded_client.post("/api/properties/1/invest", json={"amount": 30_000})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Investment successful"
    assert body["balance"] == 70_000
    assert body["investment"]["propertyId"] == 1
    assert body["investment"]["investmentAmount"] == 30_000
    assert body["investment"]["shares"] == 30_000
    assert body["investment"]["status"] == "active"

    assert funded_client.get("/api/wallet").json()["balance"] == 70_000
    latest = funded_client.get("/api/wallet/transactions").json()[0]
    assert latest["type"] == "investment"
    assert latest["amount"] == -30_000
    assert latest["relatedPropertyId"] == 1
    assert latest["description"].startswith("Investment in property: ")
    assert ledger_total(storage, user.id) == 70_000


def test_invest_more_than_balance(funded_client, storage, user):
    response = funded_client.post("/api/properties/2/invest", json={"amount": 150_000})

    assert response.status_code == 400
    assert response.json() == {"message": "Insufficient wallet balance"}
    assert storage.get_user_wallet_balance(user.id) == 100_000
    assert storage.get_user_properties(user.id) == []


@pytest.mark.parametrize("property_id", [4, 6])
def test_invest_in_closed_property(funded_client, storage, user, property_id):
    response = funded_client.post(f"/api/properties/{property_id}/invest", json={"amount": 100})

    assert response.status_code == 400
    assert response.json() == {"message": "Property is not available for investment"}
    assert storage.get_user_wallet_balance(user.id) == 100_000
    assert len(storage.get_wallet_transactions(user.id)) == 1


def test_invest_in_missing_property(funded_client):
    response = funded_client.post("/api/properties/999/invest", json={"amount": 100})

    assert response.status_code == 404


def test_invest_with_invalid_property_id(funded_client):
    assert funded_client.post("/api/properties/abc/invest", json={"amount": 100}).status_code == 400


@pytest.mark.parametrize("amount", [0, -50, "lots"])
def test_invest_with_invalid_amount(funded_client, storage, user, amount):
    response = funded_client.post("/api/properties/1/invest", json={"amount": amount})

    assert response.status_code == 400
    assert storage.get_user_wallet_balance(user.id) == 100_000


def test_invest_requires_login(client):
    assert client.post("/api/properties/1/invest", json={"amount": 100}).status_code == 401


def test_portfolio_lists_stakes_with_property(funded_client):
    funded_client.post("/api/properties/1/invest", json={"amount": 10_000})
    funded_client.post("/api/properties/3/invest", json={"amount": 5_000})

    response = funded_client.get("/api/portfolio")

    assert response.status_code == 200
    items = response.json()
    assert [item["propertyId"] for item in items] == [1, 3]
    assert items[0]["property"]["id"] == 1
    assert items[1]["investmentAmount"] == 5_000
    assert funded_client.get("/api/wallet").json()["balance"] == 85_000


def test_empty_portfolio(user_client):
    assert user_client.get("/api/portfolio").json() == []


def test_portfolio_with_dangling_stake_is_server_error(user_client, storage, user):
    storage.add_user_property({"user_id": user.id, "property_id": 999, "investment_amount": 10})

    response = user_client.get("/api/portfolio")

    assert response.status_code == 500
    assert "999" not in response.json()["message"]
