import pytest

from tests.helpers import fund, ledger_total


@pytest.fixture
def card(storage, user):
    return storage.add_payment_card({
        "user_id": user.id,
        "card_number": "4111111111111111",
        "cardholder_name": "Jane Investor",
        "expiry_date": "12/29",
        "card_type": "Visa",
    })


def test_wallet_starts_empty(user_client):
    response = user_client.get("/api/wallet")

    assert response.status_code == 200
    assert response.json() == {"balance": 0, "currency": "AED"}


def test_wallet_requires_login(client):
    assert client.get("/api/wallet").status_code == 401
    assert client.post("/api/wallet/deposit", json={"amount": 10}).status_code == 401


def test_deposit_then_overdrawn_withdrawal(user_client, storage, user):
    deposit = user_client.post("/api/wallet/deposit", json={"amount": 50_000})
    assert deposit.status_code == 200
    assert deposit.json() == {"message": "Deposit successful", "balance": 50_000}

    response = user_client.post("/api/wallet/withdraw", json={"amount": 80_000})

    assert response.status_code == 400
    assert response.json() == {"message": "Insufficient funds"}
    assert user_client.get("/api/wallet").json()["balance"] == 50_000
    assert len(storage.get_wallet_transactions(user.id)) == 1


def test_withdrawal(user_client, storage, user):
    fund(storage, user.id, 500)

    response = user_client.post("/api/wallet/withdraw", json={"amount": 200})

    assert response.status_code == 200
    assert response.json() == {"message": "Withdrawal successful", "balance": 300}
    latest = user_client.get("/api/wallet/transactions").json()[0]
    assert latest["type"] == "withdrawal"
    assert latest["amount"] == -200
    assert latest["method"] == "standard"
    assert ledger_total(storage, user.id) == 300


def test_withdraw_entire_balance(user_client, storage, user):
    fund(storage, user.id, 250)

    response = user_client.post("/api/wallet/withdraw", json={"amount": 250})

    assert response.status_code == 200
    assert response.json()["balance"] == 0


@pytest.mark.parametrize("amount", [0, -1, "abc", None])
def test_invalid_amounts(user_client, amount):
    deposit = user_client.post("/api/wallet/deposit", json={"amount": amount})
    withdraw = user_client.post("/api/wallet/withdraw", json={"amount": amount})

    assert deposit.status_code == 400
    assert withdraw.status_code == 400


def test_card_deposit(user_client, card):
    response = user_client.post("/api/wallet/deposit", json={
        "amount": 1_000,
        "method": "card",
        "cardId": card.id,
        "cvv": "123",
    })

    assert response.status_code == 200
    transaction = user_client.get("/api/wallet/transactions").json()[0]
    assert transaction["method"] == "card"
    assert transaction["organization"] == "Visa"
    assert transaction["account"] == "**** **** **** 1111"
    assert transaction["description"] == "Deposit from Visa card ending in 1111"


def test_card_deposit_needs_cvv(user_client, card):
    response = user_client.post("/api/wallet/deposit", json={
        "amount": 1_000,
        "method": "card",
        "cardId": card.id,
    })

    assert response.status_code == 400
    assert response.json()["message"] == "CVV must contain only digits"


def test_card_deposit_with_someone_elses_card(user_client, storage):
    stranger = storage.create_user({"username": "stranger", "password": "x"})
    foreign = storage.add_payment_card({
        "user_id": stranger.id,
        "card_number": "5500000000000004",
        "cardholder_name": "Someone Else",
        "expiry_date": "01/30",
        "card_type": "Mastercard",
    })

    response = user_client.post("/api/wallet/deposit", json={
        "amount": 1_000,
        "method": "card",
        "cardId": foreign.id,
        "cvv": "999",
    })

    assert response.status_code == 404
    assert user_client.get("/api/wallet").json()["balance"] == 0


def test_mobile_money_deposit(user_client):
    response = user_client.post("/api/wallet/deposit", json={
        "amount": 300,
        "method": "mobile-money",
        "provider": "M-Pesa",
        "phoneNumber": "0712345678",
    })

    assert response.status_code == 200
    transaction = user_client.get("/api/wallet/transactions").json()[0]
    assert transaction["organization"] == "M-Pesa"
    assert transaction["account"] == "0712345678"


def test_mobile_money_requires_valid_phone(user_client):
    response = user_client.post("/api/wallet/deposit", json={
        "amount": 300,
        "method": "mobile-money",
        "provider": "M-Pesa",
        "phoneNumber": "12345",
    })

    assert response.status_code == 400
    assert response.json()["message"] == "Phone number must be 10 to 12 digits"


def test_bank_withdrawal_masks_account(user_client, storage, user):
    fund(storage, user.id, 10_000)

    response = user_client.post("/api/wallet/withdraw", json={
        "amount": 2_500,
        "method": "bank",
        "bankName": "Emirates NBD",
        "accountNumber": "1234567890123",
        "accountName": "Jane Investor",
        "swiftCode": "EBILAEAD",
    })

    assert response.status_code == 200
    transaction = user_client.get("/api/wallet/transactions").json()[0]
    assert transaction["method"] == "bank"
    assert transaction["organization"] == "Emirates NBD"
    assert transaction["account"] == "****0123"
    assert "EBILAEAD" in transaction["description"]


def test_bank_withdrawal_requires_account_details(user_client, storage, user):
    fund(storage, user.id, 10_000)

    response = user_client.post("/api/wallet/withdraw", json={
        "amount": 100,
        "method": "bank",
        "bankName": "Emirates NBD",
        "accountNumber": "12ab",
        "accountName": "Jane",
    })

    assert response.status_code == 400
    assert storage.get_user_wallet_balance(user.id) == 10_000


def test_transactions_newest_first_and_scoped(user_client, storage, user):
    other = storage.create_user({"username": "other", "password": "x"})
    fund(storage, other.id, 9)
    for amount in (10, 20, 30):
        user_client.post("/api/wallet/deposit", json={"amount": amount})

    transactions = user_client.get("/api/wallet/transactions").json()

    assert [t["amount"] for t in transactions] == [30, 20, 10]
    assert {t["userId"] for t in transactions} == {user.id}


def test_fractional_deposits_and_withdrawals(user_client, storage, user):
    for amount in (0.1, 0.2, 0.3):
        assert user_client.post("/api/wallet/deposit", json={"amount": amount}).status_code == 200

    assert user_client.get("/api/wallet").json()["balance"] == 0.6
    assert storage.get_user_wallet_balance(user.id) == ledger_total(storage, user.id)

    assert user_client.post("/api/wallet/withdraw", json={"amount": 0.4}).status_code == 200
    response = user_client.post("/api/wallet/withdraw", json={"amount": "0.20"})

    assert response.status_code == 200
    assert response.json()["balance"] == 0
    assert ledger_total(storage, user.id) == 0


def test_amounts_are_limited_to_cents(user_client):
    response = user_client.post("/api/wallet/deposit", json={"amount": 10.005})

    assert response.status_code == 400
    assert user_client.get("/api/wallet").json()["balance"] == 0
