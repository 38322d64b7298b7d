from propvest.core.security import get_password_hash

DEFAULT_PASSWORD = "secret123"


def make_user(storage, username="investor", password=DEFAULT_PASSWORD, role="user", **extra):
    data = {
        "username": username,
        "password": get_password_hash(password),
        "role": role,
        "full_name": extra.pop("full_name", username.title()),
    }
    data.update(extra)
    return storage.create_user(data)


def fund(storage, user_id, amount):
    """Credit a wallet the way a deposit does, keeping the ledger balanced."""
    return storage.record_wallet_movement(
        user_id, amount, {"type": "deposit", "description": "Test funding"}
    )


def login(client, username, password=DEFAULT_PASSWORD):
    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def ledger_total(storage, user_id):
    return sum(t.amount for t in storage.get_wallet_transactions(user_id))
