from tests.helpers import DEFAULT_PASSWORD, login


def test_register_logs_the_user_in(client):
    response = client.post("/api/register", json={
        "username": "newcomer",
        "password": "hunter22",
        "fullName": "New Comer",
        "email": "new@example.com",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "newcomer"
    assert body["fullName"] == "New Comer"
    assert body["walletBalance"] == 0
    assert body["role"] == "user"
    assert "password" not in body

    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.json()["id"] == body["id"]


def test_register_rejects_taken_username(client, user):
    response = client.post("/api/register", json={
        "username": user.username,
        "password": "another1",
    })

    assert response.status_code == 400
    assert response.json()["message"] == "Username already exists"


def test_register_validates_input(client):
    response = client.post("/api/register", json={"username": "ab", "password": "123"})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Username must be at least 3 characters"
    assert {error["field"] for error in body["errors"]} == {"username", "password"}


def test_password_is_stored_hashed(client, storage):
    client.post("/api/register", json={"username": "hashed", "password": "plaintext1"})

    stored = storage.get_user_by_username("hashed")
    assert stored.password != "plaintext1"


def test_login_and_last_login(client, user):
    body = login(client, user.username)

    assert body["id"] == user.id
    assert body["lastLogin"] is not None


def test_login_with_wrong_password(client, user):
    response = client.post("/api/login", json={"username": user.username, "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid username or password"}


def test_login_with_unknown_user(client):
    response = client.post("/api/login", json={"username": "nobody", "password": DEFAULT_PASSWORD})

    assert response.status_code == 401


def test_logout_ends_the_session(user_client):
    assert user_client.get("/api/user").status_code == 200

    response = user_client.post("/api/logout")

    assert response.status_code == 200
    assert user_client.get("/api/user").status_code == 401


def test_anonymous_user_is_unauthorized(client):
    response = client.get("/api/user")

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


def test_profile_update(user_client):
    response = user_client.patch("/api/profile", json={
        "fullName": "Jane Investor",
        "phoneNumber": "0501234567",
        "walletBalance": 1_000_000,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["fullName"] == "Jane Investor"
    assert body["phoneNumber"] == "0501234567"
    assert body["walletBalance"] == 0

    assert user_client.get("/api/profile").json()["fullName"] == "Jane Investor"


def test_profile_rejects_invalid_email(user_client):
    response = user_client.patch("/api/profile", json={"email": "not-an-email"})

    assert response.status_code == 400
