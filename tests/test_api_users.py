from eventures.app.core.security import decode_access_token

REGISTRATION = {
    "username": "newUser",
    "email": "new@mail.com",
    "password": "pass123",
    "confirmPassword": "pass123",
    "firstName": "New",
    "lastName": "User",
}


def test_register_and_login(client):
    response = client.post("/api/users/register", json=REGISTRATION)
    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "newUser"
    assert body["firstName"] == "New"
    assert "password" not in body

    login = client.post("/api/users/login", json={"username": "newUser", "password": "pass123"})
    assert login.status_code == 200
    token = login.json()["token"]
    assert decode_access_token(token)["sub"] == "newUser"
    assert "expiration" in login.json()


def test_register_reports_all_missing_fields(client):
    payload = {"username": "newUser", "firstName": "New", "lastName": "User"}
    response = client.post("/api/users/register", json=payload)
    assert response.status_code == 400
    assert response.json()["message"] == (
        "\r\nEmail field is required.\r\nPassword field is required.\r\nConfirm Password field is required."
    )


def test_register_duplicate_username(client, maria):
    response = client.post("/api/users/register", json=dict(REGISTRATION, username="maria"))
    assert response.status_code == 400
    assert response.json()["errors"] == ["Username is already taken."]


def test_login_with_wrong_password(client, maria):
    response = client.post("/api/users/login", json={"username": "maria", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid username or password!"}


def test_login_with_unknown_user(client):
    response = client.post("/api/users/login", json={"username": "ghost", "password": "123456"})
    assert response.status_code == 401
