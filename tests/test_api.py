"""API endpoint tests for health and authentication."""


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "newuser@example.com", "password": "password123", "name": "New User"},
    )
    assert response.status_code == 201
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "newuser@example.com"
    assert data["user"]["name"] == "New User"


def test_register_duplicate_email(client, auth_headers):
    """Test registration with duplicate email fails with a field error."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": auth_headers.email.upper(), "password": "password123", "name": "Dup"},
    )
    assert response.status_code == 422
    assert response.json()["errors"]["email"] == ["Email already registered"]


def test_register_requires_name(client):
    """Test registration without a name is rejected."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "noname@example.com", "password": "password123"},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "Validation failed"
    assert "name" in body["errors"]


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == auth_headers.email
    assert response.json()["id"] == auth_headers.user_id


def test_logout(client, auth_headers):
    """Test logout acknowledges the request."""
    response = client.post("/api/v1/auth/logout", headers=auth_headers)
    assert response.status_code == 200


def test_unauthorized_access(client):
    """Test that endpoints require authentication."""
    assert client.get("/api/v1/tasks").status_code == 401
    assert client.get("/api/v1/dashboard").status_code == 401
    assert client.get("/api/v1/projects").status_code == 401
    assert client.get("/api/v1/tags").status_code == 401


def test_invalid_token_rejected(client):
    """Test that a garbage bearer token is rejected."""
    response = client.get("/api/v1/tasks", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
