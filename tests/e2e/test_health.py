"""End-to-end tests for the health endpoint."""


def test_health(api):
    """Health reports status and deployment metadata."""
    # Act
    response = api.client.get("/health")

    # Assert
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "inkwell"
    assert "git_sha" in body
