"""
Tests for Health Check API
"""


class TestHealthAPI:
    """Test the status endpoint"""

    def test_status(self, client):
        """Test basic status endpoint"""
        response = client.get("/status")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert response.headers["content-type"] == "application/json"

    def test_status_ignores_query(self, client):
        response = client.get("/status?verbose=1")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_status_does_not_depend_on_store(self, app):
        from fastapi.testclient import TestClient

        app.state.flag_store = None
        response = TestClient(app).get("/status")

        assert response.status_code == 200
