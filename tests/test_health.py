# tests/test_health.py
"""Liveness probe and app-level error shapes."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


class TestHealth:
    def test_ping(self, client):
        response = client.get("/api/ping")
        assert response.status_code == 200
        assert response.text == "pong"
        assert response.headers["content-type"].startswith("text/plain")

    def test_ping_needs_no_token(self, client):
        assert client.get("/api/ping", headers={"x-token": "basura"}).status_code == 200

    def test_unknown_route(self, client):
        response = client.get("/api/no-existe")
        assert response.status_code == 404
        assert response.json() == {"ok": False, "mensaje": "Ruta no encontrada"}

    def test_docs_are_served(self, client):
        assert client.get("/api-docs").status_code == 200
