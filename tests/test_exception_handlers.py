"""Internal errors are logged, never echoed to the client"""
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.exceptions import AlreadyStartedException
from app.core.handlers import register_exception_handlers


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/db-failure")
    def db_failure():
        raise OperationalError("SELECT secret_column FROM users", {}, Exception("password=hunter2"))

    @app.get("/crash")
    def crash():
        raise RuntimeError("stack detail /srv/app/internal.py")

    @app.get("/domain")
    def domain():
        raise AlreadyStartedException()

    return app


def test_database_error_is_generic():
    client = TestClient(_app(), raise_server_exceptions=False)

    response = client.get("/db-failure")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error", "details": {}}
    assert "hunter2" not in response.text
    assert "secret_column" not in response.text


def test_unhandled_error_is_generic():
    client = TestClient(_app(), raise_server_exceptions=False)

    response = client.get("/crash")

    assert response.status_code == 500
    assert "internal.py" not in response.text


def test_domain_error_keeps_message():
    client = TestClient(_app())

    response = client.get("/domain")

    assert response.status_code == 400
    assert response.json()["message"] == "Start time already recorded"
