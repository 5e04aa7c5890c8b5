"""
HRMS Backend — Application Lifecycle and Health Tests
======================================================

What:  Startup/shutdown behaviour of the lifespan, error rendering, /health.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from hrms.exceptions import DatabaseConnectionError, DatabaseError, NotFoundError
from hrms.main import create_app, lifespan, render_error
from hrms.services.employee_service import EmployeeService


class TestLifespan:

    @pytest.mark.asyncio
    async def test_connection_failure_aborts_startup(self, test_settings):
        app = create_app(settings=test_settings)
        failing_connect = AsyncMock(side_effect=DatabaseConnectionError("Could not connect"))

        with patch("hrms.main.setup_logging"), \
             patch("hrms.main.Database.connect", failing_connect):
            with pytest.raises(DatabaseConnectionError):
                async with lifespan(app):
                    pytest.fail("application must not start without a database")

        assert getattr(app.state, "employee_service", None) is None

    @pytest.mark.asyncio
    async def test_startup_attaches_database_and_closes_on_shutdown(self, test_settings):
        app = create_app(settings=test_settings)
        database = MagicMock()

        with patch("hrms.main.setup_logging"), \
             patch("hrms.main.Database.connect", AsyncMock(return_value=database)):
            async with lifespan(app):
                assert app.state.database is database
                assert isinstance(app.state.employee_service, EmployeeService)
                assert app.state.employee_service.collection is database.collection

        database.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_injected_database_is_not_reconnected_or_closed(self, test_settings):
        database = MagicMock()
        app = create_app(settings=test_settings, database=database)
        connect = AsyncMock()

        with patch("hrms.main.setup_logging"), patch("hrms.main.Database.connect", connect):
            async with lifespan(app):
                pass

        connect.assert_not_awaited()
        database.close.assert_not_called()


class TestRenderError:

    def test_public_error_sends_message_as_text(self):
        response = render_error(DatabaseError(message="cursor killed"))
        assert response.status_code == 500
        assert response.body == b"cursor killed"
        assert response.media_type == "text/plain"

    def test_private_error_sends_empty_body(self):
        response = render_error(NotFoundError(resource="employee", resource_id="abc"))
        assert response.status_code == 404
        assert response.body == b""


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy_when_ping_succeeds(self, test_settings):
        database = MagicMock()
        database.ping = AsyncMock(return_value=True)
        app = create_app(settings=test_settings, database=database)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_unhealthy_when_ping_fails(self, test_settings):
        database = MagicMock()
        database.ping = AsyncMock(return_value=False)
        app = create_app(settings=test_settings, database=database)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"
