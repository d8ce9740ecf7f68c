import httpx
import pytest_asyncio

from greeny_auth.core.application import create_application
from greeny_auth.infrastructure.dependency_injection.auth_dependencies import (
    get_auth_orchestrator,
    get_member_service,
)


@pytest_asyncio.fixture
async def app(orchestrator, member_service):
    """The application with both domain services bound to in-memory doubles."""
    application = create_application()
    application.dependency_overrides[get_auth_orchestrator] = lambda: orchestrator
    application.dependency_overrides[get_member_service] = lambda: member_service
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    """Provides an async test client."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
