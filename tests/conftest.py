import pytest
import pytest_asyncio
import httpx

from app.core.config import Settings
from app.main import create_app

from fixtures_seed import seed_listing, seed_payment  # noqa: F401


ADMIN_KEY = "test-admin-key"
PAYMENT_PHONE = "+243000000001"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_dir=tmp_path / "data",
        upload_dir=tmp_path / "uploads",
        log_dir=tmp_path / "logs",
        admin_password=ADMIN_KEY,
        payment_phone=PAYMENT_PHONE,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def backend(app):
    return app.state.backend


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": ADMIN_KEY}


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
