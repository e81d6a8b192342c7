from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from bookr.core.security import token_manager
from bookr.db.store import InMemoryStore, get_store
from bookr.main import app
from bookr.models.user_model import User, UserRole
from bookr.utils.deps import get_book_info_extractor
from tests.mocks.mock_book_info_extractor import FakeBookInfoExtractor


# --- Store Fixtures ---


@pytest.fixture
def store() -> InMemoryStore:
    """A freshly seeded store for each test."""
    return InMemoryStore().seed()


@pytest.fixture
def regular_user(store: InMemoryStore) -> User:
    """The seeded regular user (user-1)."""
    return next(u for u in store.users if u.id == "user-1")


@pytest.fixture
def admin_user(store: InMemoryStore) -> User:
    """The seeded administrator (admin-1)."""
    return next(u for u in store.users if u.id == "admin-1")


@pytest.fixture
def other_user() -> User:
    """A user who owns nothing in the seeded store."""
    return User(
        id="user-2",
        name="李四",
        email="lisi@example.com",
        role=UserRole.USER,
        unique_link="https://bookr.example.com/invite/lisi",
    )


@pytest.fixture
def fake_extractor() -> FakeBookInfoExtractor:
    return FakeBookInfoExtractor()


# --- HTTP Client ---


@pytest_asyncio.fixture
async def test_client(
    store: InMemoryStore, fake_extractor: FakeBookInfoExtractor
) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an HTTP client for API testing, overriding the store and the
    cover extractor dependencies.
    """
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_book_info_extractor] = lambda: fake_extractor

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        yield client

    app.dependency_overrides.clear()


def _auth_header(user_id: str) -> Dict[str, str]:
    token = token_manager.create_token(subject=user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(regular_user: User) -> Dict[str, str]:
    return _auth_header(regular_user.id)


@pytest.fixture
def admin_headers(admin_user: User) -> Dict[str, str]:
    return _auth_header(admin_user.id)
