# bookr/db/store.py
"""
In-memory store.

One ``InMemoryStore`` is created per process by the application lifespan
and handed to request handlers through the ``get_store`` dependency. Tests
build their own instance per test and override the dependency.
"""

import asyncio
import logging
from typing import List

from fastapi import Request

from bookr.db.fixtures import seed_books, seed_system_tags, seed_users
from bookr.models.book_model import Book
from bookr.models.tag_model import Tag
from bookr.models.user_model import User

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Holds the user, book and system tag collections."""

    def __init__(self):
        self.users: List[User] = []
        self.books: List[Book] = []
        self.system_tags: List[Tag] = []
        # Serialises writes from concurrent requests.
        self.lock = asyncio.Lock()
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    def seed(self) -> "InMemoryStore":
        """Replace all collections with the fixture data."""
        self.users = seed_users()
        self.books = seed_books()
        self.system_tags = seed_system_tags()
        logger.info(
            f"Store seeded: {len(self.users)} users, {len(self.books)} books, "
            f"{len(self.system_tags)} system tags"
        )
        return self

    async def connect(self, seed: bool = True) -> None:
        if seed:
            self.seed()
        self._connected = True
        logger.info("In-memory store ready")

    async def disconnect(self) -> None:
        self.users.clear()
        self.books.clear()
        self.system_tags.clear()
        self._connected = False
        logger.info("In-memory store released")


def get_store(request: Request) -> InMemoryStore:
    """FastAPI dependency returning the store owned by the application."""
    return request.app.state.store
