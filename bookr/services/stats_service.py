import logging
from collections import Counter
from typing import Sequence

from bookr.db.store import InMemoryStore
from bookr.crud.book_crud import book_repository
from bookr.crud.user_crud import user_repository
from bookr.models.book_model import Book
from bookr.models.user_model import User
from bookr.schemas.stats_schema import RecommendationCount, StatsResponse

logger = logging.getLogger(__name__)


def average_per_user(book_count: int, user_count: int) -> float:
    if user_count == 0:
        return 0
    return round(book_count / user_count, 2)


def aggregate(users: Sequence[User], books: Sequence[Book]) -> StatsResponse:
    """Counts plus recommendations per user, most active first."""
    per_recommender = Counter(book.recommender_id for book in books)
    per_user = sorted(
        (
            RecommendationCount(name=user.name, count=per_recommender.get(user.id, 0))
            for user in users
        ),
        key=lambda rc: rc.count,
        reverse=True,
    )
    return StatsResponse(
        user_count=len(users),
        book_count=len(books),
        average_per_user=average_per_user(len(books), len(users)),
        per_user_counts=per_user,
    )


class StatsService:
    def __init__(self):
        self.user_repository = user_repository
        self.book_repository = book_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def get_stats(self, db: InMemoryStore) -> StatsResponse:
        users = await self.user_repository.list(db)
        books = await self.book_repository.list(db)
        stats = aggregate(users, books)
        self._logger.info(
            f"Stats computed: {stats.user_count} users, {stats.book_count} books"
        )
        return stats


stats_service = StatsService()
