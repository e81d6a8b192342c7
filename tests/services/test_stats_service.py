# tests/services/test_stats_service.py
import pytest

from bookr.models.book_model import Book
from bookr.models.user_model import User
from bookr.services.stats_service import aggregate, average_per_user, stats_service


def make_user(user_id: str, name: str) -> User:
    return User(
        id=user_id,
        name=name,
        email=f"{user_id}@example.com",
        unique_link=f"https://bookr.example.com/invite/{user_id}",
    )


def make_book(recommender_id: str) -> Book:
    return Book(title="T", author="A", recommender_id=recommender_id, recommender_name="x")


def test_empty_aggregate_has_zero_average():
    stats = aggregate([], [])

    assert stats.user_count == 0
    assert stats.book_count == 0
    assert stats.average_per_user == 0
    assert stats.per_user_counts == []


def test_average_per_user_rounds_to_two_decimals():
    assert average_per_user(0, 0) == 0
    assert average_per_user(5, 0) == 0
    assert average_per_user(2, 3) == 0.67
    assert average_per_user(4, 2) == 2


def test_per_user_counts_sorted_descending_and_stable():
    users = [make_user("a", "Ann"), make_user("b", "Bob"), make_user("c", "Cid")]
    books = [make_book("b"), make_book("c"), make_book("b"), make_book("ghost")]

    stats = aggregate(users, books)

    assert [(rc.name, rc.count) for rc in stats.per_user_counts] == [
        ("Bob", 2),
        ("Cid", 1),
        ("Ann", 0),
    ]
    assert stats.book_count == 4
    assert stats.average_per_user == 1.33


@pytest.mark.asyncio
async def test_get_stats_reads_store(store):
    stats = await stats_service.get_stats(store)

    assert stats.user_count == 2
    assert stats.book_count == 2
    assert stats.average_per_user == 1
    assert {rc.name for rc in stats.per_user_counts} == {"张三", "管理员"}
