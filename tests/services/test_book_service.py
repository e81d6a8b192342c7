# tests/services/test_book_service.py
from unittest.mock import patch

import pytest

from bookr.core.config import settings
from bookr.core.exceptions import NotAuthorized, ResourceNotFound, ValidationError
from bookr.models.tag_model import Tag, TagType
from bookr.schemas.book_schema import BookCreate, BookUpdate, ExtractedBookInfo
from bookr.services.book_service import book_service
from bookr.services.tag_service import tag_service
from bookr.utils.validators import is_valid_isbn
from tests.mocks.mock_book_info_extractor import FakeBookInfoExtractor

pytestmark = pytest.mark.asyncio


def new_book(**overrides) -> BookCreate:
    data = {"title": "Clean Code", "author": "Robert C. Martin"}
    data.update(overrides)
    return BookCreate(**data)


# ==================== ISBN ====================


@pytest.mark.parametrize(
    "isbn",
    [
        "979-0-306-40615-7",
        "9780306406157",
        "0-306-40615-2",
        "0-306-40615-X",
        "0-306-40615-x",
        "",
        "   ",
    ],
)
async def test_valid_isbns(isbn):
    assert is_valid_isbn(isbn)


@pytest.mark.parametrize(
    "isbn",
    ["12345", "X-306-40615-2", "978030640615", "97803064061570",
        "٠٣٠٦٤٠٦١٥٢", "９７８０３０６４０６１５７"],
)
async def test_invalid_isbns(isbn):
    assert not is_valid_isbn(isbn)


# ==================== create_book ====================


async def test_create_book_snapshots_recommender(store, regular_user):
    book = await book_service.create_book(
        store, book_data=new_book(), current_user=regular_user
    )

    assert book.recommender_id == regular_user.id
    assert book.recommender_name == regular_user.name
    assert store.books[0].id == book.id


async def test_create_book_defaults_cover_url(store, regular_user):
    book = await book_service.create_book(
        store, book_data=new_book(), current_user=regular_user
    )

    assert book.cover_url.startswith("https://picsum.photos/seed/")
    assert book.cover_url.endswith("/300/400")


async def test_create_book_keeps_given_cover_url(store, regular_user):
    book = await book_service.create_book(
        store,
        book_data=new_book(cover_url="https://img.example.com/c.jpg"),
        current_user=regular_user,
    )

    assert book.cover_url == "https://img.example.com/c.jpg"


async def test_create_book_invalid_isbn_leaves_store_untouched(store, regular_user):
    before = list(store.books)

    with pytest.raises(ValidationError, match="ISBN"):
        await book_service.create_book(
            store, book_data=new_book(isbn="12345"), current_user=regular_user
        )

    assert store.books == before


async def test_create_book_dedupes_tags_by_name(store, regular_user):
    tags = [
        Tag(id="tag-1", name="计算机科学", type=TagType.SYSTEM),
        Tag(id="u1", name="Go", type=TagType.USER),
        Tag(id="u2", name="go", type=TagType.USER),
    ]

    book = await book_service.create_book(
        store, book_data=new_book(tags=tags), current_user=regular_user
    )

    assert [t.id for t in book.tags] == ["tag-1", "u1"]


async def test_create_book_dedupes_tags_differing_by_whitespace(store, regular_user):
    tags = [
        Tag(id="u1", name="Go", type=TagType.USER),
        Tag(id="u2", name="Go ", type=TagType.USER),
    ]

    book = await book_service.create_book(
        store, book_data=new_book(tags=tags), current_user=regular_user
    )

    assert [(t.id, t.name) for t in book.tags] == [("u1", "Go")]


# ==================== update_book ====================


async def test_update_book_merges_fields(store, regular_user):
    book = await book_service.update_book(
        store,
        book_id="book-1",
        book_data=BookUpdate(reason="Still the best"),
        current_user=regular_user,
    )

    assert book.reason == "Still the best"
    assert book.title == "深入理解计算机系统"
    assert [t.id for t in book.tags] == ["tag-1", "tag-4", "user-tag-1"]


async def test_update_book_by_other_user_fails(store, other_user):
    with pytest.raises(NotAuthorized):
        await book_service.update_book(
            store,
            book_id="book-1",
            book_data=BookUpdate(title="Hacked"),
            current_user=other_user,
        )


async def test_admin_can_update_any_book(store, admin_user):
    book = await book_service.update_book(
        store,
        book_id="book-1",
        book_data=BookUpdate(publisher="New Publisher"),
        current_user=admin_user,
    )

    assert book.publisher == "New Publisher"
    assert book.recommender_id == "user-1"


async def test_update_book_invalid_isbn_is_rejected(store, regular_user):
    with pytest.raises(ValidationError):
        await book_service.update_book(
            store,
            book_id="book-1",
            book_data=BookUpdate(isbn="12345", title="Changed"),
            current_user=regular_user,
        )

    assert store.books[0].title == "深入理解计算机系统"


async def test_update_missing_book(store, admin_user):
    with pytest.raises(ResourceNotFound):
        await book_service.update_book(
            store,
            book_id="missing",
            book_data=BookUpdate(title="X"),
            current_user=admin_user,
        )


# ==================== delete_book ====================


async def test_delete_book_by_owner(store, regular_user):
    await book_service.delete_book(store, book_id="book-1", current_user=regular_user)

    assert [b.id for b in store.books] == ["book-2"]


async def test_delete_book_by_other_user_fails(store, regular_user):
    with pytest.raises(NotAuthorized):
        await book_service.delete_book(store, book_id="book-2", current_user=regular_user)


async def test_delete_missing_book(store, admin_user):
    with pytest.raises(ResourceNotFound):
        await book_service.delete_book(store, book_id="missing", current_user=admin_user)


async def test_deleting_system_tag_does_not_touch_books(store, admin_user):
    await tag_service.delete_system_tag(store, tag_id="tag-4", current_user=admin_user)

    book = await book_service.get_book_by_id(store, book_id="book-1")
    assert [t.name for t in book.tags] == ["计算机科学", "五星推荐", "CSAPP"]
    assert all(t.id != "tag-4" for t in store.system_tags)


# ==================== listing ====================


async def test_public_books_newest_first(store, regular_user):
    created = await book_service.create_book(
        store, book_data=new_book(), current_user=regular_user
    )

    result = await book_service.get_public_books(store)

    assert [b.id for b in result.items] == [created.id, "book-1", "book-2"]
    assert result.total == 3


async def test_public_books_search(store):
    result = await book_service.get_public_books(store, query="csapp")

    assert [b.id for b in result.items] == ["book-1"]
    assert result.query == "csapp"


async def test_user_books_only_own(store, regular_user):
    result = await book_service.get_user_books(store, user_id=regular_user.id)

    assert [b.id for b in result.items] == ["book-1"]


async def test_admin_book_list_requires_admin(store, regular_user, admin_user):
    with pytest.raises(NotAuthorized):
        await book_service.get_books(store, current_user=regular_user)

    result = await book_service.get_books(store, current_user=admin_user, query="三体")
    assert [b.id for b in result.items] == ["book-2"]


# ==================== recognize_cover ====================


async def test_recognize_cover_returns_extracted_info():
    extractor = FakeBookInfoExtractor()

    info = await book_service.recognize_cover(
        extractor=extractor, image=b"\xff\xd8img", mime_type="image/png"
    )

    assert info.title == "Clean Code"
    assert extractor.calls == [(b"\xff\xd8img", "image/png")]


async def test_recognize_cover_failure_returns_none():
    extractor = FakeBookInfoExtractor()
    extractor.fail_with("timeout")

    assert await book_service.recognize_cover(extractor=extractor, image=b"img") is None


async def test_recognize_cover_empty_result_returns_none():
    extractor = FakeBookInfoExtractor(result=ExtractedBookInfo())

    assert await book_service.recognize_cover(extractor=extractor, image=b"img") is None


async def test_recognize_cover_rejects_empty_image():
    with pytest.raises(ValidationError):
        await book_service.recognize_cover(extractor=FakeBookInfoExtractor(), image=b"")


async def test_recognize_cover_rejects_oversize_image():
    extractor = FakeBookInfoExtractor()

    with patch.object(settings, "MAX_REQUEST_SIZE", 4):
        with pytest.raises(ValidationError):
            await book_service.recognize_cover(extractor=extractor, image=b"12345")

    assert extractor.calls == []
