# tests/services/test_tag_service.py
import pytest

from bookr.core.exceptions import NotAuthorized, ValidationError
from bookr.models.tag_model import Tag, TagType
from bookr.schemas.book_schema import BookCreate
from bookr.services.book_service import book_service
from bookr.services.tag_service import tag_service

pytestmark = pytest.mark.asyncio


async def test_get_system_tags_seeded(store):
    tags = await tag_service.get_system_tags(store)

    assert [t.id for t in tags] == ["tag-1", "tag-2", "tag-3", "tag-4", "tag-5"]


async def test_all_tags_include_book_tags(store):
    tags = await tag_service.get_all_tags(store)

    names = [t.name for t in tags]
    assert names == ["计算机科学", "文学", "历史", "五星推荐", "四星推荐", "CSAPP"]


async def test_user_tag_overrides_system_entry_in_place(store, regular_user):
    await book_service.create_book(
        store,
        book_data=BookCreate(
            title="史记",
            author="司马迁",
            tags=[Tag(id="u-hist", name="历史", type=TagType.USER)],
        ),
        current_user=regular_user,
    )

    tags = await tag_service.get_all_tags(store)

    assert tags[2].id == "u-hist"
    assert tags[2].type == TagType.USER
    assert len([t for t in tags if t.name == "历史"]) == 1


async def test_overview_splits_user_generated(store):
    overview = await tag_service.get_tag_overview(store)

    assert len(overview.system_tags) == 5
    assert [t.name for t in overview.user_generated_tags] == ["CSAPP"]
    assert len(overview.all_tags) == 6


async def test_add_system_tag(store, admin_user):
    tag = await tag_service.add_system_tag(store, name="  科幻 ", current_user=admin_user)

    assert tag.name == "科幻"
    assert tag.type == TagType.SYSTEM
    assert store.system_tags[-1].id == tag.id


async def test_add_system_tag_allows_duplicate_names(store, admin_user):
    await tag_service.add_system_tag(store, name="文学", current_user=admin_user)

    assert len(store.system_tags) == 6
    all_tags = await tag_service.get_all_tags(store)
    assert len([t for t in all_tags if t.name == "文学"]) == 1


async def test_add_system_tag_rejects_blank(store, admin_user):
    with pytest.raises(ValidationError):
        await tag_service.add_system_tag(store, name="   ", current_user=admin_user)

    assert len(store.system_tags) == 5


async def test_add_system_tag_requires_admin(store, regular_user):
    with pytest.raises(NotAuthorized):
        await tag_service.add_system_tag(store, name="X", current_user=regular_user)


async def test_delete_system_tag_is_noop_for_unknown_id(store, admin_user):
    await tag_service.delete_system_tag(store, tag_id="missing", current_user=admin_user)

    assert len(store.system_tags) == 5


async def test_deleted_system_tag_moves_user_tag_back(store, admin_user, regular_user):
    await book_service.create_book(
        store,
        book_data=BookCreate(
            title="Dune",
            author="Frank Herbert",
            tags=[Tag(id="u-hist", name="历史", type=TagType.USER)],
        ),
        current_user=regular_user,
    )
    overview = await tag_service.get_tag_overview(store)
    assert "u-hist" not in [t.id for t in overview.user_generated_tags]

    await tag_service.delete_system_tag(store, tag_id="tag-3", current_user=admin_user)

    overview = await tag_service.get_tag_overview(store)
    assert "u-hist" in [t.id for t in overview.user_generated_tags]
