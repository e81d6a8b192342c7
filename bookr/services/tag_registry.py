# bookr/services/tag_registry.py
"""
Tag reconciliation and draft editing.

All functions here are pure: they take sequences of ``Tag`` values and
return new lists without touching the store.

Two identity rules apply. Reconciliation and display collapse tags by
case-insensitive name (``same_tag_name``). Editing a draft toggles
specific entries by id (``same_tag_identity``).
"""

import uuid
from typing import Dict, Iterable, List, Sequence

from bookr.core.exceptions import ValidationError
from bookr.models.tag_model import Tag, TagType, same_tag_identity, same_tag_name


def reconcile(system_tags: Iterable[Tag], book_tags: Iterable[Tag]) -> List[Tag]:
    """
    Merge system tags and book-derived tags into one list keyed by
    lowercase name.

    System tags are inserted first, then book tags. A repeated name keeps
    the position where it was first seen but takes the value inserted
    last, so a user tag named like a system tag replaces that entry in
    place.
    """
    merged: Dict[str, Tag] = {}
    for tag in [*system_tags, *book_tags]:
        merged[tag.name_key] = tag
    return list(merged.values())


def user_generated(all_tags: Iterable[Tag], system_tags: Iterable[Tag]) -> List[Tag]:
    """
    User tags whose name matches none of the *current* system tags.

    Checked against ``system_tags`` at call time, so removing or renaming
    a system tag moves absorbed user tags back into this list.
    """
    system_names = {tag.name_key for tag in system_tags}
    return [
        tag
        for tag in all_tags
        if tag.type == TagType.USER and tag.name_key not in system_names
    ]


def make_system_tag(name: str) -> Tag:
    """Build a new system tag. Names are not checked for duplicates."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Tag name cannot be empty.")
    return Tag(id=str(uuid.uuid4()), name=cleaned, type=TagType.SYSTEM)


def toggle_tag_on_draft(draft_tags: Sequence[Tag], tag: Tag) -> List[Tag]:
    """Remove ``tag`` from the draft if an entry with its id is present, else append it."""
    if any(same_tag_identity(t, tag) for t in draft_tags):
        return [t for t in draft_tags if not same_tag_identity(t, tag)]
    return [*draft_tags, tag]


def add_user_tag(draft_tags: Sequence[Tag], raw_name: str) -> List[Tag]:
    """
    Append a free-form user tag to the draft.

    Blank input and names already on the draft (ignoring case) leave the
    draft unchanged.
    """
    name = (raw_name or "").strip()
    if not name:
        return list(draft_tags)

    candidate = Tag(id=str(uuid.uuid4()), name=name, type=TagType.USER)
    if any(same_tag_name(t, candidate) for t in draft_tags):
        return list(draft_tags)
    return [*draft_tags, candidate]


def remove_tag_from_draft(draft_tags: Sequence[Tag], tag_id: str) -> List[Tag]:
    return [t for t in draft_tags if t.id != tag_id]


def dedupe_by_name(tags: Iterable[Tag]) -> List[Tag]:
    """Drop later tags whose name repeats an earlier one (ignoring case)."""
    seen = set()
    result: List[Tag] = []
    for tag in tags:
        if tag.name_key in seen:
            continue
        seen.add(tag.name_key)
        result.append(tag)
    return result
