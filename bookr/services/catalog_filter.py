from typing import List

from bookr.models.book_model import Book


def _matches(book: Book, needle: str) -> bool:
    return (
        needle in book.title.lower()
        or needle in book.author.lower()
        or needle in book.recommender_name.lower()
        or any(needle in tag.name.lower() for tag in book.tags)
    )


def filter_books(books: List[Book], query: str) -> List[Book]:
    """
    Keep the books where the query is a case-insensitive substring of the
    title, author, recommender name or any tag name.

    An empty query returns ``books`` itself. The query is not trimmed and
    results keep their input order.
    """
    if query == "":
        return books
    needle = query.lower()
    return [book for book in books if _matches(book, needle)]
