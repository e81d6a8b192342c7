# bookr/db/fixtures.py
"""Seed data loaded into a fresh store."""

from typing import List

from bookr.models.book_model import Book
from bookr.models.tag_model import Tag, TagType
from bookr.models.user_model import User, UserRole


def seed_users() -> List[User]:
    return [
        User(
            id="user-1",
            name="张三",
            major="计算机科学",
            phone="13800138000",
            email="user@example.com",
            expertise="前端开发, React",
            role=UserRole.USER,
            unique_link="https://bookr.example.com/invite/a1b2c3d4",
        ),
        User(
            id="admin-1",
            name="管理员",
            major="信息管理",
            phone="13900139000",
            email="admin@example.com",
            expertise="系统管理",
            role=UserRole.ADMIN,
            unique_link="https://bookr.example.com/invite/x9y8z7w6",
        ),
    ]


def seed_system_tags() -> List[Tag]:
    names = ["计算机科学", "文学", "历史", "五星推荐", "四星推荐"]
    return [
        Tag(id=f"tag-{i}", name=name, type=TagType.SYSTEM)
        for i, name in enumerate(names, start=1)
    ]


def seed_books() -> List[Book]:
    return [
        Book(
            id="book-1",
            title="深入理解计算机系统",
            author="Randal E. Bryant",
            publisher="机械工业出版社",
            isbn="9787111562286",
            publish_date="2016-11-01",
            reason="计算机专业的圣经，必读！",
            tags=[
                Tag(id="tag-1", name="计算机科学", type=TagType.SYSTEM),
                Tag(id="tag-4", name="五星推荐", type=TagType.SYSTEM),
                Tag(id="user-tag-1", name="CSAPP", type=TagType.USER),
            ],
            cover_url="https://picsum.photos/seed/csapp/300/400",
            recommender_id="user-1",
            recommender_name="张三",
        ),
        Book(
            id="book-2",
            title="三体",
            author="刘慈欣",
            publisher="重庆出版社",
            isbn="9787229160935",
            publish_date="2021-08-01",
            reason="中国科幻的巅峰之作。",
            tags=[
                Tag(id="tag-2", name="文学", type=TagType.SYSTEM),
                Tag(id="tag-4", name="五星推荐", type=TagType.SYSTEM),
            ],
            cover_url="https://picsum.photos/seed/santi/300/400",
            recommender_id="admin-1",
            recommender_name="管理员",
        ),
    ]
