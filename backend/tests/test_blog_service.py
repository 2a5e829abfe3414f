"""
Burger Boots Backend — Blog Service Tests
===========================================

What:  Blog form normalization, category checks, lifecycle and search.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from burgerboots.exceptions import (
    InvalidCategoryError,
    MissingRequiredFieldError,
    NotFoundError,
    ValidationError,
)
from burgerboots.models.blog import Blog
from burgerboots.services.blog_service import BlogService, normalize_tags
from burgerboots.services.media_store import MediaStore

CATEGORIES = ("Technology", "Travel", "Food", "Lifestyle", "Health", "Cooking")


def blog_fields(**overrides):
    fields = {
        "title": "Five Burgers Worth the Trip",
        "body": "A road trip through the best burger joints in the north.",
        "category": "Food",
        "tags": ["burgers", "road trip"],
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def service(temp_storage):
    return BlogService(
        categories=CATEGORIES,
        default_author="House Writer",
        media=MediaStore(storage_root=temp_storage),
        page_size=10,
    )


async def add_blogs(db, *posts):
    """Inserts (title, body, category, tags) tuples, the last one newest."""
    start = datetime(2024, 3, 1, tzinfo=timezone.utc)
    for i, (title, body, category, tags) in enumerate(posts):
        blog = Blog(
            title=title,
            body=body,
            author="Tester",
            category=category,
            created_at=start + timedelta(hours=i),
            updated_at=start + timedelta(hours=i),
        )
        blog.tags = list(tags)
        db.add(blog)
    await db.flush()


class TestNormalizeTags:

    def test_comma_separated_string(self):
        assert normalize_tags(" burgers, spicy ,,bbq ") == ["burgers", "spicy", "bbq"]

    def test_repeated_fields(self):
        assert normalize_tags(["a, b", "c", "  "]) == ["a", "b", "c"]

    def test_absent(self):
        assert normalize_tags(None) == []


class TestCreate:

    async def test_create_defaults(self, service, db_session):
        blog = await service.create(db_session, blog_fields(tags=None))

        assert blog.author == "House Writer"
        assert blog.tags == []
        assert blog.featured is False
        assert blog.image == ""

    async def test_blank_author_gets_default(self, service, db_session):
        blog = await service.create(db_session, blog_fields(author="   "))
        assert blog.author == "House Writer"

    async def test_tags_keep_order(self, service, db_session):
        blog = await service.create(db_session, blog_fields(tags=["grill, smoke", "bbq"]))

        fetched = await service.get(db_session, str(blog.id))
        assert fetched.tags == ["grill", "smoke", "bbq"]

    @pytest.mark.parametrize("raw,expected", [("true", True), ("1", True), ("false", False), ("", False)])
    async def test_featured_form_values(self, service, db_session, raw, expected):
        blog = await service.create(db_session, blog_fields(featured=raw))
        assert blog.featured is expected

    async def test_invalid_category_lists_valid_set(self, service, db_session):
        with pytest.raises(InvalidCategoryError) as exc_info:
            await service.create(db_session, blog_fields(category="Gardening"))

        body = exc_info.value.payload()
        assert exc_info.value.status_code == 400
        assert body["validCategories"] == list(CATEGORIES)
        assert body["errors"][0]["field"] == "category"

    async def test_category_is_case_sensitive(self, service, db_session):
        with pytest.raises(InvalidCategoryError):
            await service.create(db_session, blog_fields(category="food"))

    async def test_missing_required_fields(self, service, db_session):
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            await service.create(db_session, {"title": "Only a title", "body": " "})

        assert exc_info.value.missing == ["body", "category"]

    async def test_title_too_long(self, service, db_session):
        with pytest.raises(ValidationError) as exc_info:
            await service.create(db_session, blog_fields(title="t" * 201))

        assert exc_info.value.errors[0]["field"] == "title"


class TestUpdate:

    async def test_partial_update(self, service, db_session):
        created = await service.create(db_session, blog_fields(author="Ayesha"))

        updated = await service.update(
            db_session,
            str(created.id),
            {"tags": "grill", "featured": "true", "title": None},
        )

        assert updated.tags == ["grill"]
        assert updated.featured is True
        assert updated.title == created.title
        assert updated.author == "Ayesha"

    async def test_update_rejects_unknown_category(self, service, db_session):
        created = await service.create(db_session, blog_fields())

        with pytest.raises(InvalidCategoryError):
            await service.update(db_session, str(created.id), {"category": "Gardening"})

    async def test_update_unknown_id(self, service, db_session):
        with pytest.raises(NotFoundError):
            await service.update(db_session, str(uuid4()), {"title": "New"})

    async def test_delete(self, service, db_session):
        created = await service.create(db_session, blog_fields())

        result = await service.delete(db_session, str(created.id))

        assert result.message == "Blog deleted successfully"
        with pytest.raises(NotFoundError):
            await service.get(db_session, str(created.id))


class TestListing:

    async def test_search_is_a_substring_of_title_body_or_tag(self, service, db_session):
        await add_blogs(
            db_session,
            ("Sauce Guide", "Our spicy sauce, step by step.", "Cooking", []),
            ("Weekend Trip", "Mountains and lakes.", "Travel", ["Spicy Food"]),
            ("SPICY Wings", "Crispy.", "Food", []),
            ("Salad Days", "Greens only.", "Health", ["fresh"]),
        )

        result = await service.list_blogs(db_session, search="spic")

        assert [b.title for b in result.blogs] == ["SPICY Wings", "Weekend Trip", "Sauce Guide"]
        assert result.pagination.total_items == 3

    async def test_search_with_category(self, service, db_session):
        await add_blogs(
            db_session,
            ("Sauce Guide", "Our spicy sauce.", "Cooking", []),
            ("SPICY Wings", "Crispy.", "Food", []),
        )

        result = await service.list_blogs(db_session, category="Food", search="spicy")

        assert [b.title for b in result.blogs] == ["SPICY Wings"]

    async def test_category_is_exact(self, service, db_session):
        await add_blogs(
            db_session,
            ("A", "a", "Food", []),
            ("B", "b", "Cooking", []),
        )

        result = await service.list_blogs(db_session, category="Foo")

        assert result.blogs == []
        assert result.pagination.total_pages == 0

    async def test_pagination(self, service, db_session):
        await add_blogs(db_session, *[(f"Post {i}", "body", "Food", []) for i in range(3)])

        result = await service.list_blogs(db_session, page="2", limit="2")

        assert [b.title for b in result.blogs] == ["Post 0"]
        assert result.pagination.total_pages == 2
        assert result.pagination.has_prev is True

    def test_list_categories(self, service):
        assert service.list_categories().categories == list(CATEGORIES)
