"""
Burger Boots Backend — API Endpoint Tests
===========================================

What:  End-to-end HTTP tests through the FastAPI app (multipart forms, error
       envelopes, media serving, health).
How:   httpx AsyncClient over ASGITransport; SQLite tables are rebuilt per test.
"""

from uuid import uuid4

import pytest


PRODUCT_FORM = {
    "name": "Bacon Burger",
    "price": "12.50",
    "quantity": "4",
    "description": "Smoky bacon and cheddar",
    "category": "Burgers",
}

BLOG_FORM = {
    "title": "Smash Burgers at Home",
    "body": "Press hard, flip once, add a spicy sauce.",
    "category": "Cooking",
    "tags": ["burgers", "grill"],
}


async def create_product(client, **overrides):
    form = {**PRODUCT_FORM, **overrides}
    response = await client.post("/api/products", data=form)
    assert response.status_code == 201, response.text
    return response.json()


class TestProductEndpoints:

    async def test_create_with_image_and_serve_it(self, test_client, sample_image_bytes):
        response = await test_client.post(
            "/api/products",
            data=PRODUCT_FORM,
            files={"image": ("bacon.jpg", sample_image_bytes, "image/jpeg")},
        )

        assert response.status_code == 201
        product = response.json()
        assert product["image"].startswith("/uploads/")
        assert {"createdAt", "updatedAt"} <= set(product)

        image = await test_client.get(product["image"])
        assert image.status_code == 200
        assert image.content == sample_image_bytes

    async def test_get_update_delete(self, test_client):
        product = await create_product(test_client)

        fetched = await test_client.get(f"/api/products/{product['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Bacon Burger"

        updated = await test_client.put(f"/api/products/{product['id']}", data={"price": "15"})
        assert updated.status_code == 200
        assert updated.json()["price"] == 15
        assert updated.json()["quantity"] == 4

        deleted = await test_client.delete(f"/api/products/{product['id']}")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Product deleted successfully", "id": product["id"]}

        gone = await test_client.get(f"/api/products/{product['id']}")
        assert gone.status_code == 404

    async def test_delete_keeps_image_file(self, test_client, sample_image_bytes):
        response = await test_client.post(
            "/api/products",
            data=PRODUCT_FORM,
            files={"image": ("bacon.png", sample_image_bytes, "image/png")},
        )
        product = response.json()

        await test_client.delete(f"/api/products/{product['id']}")

        image = await test_client.get(product["image"])
        assert image.status_code == 200

    @pytest.mark.parametrize("product_id", ["not-an-id", str(uuid4())])
    async def test_unknown_product_is_404(self, test_client, product_id):
        response = await test_client.get(f"/api/products/{product_id}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    async def test_missing_fields_is_400(self, test_client):
        response = await test_client.post("/api/products", data={"name": "Bacon Burger"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "missing_required_field"
        assert body["missingFields"] == ["price", "quantity"]

    async def test_invalid_price_is_400(self, test_client):
        response = await test_client.post("/api/products", data={**PRODUCT_FORM, "price": "-1"})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "price", "message": "Price cannot be negative"}]

    async def test_unsupported_image_type_is_415(self, test_client):
        response = await test_client.post(
            "/api/products",
            data=PRODUCT_FORM,
            files={"image": ("dance.gif", b"GIF89a", "image/gif")},
        )

        assert response.status_code == 415
        assert "not supported" in response.json()["message"]

        listing = await test_client.get("/api/products")
        assert listing.json()["products"] == []

    async def test_listing_shape(self, test_client):
        await create_product(test_client, name="Bacon Burger")
        await create_product(test_client, name="Bacon Burger Deluxe", category="Specials")

        response = await test_client.get("/api/products", params={"search": "Bacon Burger"})

        assert response.status_code == 200
        body = response.json()
        assert [p["name"] for p in body["products"]] == ["Bacon Burger"]
        assert body["pagination"] == {
            "currentPage": 1,
            "totalPages": 1,
            "totalItems": 1,
            "hasNext": False,
            "hasPrev": False,
        }
        assert body["categories"] == ["Burgers", "Specials"]

    async def test_invalid_pagination_returns_empty_listing(self, test_client):
        response = await test_client.get("/api/products", params={"page": "0"})

        assert response.status_code == 400
        body = response.json()
        assert body["products"] == []
        assert body["pagination"]["totalPages"] == 0

    async def test_huge_page_is_an_empty_page(self, test_client):
        await create_product(test_client)

        response = await test_client.get("/api/products", params={"page": "10000000000000000000"})

        assert response.status_code == 200
        body = response.json()
        assert body["products"] == []
        assert body["pagination"]["totalItems"] == 1
        assert body["pagination"]["hasNext"] is False
        assert body["pagination"]["hasPrev"] is True

    async def test_non_numeric_pagination_uses_defaults(self, test_client):
        response = await test_client.get("/api/products", params={"page": "abc", "limit": "xyz"})

        assert response.status_code == 200
        assert response.json()["pagination"]["currentPage"] == 1

    async def test_list_by_category(self, test_client):
        await create_product(test_client, category="Burgers")

        response = await test_client.get("/api/products/category/burg")

        assert response.status_code == 200
        assert response.json()["category"] == "burg"
        assert len(response.json()["products"]) == 1


class TestBlogEndpoints:

    async def test_create_and_fetch(self, test_client):
        response = await test_client.post("/api/blogs", data=BLOG_FORM)

        assert response.status_code == 201
        blog = response.json()
        assert blog["tags"] == ["burgers", "grill"]
        assert blog["featured"] is False
        assert blog["author"]

        fetched = await test_client.get(f"/api/blogs/{blog['id']}")
        assert fetched.json()["title"] == BLOG_FORM["title"]

    async def test_create_without_tags(self, test_client):
        response = await test_client.post(
            "/api/blogs", data={"title": "T", "body": "B", "category": "Food"}
        )

        assert response.status_code == 201
        blog = response.json()
        assert blog["tags"] == []
        assert blog["author"] == "Sana Tariq"

        fetched = await test_client.get(f"/api/blogs/{blog['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["tags"] == []

    async def test_huge_limit_is_clamped(self, test_client):
        await test_client.post("/api/blogs", data=BLOG_FORM)

        response = await test_client.get("/api/blogs", params={"limit": "10000000000000000000"})

        assert response.status_code == 200
        assert len(response.json()["blogs"]) == 1
        assert response.json()["pagination"]["totalPages"] == 1

    async def test_invalid_category(self, test_client):
        response = await test_client.post("/api/blogs", data={**BLOG_FORM, "category": "Gardening"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "invalid_category"
        assert "Cooking" in body["validCategories"]

    async def test_categories(self, test_client):
        response = await test_client.get("/api/blogs/categories")

        assert response.status_code == 200
        assert response.json()["categories"] == [
            "Technology", "Travel", "Food", "Lifestyle", "Health", "Cooking",
        ]

    async def test_search_and_category(self, test_client):
        await test_client.post("/api/blogs", data=BLOG_FORM)
        await test_client.post(
            "/api/blogs",
            data={**BLOG_FORM, "title": "Lisbon", "body": "Tiles and trams.", "category": "Travel", "tags": "city"},
        )

        response = await test_client.get("/api/blogs", params={"search": "SPICY", "category": "Cooking"})

        assert response.status_code == 200
        assert [b["title"] for b in response.json()["blogs"]] == ["Smash Burgers at Home"]

    async def test_update_and_delete(self, test_client):
        blog = (await test_client.post("/api/blogs", data=BLOG_FORM)).json()

        updated = await test_client.put(f"/api/blogs/{blog['id']}", data={"featured": "true"})
        assert updated.status_code == 200
        assert updated.json()["featured"] is True
        assert updated.json()["tags"] == ["burgers", "grill"]

        deleted = await test_client.delete(f"/api/blogs/{blog['id']}")
        assert deleted.json()["message"] == "Blog deleted successfully"

    async def test_invalid_pagination_uses_blogs_key(self, test_client):
        response = await test_client.get("/api/blogs", params={"limit": "-1"})

        assert response.status_code == 400
        assert response.json()["blogs"] == []


class TestServiceEndpoints:

    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body

    async def test_root(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "Burger Boots API server is running"

    async def test_missing_upload_is_404(self, test_client):
        response = await test_client.get("/uploads/does-not-exist.jpg")
        assert response.status_code == 404

    async def test_request_id_header_is_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"
