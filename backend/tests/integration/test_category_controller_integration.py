"""
Integration tests for the category endpoints: public reads, ADMIN-only
writes, paging and delete conflicts.
"""

import random

import pytest

from tests.config.fixtures import auth_headers, create_category, create_product


@pytest.mark.integration
@pytest.mark.controllers
@pytest.mark.categories
class TestCategoryReads:
    def test_list_is_public(self, client):
        first = create_category("Computing")
        second = create_category("Gardening")

        response = client.get("/categories")

        assert response.status_code == 200
        assert response.get_json() == [
            {"id": first, "name": "Computing"},
            {"id": second, "name": "Gardening"},
        ]

    def test_find_by_id(self, client):
        category_id = create_category("Computing")
        response = client.get(f"/categories/{category_id}")
        assert response.status_code == 200
        assert response.get_json()["name"] == "Computing"

    def test_find_missing_has_standard_error_body(self, client):
        response = client.get("/categories/999")

        assert response.status_code == 404
        body = response.get_json()
        assert body["status"] == 404
        assert body["error"] == "Not found"
        assert body["message"] == "Object not found! Id: 999, Type: Category"
        assert body["path"] == "/categories/999"
        assert isinstance(body["timestamp"], int)


@pytest.mark.integration
@pytest.mark.controllers
@pytest.mark.categories
class TestCategoryWrites:
    def test_admin_inserts(self, client, admin_token):
        response = client.post(
            "/categories", json={"id": 77, "name": "Gardening"}, headers=auth_headers(admin_token)
        )

        assert response.status_code == 201
        location = response.headers["Location"]
        new_id = int(location.rsplit("/", 1)[1])
        assert location.endswith(f"/categories/{new_id}")
        assert new_id != 77
        assert client.get(location).get_json() == {"id": new_id, "name": "Gardening"}

    def test_client_role_cannot_insert(self, client, client_token):
        response = client.post(
            "/categories", json={"name": "Gardening"}, headers=auth_headers(client_token)
        )
        assert response.status_code == 403
        assert response.get_json()["error"] == "Access denied"

    def test_anonymous_cannot_insert(self, client):
        assert client.post("/categories", json={"name": "Gardening"}).status_code == 403

    def test_invalid_name_lists_field_errors(self, client, admin_token):
        response = client.post(
            "/categories", json={"name": "abc"}, headers=auth_headers(admin_token)
        )

        assert response.status_code == 422
        body = response.get_json()
        assert body["errors"] == [
            {"fieldName": "name", "message": "Length must be between 5 and 80 characters"}
        ]

    def test_non_object_body(self, client, admin_token):
        response = client.post(
            "/categories", data="[1, 2]", content_type="application/json",
            headers=auth_headers(admin_token),
        )
        assert response.status_code == 400

    def test_update(self, client, admin_token):
        category_id = create_category("Computing")

        response = client.put(
            f"/categories/{category_id}",
            json={"id": 999, "name": "Informatics"},
            headers=auth_headers(admin_token),
        )

        assert response.status_code == 204
        assert client.get(f"/categories/{category_id}").get_json()["name"] == "Informatics"

    def test_update_missing(self, client, admin_token):
        response = client.put(
            "/categories/999", json={"name": "Informatics"}, headers=auth_headers(admin_token)
        )
        assert response.status_code == 404

    def test_delete(self, client, admin_token):
        category_id = create_category("Computing")

        response = client.delete(f"/categories/{category_id}", headers=auth_headers(admin_token))

        assert response.status_code == 204
        assert client.get(f"/categories/{category_id}").status_code == 404

    def test_delete_missing_twice(self, client, admin_token):
        for _ in range(2):
            response = client.delete("/categories/999", headers=auth_headers(admin_token))
            assert response.status_code == 404

    def test_delete_with_products_is_conflict(self, client, admin_token):
        category_id = create_category("Computing")
        create_product("Computer", "2000.00", [category_id])

        response = client.delete(f"/categories/{category_id}", headers=auth_headers(admin_token))

        assert response.status_code == 409
        body = response.get_json()
        assert body["error"] == "Data integrity"
        assert body["message"] == "Cannot delete a category that has products"
        assert client.get(f"/categories/{category_id}").status_code == 200


@pytest.mark.integration
@pytest.mark.controllers
@pytest.mark.pagination
class TestCategoryPage:
    @pytest.fixture
    def fifteen_categories(self, fresh_schema):
        names = [f"Category {letter}" for letter in "ABCDEFGHIJKLMNO"]
        shuffled = names[:]
        random.Random(7).shuffle(shuffled)
        for name in shuffled:
            create_category(name)
        return sorted(names)

    def test_defaults_give_prefix_of_ascending_order(self, client, fifteen_categories):
        response = client.get("/categories/page")

        assert response.status_code == 200
        body = response.get_json()
        assert [c["name"] for c in body["content"]] == fifteen_categories[:12]
        assert body["totalElements"] == 15
        assert body["totalPages"] == 2
        assert body["number"] == 0
        assert body["size"] == 12
        assert body["first"] is True
        assert body["last"] is False
        assert body["sort"] == {"orderBy": "name", "direction": "ASC"}

    def test_second_page_and_desc(self, client, fifteen_categories):
        body = client.get("/categories/page?page=1&linesPerPage=12").get_json()
        assert [c["name"] for c in body["content"]] == fifteen_categories[12:]
        assert body["last"] is True

        body = client.get("/categories/page?linesPerPage=3&direction=DESC").get_json()
        assert [c["name"] for c in body["content"]] == fifteen_categories[::-1][:3]

    def test_page_beyond_end_is_empty(self, client, fifteen_categories):
        body = client.get("/categories/page?page=5").get_json()
        assert body["content"] == []
        assert body["totalElements"] == 15

    @pytest.mark.parametrize(
        "query",
        [
            "direction=asc",
            "direction=SIDEWAYS",
            "orderBy=bogus",
            "page=-1",
            "linesPerPage=0",
            "page=first",
            "page=10000000000000000000",
            "linesPerPage=10000000000000000000",
        ],
    )
    def test_bad_parameters(self, client, fifteen_categories, query):
        response = client.get(f"/categories/page?{query}")
        assert response.status_code == 400
        assert response.get_json()["error"] == "Bad request"
