"""
Tests para el catálogo de servicios y productos
"""
from uuid import UUID

import pytest

from app.modules.catalog.models import CatalogItem
from app.modules.catalog.seed_data import DEFAULT_CATALOG, populate_default_catalog


def _create(client, headers, **extra):
    payload = {"name": "Detailing", "type": "service", "cost": 1500, **extra}
    return client.post("/api/catalog", json=payload, headers=headers)


@pytest.fixture
def default_item(client, admin_headers):
    return _create(client, admin_headers, name="Oil Change", visibility="default").json()["data"]


class TestCatalogVisibility:

    def test_local_items_belong_to_creator(self, client, technician_headers, technician_user):
        response = _create(client, technician_headers)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["visibility"] == "local"
        assert data["account"] == str(technician_user.id)

    def test_default_items_have_no_account(self, default_item):
        assert default_item["visibility"] == "default"
        assert default_item["account"] is None

    def test_default_request_from_non_admin_stays_local(self, client, technician_headers, technician_user):
        response = _create(client, technician_headers, visibility="default")
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["visibility"] == "local"
        assert data["account"] == str(technician_user.id)

    def test_list_is_defaults_plus_own_locals(
        self, client, default_item, technician_headers, make_user, headers_for
    ):
        _create(client, technician_headers, name="Mine")
        other_headers = headers_for(make_user("other@momentumauto.com"))
        _create(client, other_headers, name="Theirs")

        names = [i["name"] for i in client.get("/api/catalog", headers=technician_headers).json()["data"]]
        assert names == ["Mine", "Oil Change"]

    def test_list_by_type(self, client, technician_headers):
        _create(client, technician_headers, name="Oil Filter", type="product")
        _create(client, technician_headers, name="Tuning")
        response = client.get("/api/catalog/type/product", headers=technician_headers)
        assert [i["name"] for i in response.json()["data"]] == ["Oil Filter"]

    def test_invalid_type(self, client, technician_headers):
        response = client.get("/api/catalog/type/bogus", headers=technician_headers)
        assert response.status_code == 400
        assert response.json()["message"] == 'Invalid type. Must be "service" or "product"'


class TestCatalogChanges:

    def test_owner_updates_local(self, client, technician_headers):
        item = _create(client, technician_headers).json()["data"]
        response = client.put(f"/api/catalog/{item['id']}", json={"cost": 1800}, headers=technician_headers)
        assert response.status_code == 200
        assert response.json()["data"]["cost"] == 1800

    def test_cannot_update_someone_elses_local(self, client, technician_headers, make_user, headers_for):
        item = _create(client, technician_headers).json()["data"]
        other_headers = headers_for(make_user("other@momentumauto.com"))
        response = client.put(f"/api/catalog/{item['id']}", json={"cost": 1}, headers=other_headers)
        assert response.status_code == 403

    def test_non_admin_cannot_delete_default(self, client, default_item, technician_headers, admin_headers):
        response = client.delete(f"/api/catalog/{default_item['id']}", headers=technician_headers)
        assert response.status_code == 403
        names = [i["name"] for i in client.get("/api/catalog", headers=admin_headers).json()["data"]]
        assert "Oil Change" in names

    def test_admin_delete_default_deactivates(self, client, default_item, admin_headers, db_session):
        response = client.delete(f"/api/catalog/{default_item['id']}", headers=admin_headers)
        assert response.json()["message"] == "Default catalog item deactivated"
        item = db_session.get(CatalogItem, UUID(default_item["id"]))
        assert item is not None and not item.is_active

    def test_owner_delete_local_removes_row(self, client, technician_headers, db_session):
        item = _create(client, technician_headers).json()["data"]
        response = client.delete(f"/api/catalog/{item['id']}", headers=technician_headers)
        assert response.json()["message"] == "Catalog item deleted successfully"
        assert db_session.get(CatalogItem, UUID(item["id"])) is None


class TestSeed:

    def test_populate_is_idempotent(self, db_session):
        assert populate_default_catalog(db_session) == len(DEFAULT_CATALOG)
        assert populate_default_catalog(db_session) == 0
        assert db_session.query(CatalogItem).filter(CatalogItem.account.is_(None)).count() == len(DEFAULT_CATALOG)
