"""Tests for sync status and backup endpoints."""

import json

ADMIN = {"X-Access-Secret": "0000"}
PRODUCT_ONLY = {"X-Access-Secret": "1111"}


class TestSyncStatus:
    async def test_initial_status(self, client):
        response = await client.get("/api/sync/status", headers=PRODUCT_ONLY)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "idle"
        assert data["push_pending"] is False

    async def test_change_schedules_push_and_flush_sends_it(self, client, remote_store):
        await client.post(
            "/api/items", json={"type": "product", "code": "P1", "name": "pump"}, headers=ADMIN
        )
        status = (await client.get("/api/sync/status", headers=ADMIN)).json()
        assert status["push_pending"] is True

        response = await client.post("/api/sync/flush", headers=ADMIN)

        data = response.json()
        assert data["pushed"] is True
        assert data["sync"]["status"] == "success"
        remote_store.push_snapshot.assert_awaited_once()

    async def test_flush_with_nothing_pending(self, client):
        response = await client.post("/api/sync/flush", headers=ADMIN)
        assert response.json()["pushed"] is False


class TestBackups:
    async def test_export(self, client):
        await client.post(
            "/api/items", json={"type": "part", "code": "C1", "name": "bolt"}, headers=ADMIN
        )

        response = await client.get("/api/sync/snapshot", headers=ADMIN)

        assert response.status_code == 200
        assert "inventory_backup_" in response.headers["content-disposition"]
        document = json.loads(response.content)
        assert document["version"] == "2.0"
        assert document["items"][0]["code"] == "C1"
        assert "exportDate" in document

    async def test_export_is_admin_only(self, client):
        response = await client.get("/api/sync/snapshot", headers=PRODUCT_ONLY)
        assert response.status_code == 403

    async def test_import_replaces_everything(self, client, book):
        await client.post(
            "/api/items", json={"type": "part", "code": "OLD", "name": "x"}, headers=ADMIN
        )
        document = {
            "items": [
                {
                    "id": "item-restored",
                    "type": "product",
                    "code": "P9",
                    "name": "PUMP",
                    "registrationDate": "2024-01-05",
                    "transactions": [
                        {
                            "id": "t-1",
                            "type": "purchase",
                            "quantity": 1,
                            "date": "2024-01-05T10:00:00Z",
                            "serialNumber": "SN00009",
                        }
                    ],
                }
            ],
            "version": "2.0",
            "exportDate": "2024-01-06T00:00:00Z",
        }

        response = await client.put(
            "/api/sync/snapshot", json=document, headers={**ADMIN, "X-Confirm-Secret": "0000"}
        )

        assert response.status_code == 200
        assert response.json() == {"items": 1, "counts": {"part": 0, "product": 1}}
        assert [i.code for i in book.items] == ["P9"]
        assert book.serial_registry() == {"SN00009"}

    async def test_import_rejects_bad_items(self, client, book):
        response = await client.put(
            "/api/sync/snapshot",
            json={"items": [{"id": "x"}]},
            headers={**ADMIN, "X-Confirm-Secret": "0000"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert book.items == []
