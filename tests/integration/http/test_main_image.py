from __future__ import annotations

import pytest

from kraalhub.infrastructure.storage.ports import ImageUpload
from kraalhub.interfaces.http.main import create_app


class FakeStorage:
    def __init__(self) -> None:
        self.keys: list[str] = []

    async def presign_upload(self, key, content_type):
        self.keys.append(key)
        return ImageUpload(
            upload_url="https://bucket.test/upload",
            storage_key=key,
            fields={"Content-Type": content_type},
        )

    def public_url(self, key):
        return f"https://cdn.test/{key}"


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def app(test_settings, notification_sender, storage):
    return create_app(
        settings=test_settings, notification_sender=notification_sender, image_store=storage
    )


async def test_main_image_upload_and_confirm(client, headers, storage, tenant_id):
    created = await client.post(
        "/api/v1/cattle/",
        json={"name": "Photo", "breed": "HEREFORD", "gender": "Male", "health_status": "Healthy"},
        headers=headers["admin"],
    )
    cattle_id = created.json()["id"]

    presign = await client.post(
        f"/api/v1/cattle/{cattle_id}/main-image/uploads",
        json={"content_type": "image/jpeg"},
        headers=headers["manager"],
    )
    assert presign.status_code == 200
    storage_key = presign.json()["storage_key"]
    assert storage_key.startswith(f"tenants/{tenant_id}/cattle/{cattle_id}/main-image/")

    worker_presign = await client.post(
        f"/api/v1/cattle/{cattle_id}/main-image/uploads",
        json={"content_type": "image/jpeg"},
        headers=headers["worker"],
    )
    assert worker_presign.status_code == 403

    confirm = await client.put(
        f"/api/v1/cattle/{cattle_id}/main-image",
        json={"storage_key": storage_key},
        headers=headers["manager"],
    )
    assert confirm.status_code == 200
    assert confirm.json()["main_image"] == f"https://cdn.test/{storage_key}"


async def test_main_image_upload_for_missing_cattle(client, headers):
    response = await client.post(
        "/api/v1/cattle/00000000-0000-0000-0000-000000000042/main-image/uploads",
        json={"content_type": "image/png"},
        headers=headers["admin"],
    )
    assert response.status_code == 404


async def test_confirm_rejects_key_issued_for_other_animal(client, headers):
    first = await client.post(
        "/api/v1/cattle/",
        json={"name": "First", "breed": "ANGUS", "gender": "Female", "health_status": "Healthy"},
        headers=headers["admin"],
    )
    second = await client.post(
        "/api/v1/cattle/",
        json={"name": "Second", "breed": "ANGUS", "gender": "Female", "health_status": "Healthy"},
        headers=headers["admin"],
    )
    presign = await client.post(
        f"/api/v1/cattle/{first.json()['id']}/main-image/uploads",
        json={"content_type": "image/png"},
        headers=headers["admin"],
    )

    confirm = await client.put(
        f"/api/v1/cattle/{second.json()['id']}/main-image",
        json={"storage_key": presign.json()["storage_key"]},
        headers=headers["admin"],
    )
    assert confirm.status_code == 422
    assert "storage_key" in confirm.json()["details"]
