from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID, uuid4


@dataclass(slots=True, frozen=True)
class ImageUpload:
    upload_url: str
    storage_key: str
    fields: dict[str, str] = field(default_factory=dict)


def main_image_prefix(tenant_id: UUID, cattle_id: UUID) -> str:
    return f"tenants/{tenant_id}/cattle/{cattle_id}/main-image/"


def new_main_image_key(tenant_id: UUID, cattle_id: UUID) -> str:
    return f"{main_image_prefix(tenant_id, cattle_id)}{uuid4()}"


class CattleImageStore(Protocol):
    """Object storage for cattle photos.

    Keys are relative to the store; any deployment prefix stays internal.
    """

    async def presign_upload(self, key: str, content_type: str) -> ImageUpload: ...

    def public_url(self, key: str) -> str: ...
