from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .types import NotificationType


@dataclass
class BuiltNotification:
    type: str
    title: str
    message: str
    icon: str
    data: dict[str, Any]


def _label(name: str | None, fallback: str) -> str:
    return name.strip() if name and name.strip() else fallback


def build_notification(ntype: str, **kwargs: Any) -> BuiltNotification:
    """
    Central place to build notification title/message/data from templates.
    Keep strings easy to find and translate.
    """
    if ntype == NotificationType.CATTLE_CREATED:
        name = _label(kwargs.get("name"), "Your cattle")
        return BuiltNotification(
            type=ntype,
            title="Cattle created",
            message=f"{name} has been created successfully",
            icon="success",
            data={"cattle_id": str(kwargs.get("cattle_id"))},
        )
    if ntype == NotificationType.CATTLE_UPDATED:
        name = _label(kwargs.get("name"), "Your cattle")
        changed = kwargs.get("changed_fields") or []
        return BuiltNotification(
            type=ntype,
            title="Cattle updated",
            message=f"{name} has been updated successfully",
            icon="success",
            data={"cattle_id": str(kwargs.get("cattle_id")), "changed_fields": list(changed)},
        )
    if ntype == NotificationType.CATTLE_DELETED:
        return BuiltNotification(
            type=ntype,
            title="Cattle deleted",
            message="Your cattle has been deleted successfully",
            icon="trash",
            data={"cattle_id": str(kwargs.get("cattle_id"))},
        )
    if ntype == NotificationType.CATTLE_REASSIGNED:
        previous = kwargs.get("previous_kraal_id")
        return BuiltNotification(
            type=ntype,
            title="Cattle moved",
            message="Your cattle has been moved to a new kraal",
            icon="success",
            data={
                "cattle_id": str(kwargs.get("cattle_id")),
                "kraal_id": str(kwargs.get("kraal_id")),
                "previous_kraal_id": str(previous) if previous else None,
            },
        )
    if ntype == NotificationType.KRAAL_CREATED:
        name = _label(kwargs.get("name"), "Your kraal")
        return BuiltNotification(
            type=ntype,
            title="Kraal created",
            message=f"{name} has been created successfully",
            icon="success",
            data={"kraal_id": str(kwargs.get("kraal_id"))},
        )
    if ntype == NotificationType.KRAAL_UPDATED:
        name = _label(kwargs.get("name"), "Your kraal")
        return BuiltNotification(
            type=ntype,
            title="Kraal updated",
            message=f"{name} has been updated successfully",
            icon="success",
            data={
                "kraal_id": str(kwargs.get("kraal_id")),
                "changed_fields": list(kwargs.get("changed_fields") or []),
            },
        )
    if ntype == NotificationType.KRAAL_DELETED:
        return BuiltNotification(
            type=ntype,
            title="Kraal deleted",
            message="Your kraal has been deleted successfully",
            icon="trash",
            data={"kraal_id": str(kwargs.get("kraal_id"))},
        )
    raise ValueError(f"Unknown notification type: {ntype}")
