from __future__ import annotations


class NotificationType:
    """Canonical notification type names shared with the frontend."""

    CATTLE_CREATED = "cattle_created"
    CATTLE_UPDATED = "cattle_updated"
    CATTLE_DELETED = "cattle_deleted"
    CATTLE_REASSIGNED = "cattle_reassigned"
    KRAAL_CREATED = "kraal_created"
    KRAAL_UPDATED = "kraal_updated"
    KRAAL_DELETED = "kraal_deleted"

