"""Base abstract models shared by the project's apps.

Provides ``BaseModel``: a UUIDv7 primary key plus a ``created_at`` stamp.

Design decisions:
- The primary key has a default but stays writable, so callers may supply
  their own identifier.  Inserts go through ``QuerySet.create`` (forced
  INSERT), which makes the primary key the uniqueness guard.
- ``created_at`` uses ``default=timezone.now`` instead of ``auto_now_add``
  so the value stamped by the application layer is the one persisted.
"""

from __future__ import annotations

import uuid6
from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and a creation timestamp."""

    id = models.UUIDField(primary_key=True, default=uuid6.uuid7)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        abstract = True
