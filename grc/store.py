"""In-memory data store for the GRC dashboard.

Provides the working backend used during development and testing. Each
entity lives in a ``Table``: a mapping from id to record with declared
secondary indexes, mirroring the indexes of the relational schema in
``grc.models``.
"""

from __future__ import annotations

import threading
from typing import Any

from grc.errors import DuplicateRecord

Record = dict[str, Any]


class Table:
    """A record collection keyed by id with secondary lookup indexes."""

    def __init__(
        self,
        name: str,
        indexes: dict[str, tuple[str, ...]] | None = None,
        unique: tuple[str, ...] = (),
    ) -> None:
        self.name = name
        self._records: dict[str, Record] = {}
        self._index_fields = dict(indexes or {})
        self._unique = set(unique)
        self._indexes: dict[str, dict[tuple[Any, ...], set[str]]] = {
            index: {} for index in self._index_fields
        }
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def _key(self, index: str, record: Record) -> tuple[Any, ...]:
        return tuple(record.get(field) for field in self._index_fields[index])

    def _add_to_indexes(self, record_id: str, record: Record) -> None:
        for index in self._index_fields:
            self._indexes[index].setdefault(self._key(index, record), set()).add(record_id)

    def _remove_from_indexes(self, record_id: str, record: Record) -> None:
        for index in self._index_fields:
            bucket = self._indexes[index].get(self._key(index, record))
            if bucket is not None:
                bucket.discard(record_id)
                if not bucket:
                    del self._indexes[index][self._key(index, record)]

    def _check_unique(self, record_id: str, record: Record) -> None:
        for index in self._unique:
            holders = self._indexes[index].get(self._key(index, record), set()) - {record_id}
            if holders:
                raise DuplicateRecord(
                    f"{self.name} already has a record for {dict(zip(self._index_fields[index], self._key(index, record)))}"
                )

    def insert(self, record: Record) -> str:
        """Insert a record; it must carry an ``id``."""
        record_id = record["id"]
        with self._lock:
            if record_id in self._records:
                raise DuplicateRecord(f"{self.name} already contains id {record_id}")
            self._check_unique(record_id, record)
            stored = dict(record)
            self._records[record_id] = stored
            self._add_to_indexes(record_id, stored)
        return record_id

    def get(self, record_id: str) -> Record | None:
        """Return a copy of the record, or None."""
        record = self._records.get(record_id)
        return dict(record) if record is not None else None

    def patch(self, record_id: str, changes: Record) -> Record:
        """Apply changes to one record atomically and return the new copy."""
        with self._lock:
            current = self._records[record_id]
            updated = {**current, **changes, "id": record_id}
            self._check_unique(record_id, updated)
            self._remove_from_indexes(record_id, current)
            self._records[record_id] = updated
            self._add_to_indexes(record_id, updated)
            return dict(updated)

    def find(self, index: str, *key: Any) -> list[Record]:
        """Return copies of the records whose index fields equal ``key``."""
        ids = self._indexes[index].get(tuple(key), set())
        return [dict(self._records[i]) for i in ids if i in self._records]

    def first(self, index: str, *key: Any) -> Record | None:
        matches = self.find(index, *key)
        return matches[0] if matches else None

    def all(self) -> list[Record]:
        return [dict(r) for r in self._records.values()]


class DataStore:
    """Thread-safe in-memory data store for development and testing."""

    def __init__(self) -> None:
        # Owned by the auth provider; kept only to resolve display names
        self.users = Table("users", {"by_email": ("email",)})
        self.organizations = Table("organizations", {"by_created_by": ("created_by",)})
        self.memberships = Table(
            "memberships",
            {
                "by_organization": ("organization_id",),
                "by_user": ("user_id",),
                "by_org_user": ("organization_id", "user_id"),
            },
            unique=("by_org_user",),
        )
        self.risks = Table(
            "risks",
            {
                "by_organization": ("organization_id",),
                "by_owner": ("owner",),
                "by_status": ("status",),
                "by_category": ("category",),
            },
        )
        self.controls = Table(
            "controls",
            {
                "by_organization": ("organization_id",),
                "by_owner": ("owner",),
                "by_effectiveness": ("effectiveness",),
            },
        )
        self.risk_controls = Table(
            "risk_controls",
            {"by_risk": ("risk_id",), "by_control": ("control_id",)},
        )
        self.frameworks = Table("compliance_frameworks", {"by_organization": ("organization_id",)})
        self.requirements = Table(
            "compliance_requirements",
            {
                "by_framework": ("framework_id",),
                "by_owner": ("owner",),
                "by_status": ("status",),
            },
        )
        self.integrations = Table(
            "integrations",
            {"by_organization": ("organization_id",), "by_status": ("status",)},
        )
        self.audit_logs = Table(
            "audit_logs",
            {
                "by_organization": ("organization_id",),
                "by_entity": ("entity_type", "entity_id"),
                "by_user": ("user_id",),
                "by_timestamp": ("timestamp",),
            },
        )

    def reset(self) -> None:
        """Clear all data — used in tests."""
        self.__init__()

    def add_user(self, user_id: str, name: str | None = None, email: str | None = None) -> None:
        """Register a user known to the auth provider."""
        self.users.insert({"id": user_id, "name": name, "email": email})

    def display_name(self, user_id: str) -> str:
        """Resolve a user's display name: name, then email, then "Unknown"."""
        user = self.users.get(user_id)
        if not user:
            return "Unknown"
        return user.get("name") or user.get("email") or "Unknown"


# Global singleton — replaced in tests
data_store = DataStore()
