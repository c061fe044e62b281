"""Pure Python in-memory database for unit testing."""

import copy
import uuid
from typing import Any

from agenda.core.db_client import DatabaseError, RecordNotFoundError


class InMemoryDBClient:
    """Pure Python in-memory database for unit testing.

    Mirrors the keyword-only interface of `agenda.core.db_client` without
    touching SQLite. Supports basic CRUD, upserts and simple filtering/sorting.
    """

    def __init__(self):
        """Initialize empty in-memory database."""
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def _collection(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def _require(self, collection: str, record_id: str) -> dict[str, Any]:
        if not isinstance(record_id, str):
            raise DatabaseError(f"Record ID must be a string, got {type(record_id)}")
        records = self._collections.get(collection, {})
        if record_id not in records:
            raise RecordNotFoundError(f"Record not found in {collection}: {record_id}")
        return records[record_id]

    async def create_record(self, *, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Create a new record, keeping an explicit id when one is given.

        Raises:
            DatabaseError: If data is not a dict or the id is already taken
        """
        if not isinstance(data, dict):
            raise DatabaseError(f"Data must be a dictionary, got {type(data)}")

        record_id = data.get("id") or uuid.uuid4().hex
        records = self._collection(collection)
        if record_id in records:
            raise DatabaseError(f"Failed to create record in {collection}: duplicate id {record_id}")

        record = {**copy.deepcopy(data), "id": record_id}
        records[record_id] = record
        return copy.deepcopy(record)

    async def get_record(self, *, collection: str, record_id: str) -> dict[str, Any]:
        """Get a record by ID, raising RecordNotFoundError if missing."""
        return copy.deepcopy(self._require(collection, record_id))

    async def update_record(self, *, collection: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Update an existing record and return it."""
        if not isinstance(data, dict):
            raise DatabaseError(f"Data must be a dictionary, got {type(data)}")
        if not data:
            raise ValueError("Empty update payload")

        record = self._require(collection, record_id)
        record.update(copy.deepcopy(data))
        return copy.deepcopy(record)

    async def delete_record(self, *, collection: str, record_id: str) -> None:
        """Delete a record, raising RecordNotFoundError if missing."""
        self._require(collection, record_id)
        del self._collections[collection][record_id]

    async def list_records(
        self,
        *,
        collection: str,
        page: int = 1,
        per_page: int = 1000,
        filter_query: str = "",
        sort: str = "",
    ) -> list[dict[str, Any]]:
        """List records with optional filtering, sorting, and pagination.

        Raises:
            DatabaseError: For invalid filter syntax
        """
        records = list(self._collections.get(collection, {}).values())

        if filter_query:
            records = [r for r in records if self._parse_filter(filter_query, r)]

        if sort:
            records = self._apply_sort(records, sort)

        start_idx = (page - 1) * per_page
        return [copy.deepcopy(r) for r in records[start_idx : start_idx + per_page]]

    async def upsert_records(self, *, collection: str, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Insert or update many records by id."""
        saved = []
        store = self._collection(collection)
        for data in records:
            record_id = data.get("id") or uuid.uuid4().hex
            record = store.setdefault(record_id, {"id": record_id})
            record.update(copy.deepcopy({**data, "id": record_id}))
            saved.append(copy.deepcopy(record))
        return saved

    def _parse_filter(self, filter_str: str, record: dict[str, Any]) -> bool:
        """Evaluate a `field = "value" && field != "value"` filter against a record.

        Raises:
            DatabaseError: For invalid filter syntax
        """
        if "&&" in filter_str:
            return all(self._parse_filter(cond.strip(), record) for cond in filter_str.split("&&"))

        for operator in ("!=", "="):
            if operator in filter_str:
                field, value = (part.strip() for part in filter_str.split(operator, 1))
                value = value.strip("'\"")
                actual = record.get(field)
                matches = ("" if actual is None else str(actual)) == value
                return not matches if operator == "!=" else matches

        raise DatabaseError(f"Invalid filter syntax (no operator found): {filter_str}")

    def _apply_sort(self, records: list[dict], sort: str) -> list[dict]:
        """Sort records by field (prefix with - for descending); missing values sort first."""
        reverse = sort.startswith("-")
        field = sort[1:] if reverse else sort
        return sorted(records, key=lambda r: str(r.get(field) or ""), reverse=reverse)

    def seed(self, collection: str, *records: dict[str, Any]) -> None:
        """Store records synchronously, for tests that drive the app through TestClient."""
        store = self._collection(collection)
        for record in records:
            store[record["id"]] = copy.deepcopy(record)
