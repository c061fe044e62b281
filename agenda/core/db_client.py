"""SQLite database client wrapper with CRUD operations."""

import asyncio
import json
import logging
import re
import threading
import uuid
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any

import aiosqlite

from agenda.core.config import constants, settings
from agenda.core.schema import JSON_COLUMNS


logger = logging.getLogger(__name__)


class DatabaseError(RuntimeError):
    """Raised when a persistence operation fails."""


class RecordNotFoundError(DatabaseError):
    """Raised when a record id does not exist in its collection."""


def _validate_collection_name(collection: str) -> None:
    """Validate that a collection name contains only alphanumeric characters and underscores."""
    if not re.match(r"^[a-zA-Z_][a-zA-Z0-9_]*$", collection):
        msg = f"Invalid collection name: {collection}. Only alphanumeric characters and underscores are allowed."
        raise ValueError(msg)


def get_db_path(db_path: str | None = None) -> Path:
    """Get the resolved SQLite database file path."""
    path_str = db_path or settings.sqlite_db_path
    return Path(path_str).resolve()


def _quoted(columns: list[str]) -> str:
    """Quote column names; `start` and `end` are SQL keywords."""
    for column in columns:
        _validate_collection_name(column)
    return ", ".join(f'"{column}"' for column in columns)


def _encode_value(value: Any) -> Any:
    """Convert a Python value into something SQLite can store."""
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, set | frozenset):
        return json.dumps(sorted(_encode_value(v) for v in value))
    if isinstance(value, dict | list | tuple):
        return json.dumps(value, default=_encode_value)
    if isinstance(value, bool):
        return int(value)
    return value


def _decode_record(collection: str, record: dict[str, Any]) -> dict[str, Any]:
    """Parse JSON columns of a row back into Python structures."""
    decoded = record.copy()
    for column in JSON_COLUMNS.get(collection, ()):
        raw = decoded.get(column)
        if isinstance(raw, str):
            decoded[column] = json.loads(raw) if raw else None
    return decoded


def parse_filter(filter_query: str) -> tuple[str, list[str | int | float | None]]:
    """Parse `field = "value" && field != "value"` syntax into a WHERE clause and parameters."""
    if not filter_query:
        return "", []

    conditions = []
    params: list[str | int | float | None] = []
    for raw_part in filter_query.split("&&"):
        match = re.match(r"""^\s*(\w+)\s*(=|!=|>=|<=|>|<)\s*(['"])(.*)\3\s*$""", raw_part)
        if not match:
            msg = f"Invalid filter syntax: {raw_part.strip()}"
            raise ValueError(msg)
        field, op, _, value = match.groups()
        conditions.append(f'"{field}" {op} ?')
        params.append(value)

    return " AND ".join(conditions), params


_db_connections: dict[tuple[int, int, str], aiosqlite.Connection] = {}
_db_lock = asyncio.Lock()


async def get_connection(*, db_path: str | None = None) -> aiosqlite.Connection:
    """Get or create a cached connection for the current thread, loop, and db path."""
    thread_id = threading.get_ident()
    loop = asyncio.get_running_loop()
    loop_id = id(loop)
    path = get_db_path(db_path)
    cache_key = (thread_id, loop_id, str(path))

    if cache_key in _db_connections:
        return _db_connections[cache_key]

    async with _db_lock:
        # Double-check after acquiring lock
        if cache_key in _db_connections:
            return _db_connections[cache_key]

        path.parent.mkdir(parents=True, exist_ok=True)

        conn = await aiosqlite.connect(str(path))
        conn.row_factory = aiosqlite.Row
        await conn.execute("PRAGMA foreign_keys = ON")
        await conn.execute("PRAGMA journal_mode = WAL")

        _db_connections[cache_key] = conn

        logger.info(
            "Created new SQLite connection",
            extra={"db_path": str(path), "thread_id": thread_id, "loop_id": loop_id},
        )
        return conn


async def close_connection(*, db_path: str | None = None) -> None:
    """Close the cached SQLite connection for the current thread, loop, and db path."""
    cache_key = (threading.get_ident(), id(asyncio.get_running_loop()), str(get_db_path(db_path)))

    async with _db_lock:
        conn = _db_connections.pop(cache_key, None)
        if conn is None:
            return
        try:
            await conn.close()
            logger.info("Closed SQLite connection", extra={"db_path": cache_key[2]})
        except aiosqlite.Error as e:
            logger.warning("Error closing SQLite connection", extra={"error": str(e)})


async def init_db(*, db_path: str | None = None) -> None:
    """Create all tables if they do not exist yet."""
    from agenda.core.schema import create_tables

    conn = await get_connection(db_path=db_path)
    await create_tables(conn)


def _row_to_record(collection: str, row: aiosqlite.Row) -> dict[str, Any]:
    return _decode_record(collection, dict(row))


async def create_record(*, collection: str, data: dict[str, Any]) -> dict[str, Any]:
    """Insert a new record and return it with its assigned id."""
    _validate_collection_name(collection)
    payload = {"id": data.get("id") or uuid.uuid4().hex, **{k: v for k, v in data.items() if k != "id"}}

    try:
        conn = await get_connection()
        columns = list(payload.keys())
        placeholders = ", ".join("?" for _ in columns)
        query = f"INSERT INTO {collection} ({_quoted(columns)}) VALUES ({placeholders})"  # noqa: S608
        await conn.execute(query, [_encode_value(payload[c]) for c in columns])
        await conn.commit()
    except aiosqlite.Error as e:
        logger.error("create_record_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to create record in {collection}: {e}"
        raise DatabaseError(msg) from e

    logger.info("Created record", extra={"collection": collection, "record_id": payload["id"]})
    return await get_record(collection=collection, record_id=payload["id"])


async def get_record(*, collection: str, record_id: str) -> dict[str, Any]:
    """Fetch a single record by ID, raising RecordNotFoundError if not found."""
    _validate_collection_name(collection)

    try:
        conn = await get_connection()
        query = f"SELECT * FROM {collection} WHERE id = ?"  # noqa: S608
        cursor = await conn.execute(query, (record_id,))
        row = await cursor.fetchone()
    except aiosqlite.Error as e:
        logger.error("get_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to get record from {collection}: {e}"
        raise DatabaseError(msg) from e

    if row is None:
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)

    return _row_to_record(collection, row)


async def update_record(*, collection: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
    """Update a record by ID and return the updated record."""
    if not data:
        msg = "Empty update payload"
        raise ValueError(msg)
    _validate_collection_name(collection)

    try:
        conn = await get_connection()
        set_clause = ", ".join(f'"{key}" = ?' for key in data)
        values = [_encode_value(v) for v in data.values()]
        values.append(record_id)
        query = f"UPDATE {collection} SET {set_clause} WHERE id = ?"  # noqa: S608
        cursor = await conn.execute(query, values)
        await conn.commit()
    except aiosqlite.Error as e:
        logger.error("update_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to update record in {collection}: {e}"
        raise DatabaseError(msg) from e

    if cursor.rowcount == 0:
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)

    logger.info("Updated record", extra={"collection": collection, "record_id": record_id})
    return await get_record(collection=collection, record_id=record_id)


async def delete_record(*, collection: str, record_id: str) -> None:
    """Delete a record by ID, raising RecordNotFoundError if not found."""
    _validate_collection_name(collection)

    try:
        conn = await get_connection()
        query = f"DELETE FROM {collection} WHERE id = ?"  # noqa: S608
        cursor = await conn.execute(query, (record_id,))
        await conn.commit()
    except aiosqlite.Error as e:
        logger.error("delete_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to delete record from {collection}: {e}"
        raise DatabaseError(msg) from e

    if cursor.rowcount == 0:
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)

    logger.info("Deleted record", extra={"collection": collection, "record_id": record_id})


async def list_records(
    *,
    collection: str,
    page: int = 1,
    per_page: int = 1000,
    filter_query: str = "",
    sort: str = "",
) -> list[dict[str, Any]]:
    """List records with optional filtering, sorting, and pagination.

    Sort accepts a column name, optionally prefixed with `-` for descending order.
    """
    _validate_collection_name(collection)

    where_clause, params = parse_filter(filter_query)
    if where_clause:
        where_clause = f"WHERE {where_clause}"

    safe_sort = "rowid ASC"
    if sort:
        sort_match = re.match(r"^(-?)([A-Za-z_][A-Za-z0-9_]*)$", sort.strip())
        if sort_match:
            direction = "DESC" if sort_match.group(1) else "ASC"
            safe_sort = f'"{sort_match.group(2)}" {direction}'
        else:
            logger.warning("Invalid sort parameter, using default", extra={"sort": sort})

    offset = (page - 1) * per_page
    query = f"SELECT * FROM {collection} {where_clause} ORDER BY {safe_sort} LIMIT ? OFFSET ?"  # noqa: S608

    try:
        conn = await get_connection()
        cursor = await conn.execute(query, [*params, per_page, offset])
        rows = await cursor.fetchall()
    except aiosqlite.Error as e:
        logger.error("list_records_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to list records from {collection}: {e}"
        raise DatabaseError(msg) from e

    records = [_row_to_record(collection, row) for row in rows]
    logger.debug("Listed records", extra={"collection": collection, "count": len(records)})
    return records


async def list_all_records(
    *,
    collection: str,
    filter_query: str = "",
    sort: str = "",
    per_page: int | None = None,
) -> list[dict[str, Any]]:
    """List every matching record, fetching page after page until a short page comes back."""
    per_page = per_page or constants.DEFAULT_PER_PAGE_LIMIT
    records: list[dict[str, Any]] = []
    page = 1
    while True:
        batch = await list_records(
            collection=collection,
            page=page,
            per_page=per_page,
            filter_query=filter_query,
            sort=sort,
        )
        records.extend(batch)
        if len(batch) < per_page:
            return records

        page += 1
        logger.debug("Fetching next page", extra={"collection": collection, "page": page})


async def upsert_records(*, collection: str, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Insert or replace many records by id in a single transaction."""
    _validate_collection_name(collection)
    if not records:
        return []

    saved_ids = []
    conn: aiosqlite.Connection | None = None
    try:
        conn = await get_connection()
        for data in records:
            payload = {"id": data.get("id") or uuid.uuid4().hex, **{k: v for k, v in data.items() if k != "id"}}
            columns = list(payload.keys())
            placeholders = ", ".join("?" for _ in columns)
            # Update in place on conflict; REPLACE would delete the row and cascade to its tasks
            updates = ", ".join(f'"{c}" = excluded."{c}"' for c in columns if c != "id") or '"id" = "id"'
            query = (
                f"INSERT INTO {collection} ({_quoted(columns)}) VALUES ({placeholders}) "  # noqa: S608
                f"ON CONFLICT (id) DO UPDATE SET {updates}"
            )
            await conn.execute(query, [_encode_value(payload[c]) for c in columns])
            saved_ids.append(payload["id"])
        await conn.commit()
    except aiosqlite.Error as e:
        if conn is not None:
            # Discard rows written before the failure
            await conn.rollback()
        logger.error("upsert_records_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to upsert records in {collection}: {e}"
        raise DatabaseError(msg) from e

    logger.info("Upserted records", extra={"collection": collection, "count": len(saved_ids)})
    return [await get_record(collection=collection, record_id=record_id) for record_id in saved_ids]
