"""SQLite schema management (code-first approach)."""

import logging

import aiosqlite


logger = logging.getLogger(__name__)


# Central list of all collections in the schema, in dependency order
COLLECTIONS = [
    "users",
    "tasks",
    "calendar_events",
    "novelties",
]

# Columns stored as JSON text and decoded on read
JSON_COLUMNS: dict[str, tuple[str, ...]] = {
    "users": ("positions", "work_hours", "frequent_tasks"),
    "tasks": ("days",),
    "calendar_events": (),
    "novelties": ("viewed",),
}

_TABLES: dict[str, str] = {
    "users": """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT,
            role TEXT NOT NULL DEFAULT 'user' CHECK (role IN ('owner', 'admin', 'user')),
            positions TEXT NOT NULL DEFAULT '[]',
            work_hours TEXT NOT NULL DEFAULT '{}',
            frequent_tasks TEXT NOT NULL DEFAULT '[]',
            color TEXT NOT NULL DEFAULT '#3b82f6'
        )
    """,
    "tasks": """
        CREATE TABLE IF NOT EXISTS tasks (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            user_id TEXT NOT NULL REFERENCES users (id) ON DELETE CASCADE,
            days TEXT NOT NULL DEFAULT '[]',
            start_date TEXT,
            end_date TEXT,
            start_time TEXT,
            duration INTEGER,
            priority TEXT NOT NULL DEFAULT 'medium' CHECK (priority IN ('high', 'medium', 'low')),
            status TEXT NOT NULL DEFAULT 'todo' CHECK (status IN ('todo', 'in-progress', 'done', 'archived')),
            notes TEXT,
            created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """,
    "calendar_events": """
        CREATE TABLE IF NOT EXISTS calendar_events (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            start TEXT NOT NULL,
            "end" TEXT NOT NULL,
            type TEXT NOT NULL DEFAULT 'info' CHECK (type IN ('info', 'blocker')),
            all_day INTEGER NOT NULL DEFAULT 1
        )
    """,
    "novelties": """
        CREATE TABLE IF NOT EXISTS novelties (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT,
            start TEXT NOT NULL,
            "end" TEXT NOT NULL,
            viewed TEXT NOT NULL DEFAULT '[]',
            updated_at TEXT
        )
    """,
}

_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_user_id ON tasks (user_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks (status)",
]


async def create_tables(conn: aiosqlite.Connection) -> None:
    """Create every collection table and index if missing."""
    for collection in COLLECTIONS:
        await conn.execute(_TABLES[collection])
    for index in _INDEXES:
        await conn.execute(index)
    await conn.commit()
    logger.info("Database schema ready", extra={"collections": COLLECTIONS})
