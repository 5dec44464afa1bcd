"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and applying migrations on application start
(``init_db``).  Each resource of the field operations backend is a
flat table with an autoincrement integer id and ``created_at`` /
``updated_at`` columns written by the application.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: resources served by the dashboard
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS pops (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            code TEXT NOT NULL UNIQUE,
            address TEXT,
            latitude REAL,
            longitude REAL,
            status TEXT NOT NULL DEFAULT 'active',
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS technicians (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            phone TEXT,
            specialization TEXT,
            status TEXT NOT NULL DEFAULT 'active',
            access_level TEXT NOT NULL DEFAULT 'technician',
            pop_id INTEGER,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS activities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            description TEXT,
            type TEXT,
            status TEXT NOT NULL DEFAULT 'pending',
            priority TEXT NOT NULL DEFAULT 'medium',
            assigned_to INTEGER,
            pop_id INTEGER,
            generator_id INTEGER,
            scheduled_date TIMESTAMP,
            completed_date TIMESTAMP,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS supplies (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            pop_id INTEGER NOT NULL,
            generator_id INTEGER,
            fuel_type TEXT NOT NULL,
            quantity REAL NOT NULL,
            unit TEXT NOT NULL DEFAULT 'liters',
            cost REAL,
            supplier TEXT NOT NULL,
            supply_date TIMESTAMP,
            notes TEXT NOT NULL DEFAULT '',
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        );
        """,
    ),
    # Migration 2: generator fleet, maintenance records and checklist templates
    (
        2,
        """
        CREATE TABLE IF NOT EXISTS generators (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            model TEXT NOT NULL,
            manufacturer TEXT NOT NULL,
            serial_number TEXT,
            power_kva REAL NOT NULL DEFAULT 0,
            type TEXT NOT NULL DEFAULT 'primary',
            fuel_type TEXT NOT NULL DEFAULT 'diesel',
            status TEXT NOT NULL DEFAULT 'operational',
            pop_id INTEGER NOT NULL,
            location TEXT,
            installed_at TIMESTAMP,
            last_maintenance TIMESTAMP,
            next_maintenance TIMESTAMP,
            running_hours REAL NOT NULL DEFAULT 0,
            fuel_level REAL NOT NULL DEFAULT 0,
            notes TEXT,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS maintenances (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            asset_type TEXT NOT NULL,
            asset_id INTEGER NOT NULL,
            asset_name TEXT NOT NULL DEFAULT '',
            status TEXT NOT NULL DEFAULT 'scheduled',
            scheduled_date TIMESTAMP,
            completed_date TIMESTAMP,
            frequency TEXT NOT NULL DEFAULT 'once',
            -- JSON arrays
            checklist TEXT NOT NULL DEFAULT '[]',
            photo_urls TEXT NOT NULL DEFAULT '[]',
            notes TEXT NOT NULL DEFAULT '',
            technician_id INTEGER NOT NULL,
            activity_id INTEGER,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS checklist_templates (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            category TEXT,
            items TEXT NOT NULL DEFAULT '[]',
            active INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        );
        """,
    ),
    # Migration 3: indices for the filters used by list endpoints
    (
        3,
        """
        CREATE INDEX IF NOT EXISTS idx_activities_pop_id ON activities(pop_id);
        CREATE INDEX IF NOT EXISTS idx_activities_status ON activities(status);
        CREATE INDEX IF NOT EXISTS idx_supplies_pop_id ON supplies(pop_id);
        CREATE INDEX IF NOT EXISTS idx_supplies_generator_id ON supplies(generator_id);
        CREATE INDEX IF NOT EXISTS idx_generators_pop_id ON generators(pop_id);
        CREATE INDEX IF NOT EXISTS idx_maintenances_asset ON maintenances(asset_type, asset_id);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # field_ops_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.  No
    type detection is enabled; timestamps come back as the ISO strings
    they were stored as.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS``.  When ``settings.seed_demo_data`` is enabled the
    demo dataset is inserted into empty tables afterwards.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s", version)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version

    if settings.seed_demo_data:
        from .seed import seed_demo_data

        seed_demo_data()
