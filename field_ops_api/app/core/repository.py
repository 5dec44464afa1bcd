"""
Generic table access shared by all resource services.

Every resource of the backend is a flat table with an autoincrement
``id`` plus ``created_at``/``updated_at`` columns, so the same handful
of statements serves all of them.  ``TableRepository`` wraps those
statements: it converts Python values to what SQLite stores (ISO
strings for datetimes, JSON text for lists, integers for booleans) and
converts rows back into plain dictionaries.

Each method opens its own connection and commits before closing it.
There is no transaction spanning several calls; concurrent writers
race exactly as they would against a shared in-memory list.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from .db import get_connection
from .errors import ConflictError, InvalidRequestError


def _integrity_error(table: str, exc: sqlite3.IntegrityError) -> ValueError:
    # UNIQUE violations that slipped past the service checks are conflicts;
    # NOT NULL violations mean the payload nulled a mandatory column.
    if "UNIQUE" in str(exc):
        return ConflictError(f"{table}: {exc}")
    return InvalidRequestError(f"{table}: {exc}")


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utcnow_iso() -> str:
    return utcnow().isoformat()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored ISO timestamp; naive values are taken as UTC."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class TableRepository:
    """CRUD helper bound to a single table.

    Parameters
    ----------
    table : str
        Table name.  Never derived from user input.
    json_columns : Iterable[str]
        Columns holding JSON‑encoded lists or objects.
    bool_columns : Iterable[str]
        Columns holding 0/1 flags exposed as booleans.
    """

    def __init__(
        self,
        table: str,
        json_columns: Iterable[str] = (),
        bool_columns: Iterable[str] = (),
    ) -> None:
        self.table = table
        self.json_columns = frozenset(json_columns)
        self.bool_columns = frozenset(bool_columns)

    # ------------------------------------------------------------------
    # Conversion helpers
    # ------------------------------------------------------------------
    def _to_db(self, column: str, value: Any) -> Any:
        if value is None:
            return None
        if column in self.json_columns:
            return json.dumps(value)
        if isinstance(value, bool):
            return 1 if value else 0
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        return value

    def _from_row(self, row: sqlite3.Row) -> Dict[str, Any]:
        record = dict(row)
        for column in self.json_columns:
            raw = record.get(column)
            record[column] = json.loads(raw) if raw else []
        for column in self.bool_columns:
            if record.get(column) is not None:
                record[column] = bool(record[column])
        return record

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Return all rows matching ``filters`` exactly, in id order.

        Filters whose value is ``None`` are ignored.
        """
        query = f"SELECT * FROM {self.table}"
        params: list = []
        where_clauses: list[str] = []
        for column, value in (filters or {}).items():
            if value is None:
                continue
            where_clauses.append(f"{column} = ?")
            params.append(self._to_db(column, value))
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        query += " ORDER BY id ASC"
        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [self._from_row(row) for row in rows]
        finally:
            conn.close()

    def get(self, record_id: int) -> Optional[Dict[str, Any]]:
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT * FROM {self.table} WHERE id = ?", (record_id,)
            ).fetchone()
            return self._from_row(row) if row else None
        finally:
            conn.close()

    def find_by(self, column: str, value: Any) -> Optional[Dict[str, Any]]:
        """Return the first row whose ``column`` equals ``value``."""
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT * FROM {self.table} WHERE {column} = ? ORDER BY id LIMIT 1",
                (self._to_db(column, value),),
            ).fetchone()
            return self._from_row(row) if row else None
        finally:
            conn.close()

    def count(self) -> int:
        conn = get_connection()
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {self.table}").fetchone()[0]
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def insert(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row, stamping both timestamps, and return it as stored."""
        now = utcnow_iso()
        data = {**values, "created_at": now, "updated_at": now}
        columns = list(data)
        placeholders = ", ".join("?" for _ in columns)
        sql = f"INSERT INTO {self.table} ({', '.join(columns)}) VALUES ({placeholders})"
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, tuple(self._to_db(c, data[c]) for c in columns))
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise _integrity_error(self.table, exc) from exc
            record_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(
                f"SELECT * FROM {self.table} WHERE id = ?", (record_id,)
            ).fetchone()
            return self._from_row(row)
        finally:
            conn.close()

    def update(self, record_id: int, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Shallow‑merge ``updates`` into a row and bump ``updated_at``.

        Columns absent from ``updates`` keep their values.  Returns the
        updated row, or ``None`` if the id does not exist.
        """
        fields = [f"{column} = ?" for column in updates]
        values = [self._to_db(column, value) for column, value in updates.items()]
        fields.append("updated_at = ?")
        values.append(utcnow_iso())
        values.append(record_id)
        sql = f"UPDATE {self.table} SET {', '.join(fields)} WHERE id = ?"
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, tuple(values))
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise _integrity_error(self.table, exc) from exc
            if cursor.rowcount == 0:
                return None
            conn.commit()
            row = cursor.execute(
                f"SELECT * FROM {self.table} WHERE id = ?", (record_id,)
            ).fetchone()
            return self._from_row(row)
        finally:
            conn.close()

    def delete(self, record_id: int) -> bool:
        """Delete a row.  Returns ``False`` when the id does not exist."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"DELETE FROM {self.table} WHERE id = ?", (record_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
