"""
Hierarchical key‑value datastore.

Entities are addressed by a ``Key``: a kind, an id (numeric or string)
and an optional parent key.  The parent is part of the key itself, so
the ancestor relationship of an entity is fixed the moment its key is
built and cannot be changed afterwards.

``Datastore`` is the interface the services depend on.  It exposes
exactly what they need:

* ``get`` – strongly consistent point lookup by key;
* ``put`` – batched write of one or more entities, all‑or‑nothing;
* ``allocate_id`` – a numeric id unique under a parent key and kind;
* ``query`` – entities of a kind, optionally restricted to the
  descendants of an ancestor key, optionally ordered by a property.

``SQLiteDatastore`` implements the interface on top of the tables
created by ``core.db.init_db``.
"""

import abc
import base64
import json
import logging
import re
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .db import get_connection

logger = logging.getLogger(__name__)

_PROPERTY_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Key:
    """Key of an entity, including the keys of all its ancestors."""

    kind: str
    id: Union[int, str]
    parent: Optional["Key"] = None

    def path(self) -> List[list]:
        """Return the ``[kind, id]`` pairs from the root down to this key."""
        pairs = self.parent.path() if self.parent else []
        pairs.append([self.kind, self.id])
        return pairs

    def encode(self) -> str:
        """Serialise the key path into the string stored in the database."""
        return json.dumps(self.path(), separators=(",", ":"), ensure_ascii=False)

    def descendant_prefix(self) -> str:
        """Common prefix of the encoded paths of every descendant key."""
        return self.encode()[:-1] + ","

    def urlsafe(self) -> str:
        """Return a url‑safe string that can be turned back into this key."""
        raw = self.encode().encode("utf-8")
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

    @classmethod
    def decode(cls, encoded: str) -> "Key":
        key: Optional[Key] = None
        for kind, id_ in json.loads(encoded):
            key = cls(kind, id_, key)
        if key is None:
            raise ValueError("Empty key path")
        return key

    @classmethod
    def from_urlsafe(cls, value: str) -> "Key":
        padding = "=" * (-len(value) % 4)
        try:
            raw = base64.urlsafe_b64decode(value + padding)
            return cls.decode(raw.decode("utf-8"))
        except (ValueError, TypeError) as exc:
            raise ValueError(f"Invalid websafe key: {value!r}") from exc


@dataclass
class Entity:
    """A stored record: its key plus a dict of JSON‑serialisable properties."""

    key: Key
    properties: Dict[str, Any] = field(default_factory=dict)


class Datastore(abc.ABC):
    """Abstract hierarchical key‑value store consumed by the services."""

    @abc.abstractmethod
    def get(self, key: Key) -> Optional[Entity]:
        """Return the entity stored under ``key`` or ``None``."""

    @abc.abstractmethod
    def put(self, *entities: Entity) -> None:
        """Persist all ``entities`` as a single atomic write."""

    @abc.abstractmethod
    def allocate_id(self, parent: Optional[Key], kind: str) -> int:
        """Return an id never handed out before for ``kind`` under ``parent``."""

    @abc.abstractmethod
    def query(
        self,
        kind: str,
        ancestor: Optional[Key] = None,
        order_by: Optional[str] = None,
    ) -> List[Entity]:
        """Return entities of ``kind``.

        ``ancestor`` restricts the result to descendants of that key.
        ``order_by`` names a property, prefixed with ``-`` for descending
        order; entities without that property are left out, as an index
        on the property would not contain them.
        """


class SQLiteDatastore(Datastore):
    """``Datastore`` backed by a SQLite database file."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def get(self, key: Key) -> Optional[Entity]:
        conn = get_connection(self._db_path)
        try:
            row = conn.execute(
                "SELECT key_path, data FROM entities WHERE key_path = ?",
                (key.encode(),),
            ).fetchone()
        finally:
            conn.close()
        if not row:
            return None
        return self._row_to_entity(row)

    def put(self, *entities: Entity) -> None:
        if not entities:
            return
        conn = get_connection(self._db_path)
        try:
            # ``with conn`` commits once at the end or rolls everything back.
            with conn:
                for entity in entities:
                    parent = entity.key.parent
                    conn.execute(
                        """
                        INSERT INTO entities (key_path, kind, parent_path, data)
                        VALUES (?, ?, ?, ?)
                        ON CONFLICT(key_path) DO UPDATE SET
                            data = excluded.data,
                            updated_at = CURRENT_TIMESTAMP
                        """,
                        (
                            entity.key.encode(),
                            entity.key.kind,
                            parent.encode() if parent else None,
                            json.dumps(entity.properties, ensure_ascii=False),
                        ),
                    )
        finally:
            conn.close()
        logger.debug("Stored %d entities", len(entities))

    def allocate_id(self, parent: Optional[Key], kind: str) -> int:
        parent_path = parent.encode() if parent else ""
        conn = get_connection(self._db_path)
        try:
            # Take the write lock before reading the counter so two
            # allocators can never observe the same ``last_id``.
            conn.execute("BEGIN IMMEDIATE")
            try:
                row = conn.execute(
                    "SELECT last_id FROM id_allocations WHERE parent_path = ? AND kind = ?",
                    (parent_path, kind),
                ).fetchone()
                if row is None:
                    new_id = 1
                    conn.execute(
                        "INSERT INTO id_allocations (parent_path, kind, last_id) VALUES (?, ?, ?)",
                        (parent_path, kind, new_id),
                    )
                else:
                    new_id = row["last_id"] + 1
                    conn.execute(
                        "UPDATE id_allocations SET last_id = ? WHERE parent_path = ? AND kind = ?",
                        (new_id, parent_path, kind),
                    )
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise
        finally:
            conn.close()
        return new_id

    def query(
        self,
        kind: str,
        ancestor: Optional[Key] = None,
        order_by: Optional[str] = None,
    ) -> List[Entity]:
        sql = "SELECT key_path, data FROM entities WHERE kind = ?"
        params: list = [kind]
        if ancestor is not None:
            prefix = ancestor.descendant_prefix()
            sql += " AND substr(key_path, 1, ?) = ?"
            params.extend([len(prefix), prefix])
        if order_by:
            descending = order_by.startswith("-")
            prop = order_by.lstrip("-")
            if not _PROPERTY_NAME.match(prop):
                raise ValueError(f"Invalid property name for ordering: {order_by!r}")
            json_path = f"$.{prop}"
            sql += " AND json_extract(data, ?) IS NOT NULL"
            sql += f" ORDER BY json_extract(data, ?) {'DESC' if descending else 'ASC'}, key_path"
            params.extend([json_path, json_path])
        else:
            sql += " ORDER BY key_path"

        conn = get_connection(self._db_path)
        try:
            rows = conn.execute(sql, tuple(params)).fetchall()
        finally:
            conn.close()
        return [self._row_to_entity(row) for row in rows]

    @staticmethod
    def _row_to_entity(row: sqlite3.Row) -> Entity:
        return Entity(key=Key.decode(row["key_path"]), properties=json.loads(row["data"]))
