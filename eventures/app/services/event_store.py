"""
SQLite persistence for events.

The store is the only place that knows the ``events`` table layout.
It converts rows into ``EventRecord`` objects, keeps prices as exact
decimals and never applies business rules.  Every method accepts an
optional cursor so that the service can group a read and a write into
one ``write_transaction``; without a cursor the method opens its own
connection.
"""

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterator, List, Optional

from eventures.app.core.db import get_cursor
from eventures.app.schemas.event import EventBindingModel, EventListingModel

_SELECT = """
    SELECT e.id, e.name, e.place, e.start, e."end", e.total_tickets,
           e.price_per_ticket, e.owner_id, u.username AS owner_username
    FROM events e
    JOIN users u ON u.id = e.owner_id
"""


@dataclass(frozen=True)
class EventRecord:
    """A persisted event together with its owner's username."""

    id: int
    name: str
    place: str
    start: datetime
    end: datetime
    total_tickets: int
    price_per_ticket: Decimal
    owner_id: int
    owner_username: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "EventRecord":
        return cls(
            id=row["id"],
            name=row["name"],
            place=row["place"],
            start=datetime.fromisoformat(row["start"]),
            end=datetime.fromisoformat(row["end"]),
            total_tickets=row["total_tickets"],
            price_per_ticket=Decimal(row["price_per_ticket"]),
            owner_id=row["owner_id"],
            owner_username=row["owner_username"],
        )

    def to_listing(self) -> EventListingModel:
        return EventListingModel(
            id=self.id,
            name=self.name,
            place=self.place,
            start=self.start,
            end=self.end,
            total_tickets=self.total_tickets,
            price_per_ticket=self.price_per_ticket,
            owner=self.owner_username,
        )

    def to_binding(self) -> EventBindingModel:
        return EventBindingModel(
            name=self.name,
            place=self.place,
            start=self.start,
            end=self.end,
            total_tickets=self.total_tickets,
            price_per_ticket=self.price_per_ticket,
        )


@contextmanager
def _use(cursor: Optional[sqlite3.Cursor]) -> Iterator[sqlite3.Cursor]:
    if cursor is not None:
        yield cursor
    else:
        with get_cursor() as own:
            yield own


def _mutable_values(draft: EventBindingModel) -> tuple:
    return (
        draft.name.strip(),
        draft.place.strip(),
        draft.start.isoformat(),
        draft.end.isoformat(),
        draft.total_tickets,
        str(draft.price_per_ticket),
    )


class EventStore:
    """CRUD access to the ``events`` table."""

    @classmethod
    def list_events(cls, owner_id: Optional[int] = None, cursor: Optional[sqlite3.Cursor] = None) -> List[EventRecord]:
        """Return events in insertion order, optionally only those of one owner."""
        query = _SELECT
        params: tuple = ()
        if owner_id is not None:
            query += " WHERE e.owner_id = ?"
            params = (owner_id,)
        query += " ORDER BY e.id ASC"
        with _use(cursor) as cur:
            rows = cur.execute(query, params).fetchall()
        return [EventRecord.from_row(row) for row in rows]

    @classmethod
    def get_event(cls, event_id: int, cursor: Optional[sqlite3.Cursor] = None) -> Optional[EventRecord]:
        with _use(cursor) as cur:
            row = cur.execute(_SELECT + " WHERE e.id = ?", (event_id,)).fetchone()
        return EventRecord.from_row(row) if row else None

    @classmethod
    def count_events(cls, owner_id: Optional[int] = None, cursor: Optional[sqlite3.Cursor] = None) -> int:
        query = "SELECT COUNT(*) AS count FROM events"
        params: tuple = ()
        if owner_id is not None:
            query += " WHERE owner_id = ?"
            params = (owner_id,)
        with _use(cursor) as cur:
            row = cur.execute(query, params).fetchone()
        return row["count"]

    @classmethod
    def insert_event(cls, draft: EventBindingModel, owner_id: int, cursor: Optional[sqlite3.Cursor] = None) -> EventRecord:
        """Persist a validated draft and return the stored record."""
        with _use(cursor) as cur:
            cur.execute(
                """
                INSERT INTO events (name, place, start, "end", total_tickets, price_per_ticket, owner_id)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                _mutable_values(draft) + (owner_id,),
            )
            event_id = cur.lastrowid
            row = cur.execute(_SELECT + " WHERE e.id = ?", (event_id,)).fetchone()
        return EventRecord.from_row(row)

    @classmethod
    def update_event(cls, event_id: int, draft: EventBindingModel, cursor: Optional[sqlite3.Cursor] = None) -> None:
        """Replace the mutable fields of an event; ``id`` and ``owner_id`` are untouched."""
        with _use(cursor) as cur:
            cur.execute(
                """
                UPDATE events
                SET name = ?, place = ?, start = ?, "end" = ?, total_tickets = ?,
                    price_per_ticket = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                _mutable_values(draft) + (event_id,),
            )

    @classmethod
    def delete_event(cls, event_id: int, cursor: Optional[sqlite3.Cursor] = None) -> None:
        with _use(cursor) as cur:
            cur.execute("DELETE FROM events WHERE id = ?", (event_id,))
