"""Key-value access to the plays table.

`PlayTable` is the only code that talks to the database. It exposes the four
operations the service needs from its store, `put_item`, `get_item`, `scan`
and `delete_item`, all over attribute maps keyed by the string `id`, and hides
the SQLAlchemy mapping behind them. Any database failure is rolled back and
re-raised as `StoreError`.
"""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import PlayRecord


# wire attribute name -> PlayRecord attribute
_ATTRIBUTES = {
    "id": "id",
    "name": "name",
    "createdAt": "created_at",
    "playerStates": "player_states",
}


class StoreError(Exception):
    """The underlying store rejected or failed an operation."""


def _record_to_item(record: PlayRecord) -> dict[str, Any]:
    return {wire: getattr(record, attr) for wire, attr in _ATTRIBUTES.items()}


class PlayTable:
    """Attribute-map view over the `plays` table.

    Args:
        db: Request-scoped SQLAlchemy session. The table commits its own writes.
    """

    def __init__(self, db: Session):
        self.db = db

    def put_item(self, item: dict[str, Any]) -> None:
        """Write an item unconditionally, replacing any record with the same id."""
        try:
            record = PlayRecord(**{attr: item[wire] for wire, attr in _ATTRIBUTES.items()})
        except KeyError as exc:
            raise StoreError(f"item is missing attribute {exc}") from exc

        try:
            self.db.merge(record)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"put_item failed for {record.id}") from exc

    def get_item(self, key: str) -> dict[str, Any] | None:
        """Return the item stored under `key`, or None if there is none."""
        try:
            record = self.db.get(PlayRecord, key)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"get_item failed for {key}") from exc

        if record is None:
            return None
        return _record_to_item(record)

    def scan(self, limit: int | None = None, offset: int = 0) -> list[dict[str, Any]]:
        """Return every item in the table.

        With no `limit` and no `offset` the scan is unfiltered and unordered.
        Paging orders by id so consecutive pages do not overlap.
        """
        stmt = select(PlayRecord)
        if limit is not None or offset:
            stmt = stmt.order_by(PlayRecord.id).offset(offset)
            if limit is not None:
                stmt = stmt.limit(limit)

        try:
            records = self.db.scalars(stmt).all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError("scan failed") from exc

        return [_record_to_item(r) for r in records]

    def delete_item(self, key: str) -> None:
        """Delete the item under `key`. Deleting a missing key is not an error."""
        try:
            self.db.execute(delete(PlayRecord).where(PlayRecord.id == key))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"delete_item failed for {key}") from exc
