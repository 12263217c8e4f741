"""Play store adapter.

`PlayStore` implements the play operations on top of a `PlayTable`:
it builds new plays (fresh id and creation time), converts between `Play`
objects and stored attribute maps, issues exactly one store call per
operation, and translates every failure into a fault from `errors`.

Nothing here retries. A failed scan or a single undecodable record fails the
whole listing; callers never see partial results.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from .codec import SerializationError, from_item, to_item
from .errors import InternalFault, NotFoundFault, ValidationFault
from .schemas import ExportMetadata, ImportResult, Play, PlayerState, PlayExport
from .store import PlayTable, StoreError

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_play_id() -> str:
    return str(uuid.uuid4())


def format_created_at(moment: datetime) -> str:
    """Format a creation time as ISO-8601 UTC with second precision, e.g. `2024-05-01T18:30:00Z`."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_exported_at(moment: datetime) -> str:
    """Format an export time as ISO-8601 UTC with milliseconds, e.g. `2024-05-01T18:30:00.123Z`."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class PlayStore:
    """Create, list, fetch, delete, export and import plays.

    Args:
        table: Key-value access to the plays table.
        clock: Returns the current time; injectable for tests.
    """

    def __init__(self, table: PlayTable, clock=_utc_now):
        self.table = table
        self.clock = clock

    def create_play(self, name: str, player_states: list[PlayerState]) -> Play:
        """Build a new play and write it unconditionally.

        Args:
            name: Human-readable play name. Not validated.
            player_states: Samples in playback order. May be empty.

        Returns:
            Play: The stored play, including its generated `id` and `createdAt`.

        Raises:
            InternalFault: If the play cannot be serialized or the write fails.
        """
        play = Play(
            id=new_play_id(),
            name=name,
            created_at=format_created_at(self.clock()),
            player_states=player_states,
        )
        logger.info("Creating play %s (%d player states)", play.id, len(play.player_states))

        try:
            item = to_item(play)
        except SerializationError:
            logger.exception("Error serializing play %s", play.id)
            raise InternalFault("Failed to serialize play")

        try:
            self.table.put_item(item)
        except StoreError:
            logger.exception("Error writing play %s to the store", play.id)
            raise InternalFault("Failed to create play")

        logger.info("Successfully created play with ID: %s", play.id)
        return play

    def list_plays(self, limit: int | None = None, offset: int = 0) -> list[Play]:
        """Return every stored play, or one page of them when `limit`/`offset` are given.

        Raises:
            InternalFault: If the scan fails or any record cannot be decoded.
        """
        try:
            items = self.table.scan(limit=limit, offset=offset)
        except StoreError:
            logger.exception("Error scanning plays")
            raise InternalFault("Failed to fetch plays")

        try:
            return [from_item(item) for item in items]
        except SerializationError:
            logger.exception("Error deserializing plays")
            raise InternalFault("Failed to deserialize plays")

    def get_play(self, play_id: str) -> Play:
        """Fetch one play by id.

        Raises:
            NotFoundFault: If no play has this id.
            InternalFault: If the lookup fails or the record cannot be decoded.
        """
        try:
            item = self.table.get_item(play_id)
        except StoreError:
            logger.exception("Error getting play %s", play_id)
            raise InternalFault("Failed to fetch play")

        if item is None:
            raise NotFoundFault("Play not found")

        try:
            return from_item(item)
        except SerializationError:
            logger.exception("Error deserializing play %s", play_id)
            raise InternalFault("Failed to deserialize play")

    def delete_play(self, play_id: str) -> None:
        """Delete one play by id. Deleting an unknown id succeeds."""
        try:
            self.table.delete_item(play_id)
        except StoreError:
            logger.exception("Error deleting play %s", play_id)
            raise InternalFault("Failed to delete play")

    def export_plays(self, app_name: str) -> PlayExport:
        """Bundle every stored play for download.

        Args:
            app_name: Name recorded in the bundle metadata.
        """
        plays = self.list_plays()
        return PlayExport(
            version=EXPORT_VERSION,
            exported_at=format_exported_at(self.clock()),
            plays=plays,
            metadata=ExportMetadata(total_plays=len(plays), app_name=app_name),
        )

    def import_plays(self, entries: list[Any]) -> ImportResult:
        """Create a new play for each usable entry of an import bundle.

        An entry needs a non-empty string `name` and a `playerStates` list.
        Samples inside it are checked one by one and unusable ones are dropped;
        an entry left with no usable sample is skipped. Skipped entries are
        reported as `Play <n>: <reason>` (1-based). Incoming `id` and
        `createdAt` values are ignored; every imported play gets a fresh identity.

        Raises:
            ValidationFault: If the bundle holds no entries.
            InternalFault: If a write fails. Plays imported before the failure stay stored.
        """
        if not entries:
            raise ValidationFault("No plays found in the import")

        success = 0
        errors: list[str] = []
        for n, entry in enumerate(entries, start=1):
            name = entry.get("name") if isinstance(entry, dict) else None
            if not name or not isinstance(name, str):
                errors.append(f"Play {n}: Missing or invalid name")
                continue

            raw_states = entry.get("playerStates")
            if not isinstance(raw_states, list):
                errors.append(f"Play {n}: Missing or invalid player states")
                continue

            states = [s for s in map(_importable_state, raw_states) if s is not None]
            if not states:
                errors.append(f"Play {n}: No valid player states found")
                continue

            self.create_play(name, states)
            success += 1

        logger.info("Imported %d plays (%d rejected)", success, len(errors))
        return ImportResult(success=success, errors=errors)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _importable_state(raw: Any) -> PlayerState | None:
    """Return the sample as a `PlayerState`, or None if an import should drop it.

    A sample must carry a player id, numeric x/y and a non-zero timestamp, and
    must otherwise match the sample schema.
    """
    if not isinstance(raw, dict):
        return None
    position = raw.get("position")
    if not raw.get("playerId") or not isinstance(position, dict):
        return None
    if not (_is_number(position.get("x")) and _is_number(position.get("y"))):
        return None
    if not raw.get("timestamp"):
        return None

    try:
        return PlayerState.model_validate(raw)
    except ValidationError:
        return None
