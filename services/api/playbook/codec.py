"""Translation between `Play` objects and persisted attribute maps.

An attribute map is the plain-dict form a play is stored in: the wire field
names at every level (`id`, `name`, `createdAt`, `playerStates`, nested
`playerId`, `ballState`, `attachedTo`, ...), JSON-compatible values only, and
optional fields left out entirely when absent.
"""

from typing import Any

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .schemas import Play

PRIMARY_KEY = "id"


class SerializationError(Exception):
    """A play could not be converted to or from its attribute map."""


def to_item(play: Play) -> dict[str, Any]:
    """Serialize a play into the attribute map written to the store.

    Raises:
        SerializationError: If the model cannot be dumped to JSON-compatible values.
    """
    try:
        return play.model_dump(mode="json", by_alias=True, exclude_none=True)
    except PydanticSerializationError as exc:
        raise SerializationError(f"cannot serialize play {play.id}: {exc}") from exc


def from_item(item: dict[str, Any]) -> Play:
    """Rebuild a play from a stored attribute map.

    Raises:
        SerializationError: If the stored record does not match the play schema.
    """
    try:
        return Play.model_validate(item)
    except ValidationError as exc:
        key = item.get(PRIMARY_KEY) if isinstance(item, dict) else None
        raise SerializationError(f"cannot deserialize play {key}: {exc}") from exc
