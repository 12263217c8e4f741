"""API schemas for plays.

Pydantic models describing the JSON wire format. Python attributes are
snake_case; the camelCase names used on the wire are declared as aliases and
FastAPI serializes responses by alias. Optional fields default to `None` and
are dropped from responses (`exclude_none`) so an absent ball state never shows
up as a `null` placeholder.

Scalars are checked without type coercion: a timestamp sent as `"1000"` or
`true` is rejected rather than rewritten. A missing or `null` sample field
falls back to its zero value (`""`, `0`, `{x: 0, y: 0}`), and so do a missing
or `null` play name and sample list.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictInt, StrictStr


def _null_to(factory):
    """Replace a `null` input with `factory()` before validation."""

    def replace_null(value):
        return factory() if value is None else value

    return BeforeValidator(replace_null)


def _require_number(value):
    # bool is an int subclass; JSON true/false is not a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("coordinate must be a number")
    return value


# Annotated before-validators run last-to-first: null replacement happens first.
Coordinate = Annotated[float, BeforeValidator(_require_number), _null_to(float)]
Integer = Annotated[StrictInt, _null_to(int)]
Text = Annotated[StrictStr, _null_to(str)]


class AttachmentKind(str, Enum):
    """What the ball is attached to.

    `attacking` / `defensive` are the team-side tags the drawing clients use
    when the ball is carried by a player of that side.
    """

    PLAYER = "player"
    BALL = "ball"
    ATTACKING = "attacking"
    DEFENSIVE = "defensive"


class Position(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    x: Coordinate = 0.0
    y: Coordinate = 0.0


class BallAttachment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: AttachmentKind = Field(alias="type")
    id: Integer = 0


class BallState(BaseModel):
    """Ball position for one sample, optionally attached to an entity."""

    model_config = ConfigDict(populate_by_name=True)

    position: Annotated[Position, _null_to(Position)] = Field(default_factory=Position)
    attached_to: BallAttachment | None = Field(default=None, alias="attachedTo")


class PlayerState(BaseModel):
    """One sampled frame of one player's location during a play."""

    model_config = ConfigDict(populate_by_name=True)

    player_id: Text = Field("", alias="playerId")
    position: Annotated[Position, _null_to(Position)] = Field(default_factory=Position)
    relative_position: Position | None = Field(default=None, alias="relativePosition")
    timestamp: Integer = 0
    ball_state: BallState | None = Field(default=None, alias="ballState")


class PlayCreate(BaseModel):
    """Request body for `POST /api/plays`.

    Neither field is validated beyond its type: an empty name and an empty
    sample list are both accepted.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Text = ""
    player_states: Annotated[list[PlayerState], _null_to(list)] = Field(
        default_factory=list, alias="playerStates"
    )


class Play(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    created_at: str = Field(alias="createdAt")
    player_states: list[PlayerState] = Field(alias="playerStates")


class PlayImport(BaseModel):
    """Request body for `POST /api/plays/import`.

    Entries are kept as raw objects so each one can be validated on its own and
    reported individually.
    """

    plays: list[Any]


class ImportResult(BaseModel):
    success: int
    errors: list[str]


class ExportMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_plays: int = Field(alias="totalPlays")
    app_name: str = Field(alias="appName")


class PlayExport(BaseModel):
    """Portable bundle of every stored play."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = "1.0"
    exported_at: str = Field(alias="exportedAt")
    plays: list[Play]
    metadata: ExportMetadata
