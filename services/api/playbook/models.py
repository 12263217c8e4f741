"""SQLAlchemy models for the play store.

Plays are persisted as one row per play keyed by the string `id`. Column names
are the wire attribute names (`createdAt`, `playerStates`) so the stored record
mirrors the JSON document one-to-one; the nested player states are kept as a
single JSON document column rather than normalized into child tables.
"""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class PlayRecord(Base):
    __tablename__ = "plays"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[str] = mapped_column("createdAt", String(40), nullable=False)
    player_states: Mapped[list] = mapped_column("playerStates", JSON, nullable=False)
