"""Play API routes.

Responsibilities:
- play CRUD (`POST/GET /plays`, `GET/DELETE /plays/{play_id}`)
- bulk export and import of plays (`/plays/export`, `/plays/import`)

Handlers stay thin: each builds a `PlayStore` over the request-scoped session
and makes a single call on it. Faults raised by the store are rendered by the
exception handlers registered in `playbook.errors`.
"""

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..play_store import PlayStore
from ..schemas import ImportResult, Play, PlayCreate, PlayExport, PlayImport
from ..store import PlayTable

router = APIRouter(tags=["plays"])


def get_play_store(db: Session = Depends(get_db)) -> PlayStore:
    """FastAPI dependency that wraps the request session in a `PlayStore`."""
    return PlayStore(PlayTable(db))


@router.post("/plays", response_model=Play, response_model_exclude_none=True)
def create_play(payload: PlayCreate, store: PlayStore = Depends(get_play_store)):
    """Create a play from a name and its ordered player states.

    The server assigns the id and creation time; the full play is returned.
    """
    return store.create_play(payload.name, payload.player_states)


@router.get("/plays", response_model=list[Play], response_model_exclude_none=True)
def list_plays(
    limit: int | None = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    store: PlayStore = Depends(get_play_store),
):
    """List plays.

    Without `limit` every stored play is returned in store order. With
    `limit`/`offset` the plays are paged in id order.

    Args:
        limit: Optional page size.
        offset: Number of plays to skip.
        store: Play store (injected).

    Returns:
        list: Play documents; empty when nothing is stored.
    """
    return store.list_plays(limit=limit, offset=offset)


@router.get("/plays/export", response_model=PlayExport, response_model_exclude_none=True)
def export_plays(request: Request, store: PlayStore = Depends(get_play_store)):
    """Download every stored play as one bundle with version and metadata."""
    return store.export_plays(app_name=request.app.state.settings.app_name)


@router.post("/plays/import", response_model=ImportResult)
def import_plays(payload: PlayImport, store: PlayStore = Depends(get_play_store)):
    """Create a new play for each valid entry of an exported bundle.

    Returns:
        dict: `{ "success": <int>, "errors": ["Play <n>: <reason>", ...] }`.
    """
    return store.import_plays(payload.plays)


@router.get("/plays/{play_id}", response_model=Play, response_model_exclude_none=True)
def get_play(play_id: str, store: PlayStore = Depends(get_play_store)):
    """Fetch a single play.

    Raises:
        NotFoundFault: 404 if the play does not exist.
    """
    return store.get_play(play_id)


@router.delete("/plays/{play_id}", status_code=204, response_class=Response)
def delete_play(play_id: str, store: PlayStore = Depends(get_play_store)):
    store.delete_play(play_id)
    return Response(status_code=204)
