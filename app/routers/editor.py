"""Card editor endpoints.

The client holds a ``CardEditorState`` and round-trips it through these
endpoints; only ``PUT /editor`` writes to the store.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_current_owner
from app.models.dashboard import CardEditorState, EditorLinkRemove, EditorLinkUpsert
from app.routers.errors import service_errors
from app.services.editor import (
    load_editor,
    remove_editor_link,
    save_editor,
    sync_editor_links,
    upsert_editor_link,
)

router = APIRouter()


@router.get("/{card_id}", response_model=CardEditorState)
async def open_editor(
    card_id: UUID,
    owner_id: UUID = Depends(get_current_owner),
) -> CardEditorState:
    """Load a card and all of its links, inactive ones included."""
    with service_errors():
        return load_editor(owner_id, card_id)


@router.put("", response_model=CardEditorState)
async def save_editor_state(
    state: CardEditorState,
    owner_id: UUID = Depends(get_current_owner),
) -> CardEditorState:
    """Save card then links.

    A 502 carrying ``X-Saved-Card-Id`` means the card was stored but its
    links were not.
    """
    with service_errors():
        return save_editor(owner_id, state)


@router.post("/links", response_model=CardEditorState)
async def upsert_link(
    body: EditorLinkUpsert,
    _owner_id: UUID = Depends(get_current_owner),
) -> CardEditorState:
    """Add a draft link, or replace the one at ``index``."""
    try:
        return upsert_editor_link(body.state, body.link, body.index)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.post("/links/remove", response_model=CardEditorState)
async def remove_link(
    body: EditorLinkRemove,
    _owner_id: UUID = Depends(get_current_owner),
) -> CardEditorState:
    """Drop the draft link at ``index``; 404 when out of range."""
    try:
        return remove_editor_link(body.state, body.index)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.post("/sync-links", response_model=CardEditorState)
async def sync_links(
    state: CardEditorState,
    owner_id: UUID = Depends(get_current_owner),
) -> CardEditorState:
    """Append auto-synced links from the profile username (not persisted)."""
    with service_errors():
        return sync_editor_links(owner_id, state)
