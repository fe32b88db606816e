"""Session endpoints: pointer events in, selection / detail / frames out."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from hoverreveal.dependencies import get_scene, get_session, get_session_store
from hoverreveal.engine.segmentation import Scene
from hoverreveal.engine.session import HoverUpdate, Session, SessionStore
from hoverreveal.models.requests import PointerRequest
from hoverreveal.models.responses import (
    ClickResponse,
    HoverResponse,
    ItemDetailModel,
    SessionResponse,
)

router = APIRouter(prefix="/sessions")


def _hover_response(update: HoverUpdate) -> HoverResponse:
    return HoverResponse(active_item=update.active_item, changed=update.changed, cursor=update.cursor)


@router.post("", response_model=SessionResponse, status_code=201)
def create_session(
    scene: Scene = Depends(get_scene),
    store: SessionStore = Depends(get_session_store),
) -> SessionResponse:
    session = store.create(scene)
    return SessionResponse(session_id=session.id, active_item=session.active_item)


@router.get("/{session_id}", response_model=SessionResponse)
def get_session_state(session: Session = Depends(get_session)) -> SessionResponse:
    return SessionResponse(session_id=session.id, active_item=session.active_item)


@router.delete("/{session_id}", status_code=204)
def delete_session(session: Session = Depends(get_session), store: SessionStore = Depends(get_session_store)) -> Response:
    store.delete(session.id)
    return Response(status_code=204)


@router.post("/{session_id}/move", response_model=HoverResponse)
def pointer_move(req: PointerRequest, session: Session = Depends(get_session)) -> HoverResponse:
    return _hover_response(session.pointer_move(req.x, req.y, req.rect.to_rect()))


@router.post("/{session_id}/leave", response_model=HoverResponse)
def pointer_leave(session: Session = Depends(get_session)) -> HoverResponse:
    return _hover_response(session.pointer_leave())


@router.post("/{session_id}/click", response_model=ClickResponse)
def click(req: PointerRequest, session: Session = Depends(get_session)) -> ClickResponse:
    detail = session.click(req.x, req.y, req.rect.to_rect())
    if detail is None:
        return ClickResponse()
    return ClickResponse(detail=ItemDetailModel(key=detail.key, title=detail.title, message=detail.message))


@router.get("/{session_id}/frame.png")
def frame(session: Session = Depends(get_session)) -> Response:
    return Response(
        content=session.frame_png(),
        media_type="image/png",
        headers={"Cache-Control": "no-store"},
    )
