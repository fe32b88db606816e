"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from hoverreveal.config import Settings
from hoverreveal.engine.segmentation import Scene
from hoverreveal.engine.session import Session, SessionStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_scene(request: Request) -> Scene:
    scene = request.app.state.scene
    if scene is None:
        raise HTTPException(status_code=503, detail="Scene not loaded")
    return scene


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_session(session_id: str, store: SessionStore = Depends(get_session_store)) -> Session:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    return session
