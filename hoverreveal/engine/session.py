"""Session: the per-viewer Active Selection and its hover/click state machine.

    Idle --move onto mapped component--> Hovering(key)
    Hovering(key) --move onto other item--> Hovering(key2)
    Hovering(key) --leave / move onto background--> Idle

Clicks never change the selection; they report the item under the pointer.
"""

from __future__ import annotations

import enum
import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from hoverreveal.engine.hit_test import DisplayRect, locate
from hoverreveal.engine.segmentation import Scene
from hoverreveal.imaging.loader import encode_png

logger = logging.getLogger(__name__)


class SelectionState(str, enum.Enum):
    IDLE = "idle"
    HOVERING = "hovering"


@dataclass(frozen=True)
class HoverUpdate:
    active_item: str | None
    changed: bool

    @property
    def cursor(self) -> str:
        return "pointer" if self.active_item else "default"


@dataclass(frozen=True)
class ItemDetail:
    """A "show detail" request for the modal."""

    key: str
    title: str
    message: str


class Session:
    """Owns one Active Selection over a shared, read-only Scene."""

    def __init__(self, scene: Scene, session_id: str | None = None) -> None:
        self.id = session_id or uuid.uuid4().hex
        self.scene = scene
        self._active: str | None = None
        self._lock = threading.Lock()

    @property
    def active_item(self) -> str | None:
        return self._active

    @property
    def state(self) -> SelectionState:
        return SelectionState.HOVERING if self._active else SelectionState.IDLE

    def item_at(self, x: float, y: float, rect: DisplayRect) -> str | None:
        label = locate(x, y, rect, self.scene.segmentation.labels)
        return self.scene.segmentation.item_for_label(label)

    def pointer_move(self, x: float, y: float, rect: DisplayRect) -> HoverUpdate:
        key = self.item_at(x, y, rect)
        with self._lock:
            return self._select(key)

    def pointer_leave(self) -> HoverUpdate:
        with self._lock:
            return self._select(None)

    def click(self, x: float, y: float, rect: DisplayRect) -> ItemDetail | None:
        item = self.scene.item(self.item_at(x, y, rect))
        if item is None:
            return None
        logger.debug("Session %s: detail for %r", self.id, item.key)
        return ItemDetail(key=item.key, title=item.title, message=item.message)

    def frame(self) -> NDArray[np.uint8]:
        """Composited frame for the current selection (a private copy)."""
        with self.scene.frame(self._active_labels()) as pixels:
            return pixels.copy()

    def frame_png(self) -> bytes:
        """PNG of the current frame, encoded straight from the shared buffer."""
        with self.scene.frame(self._active_labels()) as pixels:
            return encode_png(pixels)

    def _active_labels(self) -> frozenset[int]:
        with self._lock:
            return self.scene.segmentation.labels_for(self._active)

    def _select(self, key: str | None) -> HoverUpdate:
        if key == self._active:
            return HoverUpdate(active_item=key, changed=False)
        logger.debug("Session %s: %s -> %s", self.id, self._active, key)
        self._active = key
        return HoverUpdate(active_item=key, changed=True)


class SessionStore:
    """In-memory sessions, oldest evicted first once ``max_sessions`` is reached."""

    def __init__(self, max_sessions: int = 256) -> None:
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, Session] = OrderedDict()
        self._lock = threading.Lock()

    def create(self, scene: Scene) -> Session:
        session = Session(scene)
        with self._lock:
            self._sessions[session.id] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted session %s", evicted)
        return session

    def get(self, session_id: str) -> Session | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
            return session

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
