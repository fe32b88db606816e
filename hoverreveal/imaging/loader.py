"""Image acquisition: fetch and decode the base/overlay pair into RGBA arrays.

Any failure here is fatal to startup: there is no degraded mode.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
import requests
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class AcquisitionError(RuntimeError):
    """An image could not be fetched or decoded."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class DimensionMismatchError(AcquisitionError):
    """Base and overlay images are not the same size."""


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_bytes(source: str, timeout: float = 10.0) -> bytes:
    """Read raw image bytes from a local path or an http(s) URL."""
    if _is_url(source):
        try:
            resp = requests.get(source, timeout=timeout, headers={"Cache-Control": "no-store"})
        except requests.RequestException as e:
            raise AcquisitionError(source, f"request failed: {e}") from e
        if not resp.ok:
            raise AcquisitionError(source, f"HTTP {resp.status_code}")
        return resp.content

    try:
        return Path(source).read_bytes()
    except OSError as e:
        raise AcquisitionError(source, f"cannot read file: {e.strerror or e}") from e


def decode_rgba(data: bytes, source: str = "<bytes>") -> NDArray[np.uint8]:
    """Decode encoded image bytes to an (H, W, 4) uint8 array."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return np.array(img.convert("RGBA"), dtype=np.uint8)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise AcquisitionError(source, f"image failed to decode: {e}") from e


def load_image(source: str, timeout: float = 10.0) -> NDArray[np.uint8]:
    pixels = decode_rgba(fetch_bytes(source, timeout=timeout), source)
    logger.info("Loaded %s (%dx%d)", source, pixels.shape[1], pixels.shape[0])
    return pixels


def check_same_size(base: NDArray[np.uint8], overlay: NDArray[np.uint8], source: str = "overlay") -> None:
    if base.shape[:2] != overlay.shape[:2]:
        bh, bw = base.shape[:2]
        oh, ow = overlay.shape[:2]
        raise DimensionMismatchError(source, f"size {ow}x{oh} does not match base {bw}x{bh}")


def load_image_pair(
    base_source: str,
    overlay_source: str,
    timeout: float = 10.0,
) -> tuple[NDArray[np.uint8], NDArray[np.uint8]]:
    """Load both images; both must exist, decode and agree in size."""
    base = load_image(base_source, timeout=timeout)
    overlay = load_image(overlay_source, timeout=timeout)
    check_same_size(base, overlay, overlay_source)
    return base, overlay


def encode_png(pixels: NDArray[np.uint8]) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(pixels)).save(buf, format="PNG")
    return buf.getvalue()
