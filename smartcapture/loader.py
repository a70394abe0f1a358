"""Frame source for the CLI: image files on disk decoded to BGR arrays."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

import cv2
import numpy as np

from .types import ImageMeta

logger = logging.getLogger(__name__)

IMAGE_EXTS = frozenset({".jpg", ".jpeg", ".png", ".bmp", ".webp", ".tiff"})


def find_images(root: str | Path, max_files: Optional[int] = None) -> List[Path]:
    """Image files under `root`, recursively, in path order.

    The order decides which frames fill the capture quota in a batch run.
    """
    root = Path(root)
    if not root.is_dir():
        logger.warning("Input directory does not exist: %s", root)
        return []
    found = sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in IMAGE_EXTS)
    return found if max_files is None else found[:max_files]


def decode_image(path: str | Path) -> Optional[np.ndarray]:
    """Decode to a 3-channel BGR array; None if the file is missing or not an image.

    Bytes are read with numpy so non-ASCII paths work on every platform.
    """
    try:
        data = np.fromfile(str(path), dtype=np.uint8)
    except OSError as e:
        logger.warning("Cannot read %s (%s)", path, e)
        return None
    if data.size == 0:
        return None
    return cv2.imdecode(data, cv2.IMREAD_COLOR)


def load_frame(path: str | Path) -> Tuple[Optional[np.ndarray], Optional[ImageMeta]]:
    image = decode_image(path)
    if image is None:
        return None, None
    h, w = image.shape[:2]
    return image, ImageMeta(path=str(path), width=w, height=h)


def iter_frames(paths: Iterable[Path]) -> Iterator[Tuple[Path, np.ndarray, ImageMeta]]:
    """Decoded frames for `paths`; unreadable files are logged and skipped."""
    for p in paths:
        image, meta = load_frame(p)
        if image is None:
            logger.warning("Skipping unreadable image: %s", p)
            continue
        yield p, image, meta


__all__ = ["IMAGE_EXTS", "find_images", "decode_image", "load_frame", "iter_frames"]
