"""Embedding of image attachments as resized temporary copies."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import List, Optional, Tuple

from PIL import Image as PILImage
from reportlab.platypus import Image

from ..core.config.export import DEFAULT_IMAGE_MAX_PX
from .models import Attachment


RESIZED_IMAGE_PREFIX = "wp_pdf_image_"


class AttachmentEmbedder:
    """Resizes image attachments into temp files and hands out image flowables.

    One embedder belongs to one render pass. The owner calls
    delete_all_resized_images() once the pass is rendered, whatever the outcome.
    """

    def __init__(
        self,
        max_px: int = DEFAULT_IMAGE_MAX_PX,
        tmp_dir: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.max_px = int(max_px)
        self.tmp_dir = tmp_dir
        self.log = logger or logging.getLogger(__name__)
        self.resized_image_paths: List[str] = []

    def resize(self, attachment: Attachment) -> Tuple[str, int, int]:
        with PILImage.open(attachment.path) as img:
            img.thumbnail((self.max_px, self.max_px))
            if img.mode not in ("RGB", "RGBA", "L", "LA", "P"):
                img = img.convert("RGB")
            fd, path = tempfile.mkstemp(prefix=RESIZED_IMAGE_PREFIX, suffix=".png", dir=self.tmp_dir)
            os.close(fd)
            self.resized_image_paths.append(path)
            img.save(path, format="PNG")
            w, h = img.size
        return path, int(w), int(h)

    def flowable(self, attachment: Attachment, max_width: float, max_height: float) -> Optional[Image]:
        if not attachment.is_image:
            return None
        if not os.path.isfile(attachment.path):
            self.log.warning("Attachment file missing, skipped: %s", attachment.path)
            return None
        try:
            path, w, h = self.resize(attachment)
        except (OSError, PILImage.DecompressionBombError) as exc:
            self.log.warning("Attachment %s is not a readable image, skipped: %s", attachment.filename, exc)
            return None
        if w <= 0 or h <= 0:
            return None
        scale = min(float(max_width) / float(w), float(max_height) / float(h), 1.0)
        return Image(path, width=max(1.0, w * scale), height=max(1.0, h * scale))

    def delete_all_resized_images(self) -> None:
        for path in self.resized_image_paths:
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
        self.resized_image_paths = []
