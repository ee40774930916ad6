from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_BATCH_SIZE = 100
DEFAULT_IMAGE_MAX_PX = 1200
DEFAULT_SLOW_BATCH_S = 2.0


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = str(os.getenv(name, "")).strip()
    if not raw:
        return int(default)
    try:
        value = int(raw)
    except ValueError:
        return int(default)
    return value if value >= minimum else int(default)


def _env_float(name: str, default: float) -> float:
    raw = str(os.getenv(name, "")).strip()
    if not raw:
        return float(default)
    try:
        value = float(raw)
    except ValueError:
        return float(default)
    return value if value >= 0.0 else float(default)


def _env_path(name: str) -> Optional[str]:
    raw = str(os.getenv(name, "") or "").strip()
    return raw or None


@dataclass(frozen=True)
class ExportSettings:
    batch_size: int = DEFAULT_BATCH_SIZE
    tmp_dir: Optional[str] = None
    logo_path: Optional[str] = None
    image_max_px: int = DEFAULT_IMAGE_MAX_PX
    slow_batch_s: float = DEFAULT_SLOW_BATCH_S

    @classmethod
    def from_env(cls) -> "ExportSettings":
        return cls(
            batch_size=_env_int("WPEXPORT_BATCH_SIZE", DEFAULT_BATCH_SIZE),
            tmp_dir=_env_path("WPEXPORT_TMP_DIR"),
            logo_path=_env_path("WPEXPORT_LOGO_PATH"),
            image_max_px=_env_int("WPEXPORT_IMAGE_MAX_PX", DEFAULT_IMAGE_MAX_PX, minimum=16),
            slow_batch_s=_env_float("WPEXPORT_SLOW_BATCH_S", DEFAULT_SLOW_BATCH_S),
        )
