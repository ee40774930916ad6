"""Splitting of large exports with embedded images into fixed-size batches.

Embedded images stay in memory until a document is rendered, so exports
with details and attachments are rendered in batches and merged afterwards.
Table-only exports and small lists are rendered in one pass.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from ..core.config.export import DEFAULT_BATCH_SIZE
from .models import ExportOptions


T = TypeVar("T")


class BatchPhase(str, Enum):
    NOT_BATCHED = "not_batched"
    BATCHED = "batched"
    DONE = "done"


@dataclass(frozen=True)
class BatchPlan:
    phase: BatchPhase
    batch_count: int
    batch_size: int
    total: int

    @property
    def batched(self) -> bool:
        return self.phase == BatchPhase.BATCHED


@dataclass(frozen=True)
class BatchState:
    """Accumulator threaded through the render passes."""

    phase: BatchPhase
    page_count: int = 0
    files: Tuple[str, ...] = ()
    iteration: int = 0

    def advance(self, path: str, pages: int) -> "BatchState":
        return replace(
            self,
            page_count=self.page_count + int(pages),
            files=self.files + (path,),
            iteration=self.iteration + 1,
        )

    def done(self) -> "BatchState":
        return replace(self, phase=BatchPhase.DONE)


RenderPass = Callable[[int, Sequence[T], BatchState], Tuple[str, int]]


def _check_batch_size(batch_size: int) -> int:
    size = int(batch_size)
    if size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    return size


def should_be_batched(count: int, options: ExportOptions, batch_size: int = DEFAULT_BATCH_SIZE) -> bool:
    size = _check_batch_size(batch_size)
    return bool(options.with_descriptions and options.with_attachments and int(count) > size)


def plan_batches(count: int, options: ExportOptions, batch_size: int = DEFAULT_BATCH_SIZE) -> BatchPlan:
    size = _check_batch_size(batch_size)
    if should_be_batched(count, options, size):
        return BatchPlan(BatchPhase.BATCHED, math.ceil(int(count) / size), size, int(count))
    return BatchPlan(BatchPhase.NOT_BATCHED, 1, size, int(count))


def paginate(items: Sequence[T], page: int, per_page: int) -> List[T]:
    """Return the 1-indexed page of items."""
    size = _check_batch_size(per_page)
    if int(page) < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    start = (int(page) - 1) * size
    return list(items[start:start + size])


def discard_files(paths: Sequence[str], logger: Optional[logging.Logger] = None) -> None:
    log = logger or logging.getLogger(__name__)
    for path in paths:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            log.warning("Could not delete intermediate PDF %s: %s", path, exc)


def run_batches(
    plan: BatchPlan,
    items: Sequence[T],
    render_pass: RenderPass,
    logger: Optional[logging.Logger] = None,
) -> BatchState:
    """Render every batch of the plan in order and return the final accumulator.

    render_pass(batch_index, batch_items, state) renders one file and returns
    (path, page_count). If a pass fails, files rendered so far are deleted.
    """
    state = BatchState(phase=plan.phase)
    try:
        if not plan.batched:
            path, pages = render_pass(1, list(items), state)
            state = state.advance(path, pages)
        else:
            for batch_index in range(1, plan.batch_count + 1):
                batch_items = paginate(items, batch_index, plan.batch_size)
                path, pages = render_pass(batch_index, batch_items, state)
                state = state.advance(path, pages)
    except BaseException:
        discard_files(state.files, logger)
        raise
    return state.done()
