from __future__ import annotations

import itertools

import pytest

from wpexport.reports.batching import (
    BatchPhase,
    BatchState,
    paginate,
    plan_batches,
    run_batches,
    should_be_batched,
)
from wpexport.reports.models import ExportOptions


FULL = ExportOptions(with_descriptions=True, with_attachments=True)


@pytest.mark.parametrize(
    "descriptions,attachments,count,expected",
    [
        (True, True, 101, True),
        (True, True, 100, False),
        (True, False, 500, False),
        (False, True, 500, False),
        (False, False, 500, False),
        (True, True, 0, False),
    ],
)
def test_should_be_batched_needs_details_attachments_and_size(descriptions, attachments, count, expected):
    opts = ExportOptions(with_descriptions=descriptions, with_attachments=attachments)
    assert should_be_batched(count, opts, batch_size=100) is expected


def test_plan_batches_counts():
    plan = plan_batches(250, FULL, batch_size=100)
    assert plan.phase == BatchPhase.BATCHED
    assert plan.batch_count == 3

    single = plan_batches(50, ExportOptions(), batch_size=100)
    assert single.phase == BatchPhase.NOT_BATCHED
    assert single.batch_count == 1


def test_invalid_batch_size_rejected():
    with pytest.raises(ValueError):
        plan_batches(10, FULL, batch_size=0)
    with pytest.raises(ValueError):
        paginate([1, 2, 3], 0, 2)


def test_paginate_partitions_sequence_without_gaps_or_overlap():
    for n, b in itertools.product([0, 1, 7, 99, 100, 101, 250], [1, 3, 50, 100]):
        items = list(range(n))
        pages = max(1, -(-n // b))
        chunks = [paginate(items, page, b) for page in range(1, pages + 1)]
        assert list(itertools.chain.from_iterable(chunks)) == items
        assert all(len(c) == b for c in chunks[:-1])


def test_paginate_last_batch_is_shorter():
    items = list(range(250))
    sizes = [len(paginate(items, page, 100)) for page in (1, 2, 3)]
    assert sizes == [100, 100, 50]
    assert paginate(items, 4, 100) == []


def test_batch_state_accumulates_pages_and_files():
    state = BatchState(phase=BatchPhase.BATCHED)
    state = state.advance("a.pdf", 3).advance("b.pdf", 5)
    assert state.page_count == 8
    assert state.files == ("a.pdf", "b.pdf")
    assert state.iteration == 2
    assert state.done().phase == BatchPhase.DONE


def test_run_batches_passes_running_page_offset():
    items = list(range(250))
    plan = plan_batches(len(items), FULL, batch_size=100)
    seen = []

    def _render(index, batch, state):
        seen.append((index, len(batch), state.page_count))
        return f"batch_{index}.pdf", len(batch) // 10

    state = run_batches(plan, items, _render)
    assert seen == [(1, 100, 0), (2, 100, 10), (3, 50, 20)]
    assert state.page_count == 25
    assert state.files == ("batch_1.pdf", "batch_2.pdf", "batch_3.pdf")
    assert state.phase == BatchPhase.DONE


def test_run_batches_single_pass_when_not_batched():
    items = list(range(50))
    plan = plan_batches(len(items), ExportOptions(with_descriptions=False), batch_size=100)
    calls = []

    def _render(index, batch, state):
        calls.append(list(batch))
        return "only.pdf", 2

    state = run_batches(plan, items, _render)
    assert calls == [items]
    assert state.files == ("only.pdf",)


def test_run_batches_deletes_rendered_files_on_failure(tmp_path):
    items = list(range(30))
    plan = plan_batches(len(items), FULL, batch_size=10)

    def _render(index, batch, state):
        if index == 3:
            raise RuntimeError("render failed")
        path = tmp_path / f"batch_{index}.pdf"
        path.write_bytes(b"%PDF-1.4\n")
        return str(path), 1

    with pytest.raises(RuntimeError):
        run_batches(plan, items, _render)
    assert list(tmp_path.iterdir()) == []
