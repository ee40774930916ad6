from __future__ import annotations

import pytest
from pypdf import PdfReader
from reportlab.pdfgen import canvas

from wpexport.reports.errors import MergeFailure
from wpexport.reports.merge import merge_batched_pdfs


def _make_batch_pdf(path, batch: int, pages: int) -> str:
    c = canvas.Canvas(str(path))
    for page in range(1, pages + 1):
        c.setFont("Helvetica", 12)
        c.drawString(72, 720, f"BATCH{batch} PAGE{page}")
        c.showPage()
    c.save()
    return str(path)


def _page_texts(path: str):
    return [(p.extract_text() or "").strip() for p in PdfReader(path).pages]


def test_single_file_is_returned_unchanged(tmp_path):
    only = _make_batch_pdf(tmp_path / "only.pdf", 1, 2)
    before = (tmp_path / "only.pdf").read_bytes()

    out = merge_batched_pdfs([only], tmp_dir=str(tmp_path))

    assert out == only
    assert (tmp_path / "only.pdf").read_bytes() == before


def test_merge_keeps_batch_and_page_order(tmp_path):
    work = tmp_path / "work"
    work.mkdir()
    files = [
        _make_batch_pdf(tmp_path / "b1.pdf", 1, 3),
        _make_batch_pdf(tmp_path / "b2.pdf", 2, 1),
        _make_batch_pdf(tmp_path / "b3.pdf", 3, 2),
    ]

    out = merge_batched_pdfs(files, filename="Demo - Work packages", tmp_dir=str(work))

    texts = _page_texts(out)
    assert len(texts) == 6
    assert [t.split()[0] + " " + t.split()[1] for t in texts] == [
        "BATCH1 PAGE1",
        "BATCH1 PAGE2",
        "BATCH1 PAGE3",
        "BATCH2 PAGE1",
        "BATCH3 PAGE1",
        "BATCH3 PAGE2",
    ]
    assert out.startswith(str(work))
    # Batch files are consumed by the merge.
    assert not any((tmp_path / name).exists() for name in ("b1.pdf", "b2.pdf", "b3.pdf"))


def test_merge_failure_leaves_no_partial_output(tmp_path):
    work = tmp_path / "work"
    work.mkdir()
    good = _make_batch_pdf(tmp_path / "good.pdf", 1, 1)
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"this is not a pdf")

    with pytest.raises(MergeFailure):
        merge_batched_pdfs([good, str(broken)], tmp_dir=str(work))

    assert list(work.iterdir()) == []


def test_merge_without_files_fails():
    with pytest.raises(MergeFailure):
        merge_batched_pdfs([])
