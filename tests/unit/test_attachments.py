from __future__ import annotations

import datetime as dt

from PIL import Image

from wpexport.reports.attachments import RESIZED_IMAGE_PREFIX, AttachmentEmbedder
from wpexport.reports.decorations import PageDecorator
from wpexport.reports.models import Attachment, ExportContext


def _make_image(path, size=(1600, 900), mode="RGB") -> str:
    Image.new(mode, size, color=(30, 90, 160) if mode == "RGB" else 0).save(str(path), format="PNG")
    return str(path)


def _resized_files(directory):
    return [p for p in directory.iterdir() if p.name.startswith(RESIZED_IMAGE_PREFIX)]


def test_is_image_by_content_type_or_extension():
    assert Attachment("diagram.png", "/x/diagram.png").is_image
    assert Attachment("blob", "/x/blob", content_type="image/jpeg").is_image
    assert not Attachment("manual.pdf", "/x/manual.pdf").is_image
    assert not Attachment("photo.png", "/x/photo.png", content_type="application/pdf").is_image


def test_resize_bounds_longest_side_and_tracks_temp_file(tmp_path):
    src = _make_image(tmp_path / "big.png")
    work = tmp_path / "work"
    work.mkdir()
    embedder = AttachmentEmbedder(max_px=400, tmp_dir=str(work))

    path, w, h = embedder.resize(Attachment("big.png", src))

    assert max(w, h) == 400
    assert embedder.resized_image_paths == [path]
    with Image.open(path) as img:
        assert img.size == (w, h)


def test_flowable_fits_box_and_cleanup_removes_all(tmp_path):
    src = _make_image(tmp_path / "wide.png")
    work = tmp_path / "work"
    work.mkdir()
    embedder = AttachmentEmbedder(max_px=800, tmp_dir=str(work))

    img = embedder.flowable(Attachment("wide.png", src), max_width=300.0, max_height=300.0)
    embedder.flowable(Attachment("wide.png", src), max_width=300.0, max_height=300.0)

    assert img is not None
    assert img.drawWidth <= 300.0 and img.drawHeight <= 300.0
    assert len(_resized_files(work)) == 2
    embedder.delete_all_resized_images()
    assert _resized_files(work) == []
    assert embedder.resized_image_paths == []


def test_non_images_and_broken_files_are_skipped(tmp_path):
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"not an image")
    work = tmp_path / "work"
    work.mkdir()
    embedder = AttachmentEmbedder(tmp_dir=str(work))

    assert embedder.flowable(Attachment("notes.txt", str(tmp_path / "notes.txt")), 100, 100) is None
    assert embedder.flowable(Attachment("missing.png", str(tmp_path / "missing.png")), 100, 100) is None
    assert embedder.flowable(Attachment("broken.png", str(broken)), 100, 100) is None
    assert _resized_files(work) == []


def test_page_label_continues_running_total():
    ctx = ExportContext(user_name="Ada Admin", language="en", today=dt.date(2024, 5, 1))
    first = PageDecorator("Apollo - Work packages", ctx, page_offset=0)
    third = PageDecorator("Apollo - Work packages", ctx, page_offset=17)
    assert first.page_label(1) == "1"
    assert third.page_label(1) == "18"
    assert third.date_string == "05/01/2024"
