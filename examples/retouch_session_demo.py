"""
Retouch Session Walkthrough

Drives an EditSession end to end with a local stand-in for the generative
edit backend: upload, retouch, filter, crop, undo/redo, a failing edit and
download. The stand-in applies simple Pillow operations so the demo runs
offline.
"""

import logging
import sys
import tempfile
from io import BytesIO
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from PIL import Image, ImageFilter, ImageOps

from AY_Libs.errors import AyraError
from AY_Libs.ImageEditingLib.image_editing_ops import resource_from_bytes
from AY_Libs.ImageEditingLib.image_models import CropSelection
from AY_Libs.SessionLib.edit_session import EditSession


class LocalBackend:
    """Pretends to be the edit service using plain Pillow filters."""

    def __init__(self):
        self.fail_next = False

    def _run(self, image, operation):
        if self.fail_next:
            self.fail_next = False
            raise RuntimeError("the service is overloaded")
        with Image.open(BytesIO(image.data)) as source:
            result = operation(source.convert("RGB"))
        buffer = BytesIO()
        result.save(buffer, format="PNG")
        return buffer.getvalue()

    def edit_image(self, image, instruction):
        return self._run(image, lambda img: img.filter(ImageFilter.SMOOTH_MORE))

    def filter_image(self, image, prompt):
        return self._run(image, lambda img: ImageOps.posterize(img, 3))

    def adjust_image(self, image, prompt):
        return self._run(image, ImageOps.autocontrast)

    def remove_background(self, image):
        return self._run(image, lambda img: img.convert("RGBA"))


def _make_photo():
    image = Image.new("RGB", (800, 600), "skyblue")
    image.paste((240, 200, 170), (300, 150, 500, 450))
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return resource_from_bytes(buffer.getvalue(), "portrait.png")


def _report(session, label):
    state = session.presentation()
    current = state.current.name if state.current else "<none>"
    print(f"  {label}: current={current} undo={state.can_undo} redo={state.can_redo} "
          f"handles={session.handles.live_count}")


def example_retouch_and_history(session, backend):
    print("=" * 60)
    print("Example 1: Retouch, filter and history")
    print("=" * 60)

    session.upload([_make_photo()])
    _report(session, "uploaded")

    session.composition = (
        session.composition
        .with_badge_toggled("Change hairstyle")
        .with_free_text("make it curly")
    )
    print(f"  instruction: {session.instruction}")
    session.retouch()
    _report(session, "retouched")

    session.filters = session.filters.select_preset("Lomo")
    session.apply_filter()
    _report(session, "filtered")

    session.undo()
    _report(session, "undo")
    session.redo()
    _report(session, "redo")
    print()


def example_crop(session):
    print("=" * 60)
    print("Example 2: Crop at device resolution")
    print("=" * 60)

    session.set_crop_aspect("1:1")
    session.set_crop_selection(CropSelection(
        x=100, y=50, width=150, height=100,
        natural_width=800, natural_height=600,
        displayed_width=400, displayed_height=300,
        pixel_ratio=2.0,
    ))
    cropped = session.apply_crop()
    with Image.open(BytesIO(cropped.data)) as image:
        print(f"  cropped to {image.size[0]}x{image.size[1]} as {cropped.name}")
    _report(session, "cropped")
    print()


def example_failure(session, backend):
    print("=" * 60)
    print("Example 3: A failing edit leaves history untouched")
    print("=" * 60)

    before = len(session.history)
    backend.fail_next = True
    try:
        session.auto_enhance()
        print("❌ FAILED: the edit should have been rejected")
    except AyraError as e:
        print("✓ Edit failed cleanly:")
        print(f"  Error: {e}")
    print(f"  history length {before} -> {len(session.history)}, loading={session.is_loading}")

    try:
        session.generate("   ")
    except AyraError as e:
        print(f"✓ Blank instruction rejected: {e}")
    print()


def example_download(session):
    print("=" * 60)
    print("Example 4: Download")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmpdir:
        path = session.download(Path(tmpdir))
        print(f"  saved {path.name} ({path.stat().st_size} bytes)")
    print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    backend = LocalBackend()
    with EditSession(backend) as session:
        example_retouch_and_history(session, backend)
        example_crop(session)
        example_failure(session, backend)
        example_download(session)

    print(f"Handles live after close: {session.handles.live_count}")
