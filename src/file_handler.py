"""Intake of handwriting sample images.

Local files are checked to be images (by mime type and by Pillow actually
opening them) and copied into the upload directory. http(s) URLs are taken
as already-hosted samples and passed through as references.
"""

import datetime
import logging
import mimetypes
import os
import shutil
from pathlib import Path

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class FileHandler:
    def __init__(self, upload_dir="uploads"):
        self.upload_dir = (
            Path(upload_dir) if not isinstance(upload_dir, Path) else upload_dir
        )
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def handle_input(self, input_path: str) -> dict:
        input_path = (input_path or "").strip()
        if not input_path:
            raise ValueError("Empty input.")

        if input_path.startswith(("http://", "https://")):
            return self._handle_url(input_path)

        p = Path(input_path)
        if p.is_file():
            return self._handle_file(p)

        raise ValueError(f"Unsupported input: {input_path}")

    def _handle_file(self, filepath: Path) -> dict:
        mime = mimetypes.guess_type(str(filepath))[0] or "application/octet-stream"
        if not mime.startswith("image/"):
            raise ValueError(
                f"Invalid file type: {filepath.name} is not an image. "
                "Please upload an image file."
            )
        width, height = _probe_image(filepath)

        stored_path = self.upload_dir / filepath.name
        base = stored_path.with_suffix("")
        ext = stored_path.suffix
        i = 1
        while stored_path.exists():
            stored_path = self.upload_dir / f"{base.name}({i}){ext}"
            i += 1
        shutil.copy2(str(filepath), str(stored_path))
        logger.info("Stored sample %s -> %s", filepath, stored_path)

        return {
            "filename": stored_path.name,
            "filetype": mime,
            "category": categorize_file(str(stored_path), mime),
            "size": stored_path.stat().st_size,
            "width": width,
            "height": height,
            "uploaded_at": datetime.datetime.now().isoformat(timespec="seconds"),
            "stored_path": str(stored_path),
            "sample_ref": stored_path.resolve().as_uri(),
        }

    def _handle_url(self, url: str) -> dict:
        name = url.rstrip("/").split("/")[-1].split("?")[0] or "sample"
        mime = mimetypes.guess_type(name)[0] or "application/octet-stream"
        return {
            "filename": name,
            "filetype": mime,
            "category": categorize_file(name, mime),
            "size": None,
            "width": None,
            "height": None,
            "uploaded_at": datetime.datetime.now().isoformat(timespec="seconds"),
            "stored_path": None,
            "sample_ref": url,
            "source": {"type": "url", "url": url},
        }


def _probe_image(path: Path):
    """Return (width, height); ValueError if Pillow cannot read the file."""
    try:
        with Image.open(path) as img:
            img.verify()
        # verify() leaves the image unusable; reopen for the size
        with Image.open(path) as img:
            return img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        raise ValueError(f"Unreadable image {path.name}: {e}") from e


def categorize_file(path: str, mime_type: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    mime = mime_type or ""
    if ext == ".png" or mime == "image/png":
        return "image-png"
    if ext in (".jpg", ".jpeg") or mime == "image/jpeg":
        return "image-jpeg"
    if ext == ".gif" or mime == "image/gif":
        return "image-gif"
    if ext == ".webp" or mime == "image/webp":
        return "image-webp"
    if ext == ".bmp" or mime in ("image/bmp", "image/x-ms-bmp"):
        return "image-bmp"
    if mime.startswith("image/"):
        return "image-other"

    return "unknown"
