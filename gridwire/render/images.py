"""Image loading for img components.

Loading is an injected capability: the renderer only ever calls
`ImageLoader.load` and falls back to a placeholder when it raises.
"""

import base64
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
}


class ImageLoadError(Exception):
    """An image source could not be resolved or read."""

    def __init__(self, message: str, src: str | None = None):
        super().__init__(message)
        self.src = src


class ImageLoader(Protocol):
    """Turns an img `src` into a data URI."""

    def load(self, src: str) -> str:
        """Return a data URI for src or raise ImageLoadError."""
        ...


class FileImageLoader:
    """Load images from the local file system.

    Absolute sources are read as-is. Relative sources are resolved against
    base_path and must stay inside it.

    Example:
        >>> loader = FileImageLoader("docs/")
        >>> loader.load("logo.png")[:22]
        'data:image/png;base64,'

    Attributes:
        base_path: Directory relative sources resolve against, or None.
    """

    def __init__(self, base_path: Path | str | None = None):
        self.base_path = Path(base_path) if base_path is not None else None

    def resolve(self, src: str) -> Path:
        """Resolve src to a path without touching the file.

        Raises:
            ImageLoadError: Relative src without a base path, or a path that
                escapes the base directory.
        """
        path = Path(src)
        if path.is_absolute():
            return path

        if self.base_path is None:
            raise ImageLoadError(
                f"Cannot resolve relative image path without base path: {src}", src
            )

        try:
            base = self.base_path.resolve()
            resolved = (base / path).resolve()
        except (OSError, ValueError) as e:
            raise ImageLoadError(f"Cannot resolve image path {src!r}: {e}", src) from e
        if resolved != base and not resolved.is_relative_to(base):
            raise ImageLoadError(f"Image path escapes base directory: {src}", src)
        return resolved

    def load(self, src: str) -> str:
        path = self.resolve(src)
        suffix = path.suffix.lower()
        mime = MIME_TYPES.get(suffix)
        if mime is None:
            raise ImageLoadError(f"Unsupported image format: {suffix or src}", src)
        try:
            if not path.is_file():
                raise ImageLoadError(f"Image file not found: {path}", src)
            data = path.read_bytes()
        except (OSError, ValueError) as e:
            raise ImageLoadError(f"Cannot read image {path}: {e}", src) from e

        logger.debug(f"Embedded {path} ({len(data)} bytes)")
        return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
