from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from mdblog.paths import ARTICLE_SUFFIX, ARTICLES_DIR, SOURCE_SUFFIX
from mdblog.render import markdown_to_safe_html

logger = logging.getLogger(__name__)

ARTICLE_MODE = 0o777


class RenderError(Exception):
    """Base error for a failed article render."""

    def __init__(self, message: str, path: Path, request_path: str = ""):
        super().__init__(message)
        self.path = path
        self.request_path = request_path


class SourceNotFound(RenderError):
    pass


class SourceReadError(RenderError):
    pass


class CacheWriteError(RenderError):
    pass


def write_atomic(path: Path, data: bytes, mode: int = ARTICLE_MODE):
    """Write bytes through a temp file so readers never see a partial file."""
    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(temp_path, mode)
        os.replace(temp_path, path)
    except OSError:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


class ArticleCache:
    """Renders Markdown sources into sanitized HTML files under cache_dir.

    Every call re-renders and overwrites the cached file; there is no
    freshness check against the source.
    """

    def __init__(self, content_dir: Path, cache_dir: Path = ARTICLES_DIR):
        self.content_dir = Path(content_dir)
        self.cache_dir = Path(cache_dir)

    def source_path(self, key: str) -> Path:
        return self.content_dir / f"{key}{SOURCE_SUFFIX}"

    def article_path(self, key: str) -> Path:
        return self.cache_dir / f"{key}{ARTICLE_SUFFIX}"

    def is_valid_key(self, key: str) -> bool:
        """Reject empty keys and keys that climb out of the content root."""
        if not key or ".." in Path(key).parts or Path(key).is_absolute():
            return False
        root = self.content_dir.resolve()
        return self.source_path(key).resolve().is_relative_to(root)

    def source_exists(self, key: str) -> bool:
        """Check that key names a readable document under the content root."""
        try:
            return self.is_valid_key(key) and self.source_path(key).is_file()
        except (OSError, ValueError):
            return False

    def render(self, key: str, request_path: str = "") -> Path:
        """Render the document for key and return the cached article path.

        Raises SourceNotFound, SourceReadError or CacheWriteError.
        """
        source = self.source_path(key)
        target = self.article_path(key)

        if not self.source_exists(key):
            raise SourceNotFound(
                f"Not Found '{source}'", path=source, request_path=request_path
            )

        try:
            content = source.read_bytes()
        except OSError as exc:
            raise SourceReadError(
                f"ReadFile Error '{source}': {exc}",
                path=source,
                request_path=request_path,
            ) from exc

        html = markdown_to_safe_html(content)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            write_atomic(target, html)
        except OSError as exc:
            raise CacheWriteError(
                f"WriteFile Error '{target}': {exc}",
                path=target,
                request_path=request_path,
            ) from exc

        logger.debug("Rendered %s -> %s", source, target)
        return target
