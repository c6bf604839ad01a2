from __future__ import annotations

from dataclasses import dataclass
import threading
from pathlib import Path

DEFAULT_PORT = 5006
DEFAULT_TITLE = "Markdown Blog"
DEFAULT_ENV = "dev"
PROD_ENV = "prod"


@dataclass(frozen=True)
class SiteConfig:
    content_dir: Path
    env: str = DEFAULT_ENV
    title: str = DEFAULT_TITLE
    index: str = ""
    port: int = DEFAULT_PORT

    @property
    def is_prod(self) -> bool:
        return self.env == PROD_ENV


def parse_port(value: int | str | None) -> int:
    """Return a usable TCP port, falling back to DEFAULT_PORT."""
    if value is None or value == "":
        return DEFAULT_PORT
    try:
        port = int(value)
    except (TypeError, ValueError):
        return DEFAULT_PORT
    if port <= 0 or port >= 65535:
        return DEFAULT_PORT
    return port


class DefaultDocument:
    """Default document key, configured up front or settled once at runtime."""

    def __init__(self, configured: str = ""):
        self._lock = threading.Lock()
        self._key = configured.strip("/")
        self._fixed = bool(self._key)

    @property
    def key(self) -> str:
        return self._key

    def settle(self, candidate: str) -> str:
        """Assign candidate unless a key is already set; return the key."""
        if self._fixed or not candidate:
            return self._key
        with self._lock:
            if not self._fixed:
                self._key = candidate
                self._fixed = True
        return self._key
