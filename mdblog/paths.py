from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parent
TEMPLATES_DIR = ROOT / "templates"
STATIC_DIR = ROOT / "static"
CACHE_DIR = Path("cache")
ARTICLES_DIR = CACHE_DIR / "articles"
LOGS_DIR = CACHE_DIR / "logs"
SOURCE_SUFFIX = ".md"
ARTICLE_SUFFIX = ".html"
LAYOUT_TEMPLATE = "layout.html"
NOT_FOUND_TEMPLATE = "errors/404.html"
SERVER_ERROR_TEMPLATE = "errors/500.html"
