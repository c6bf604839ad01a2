from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown import Markdown
from markupsafe import Markup
import nh3

from mdblog.nav import inc, is_active
from mdblog.paths import TEMPLATES_DIR

if TYPE_CHECKING:
    from pathlib import Path

    from mdblog.nav import NavEntry

MARKDOWN_EXTENSIONS = ["tables", "fenced_code", "sane_lists", "smarty"]
LINK_REL = "nofollow noopener noreferrer"


@dataclass(frozen=True)
class PageView:
    title: str
    nav: list["NavEntry"]
    active: str
    content: Markup = Markup("")


def build_markdown_renderer() -> Markdown:
    """Create a Markdown renderer with site extensions."""
    return Markdown(extensions=MARKDOWN_EXTENSIONS, output_format="html")


def render_markdown(renderer: Markdown, content: str) -> str:
    """Render Markdown content into HTML."""
    renderer.reset()
    return renderer.convert(content)


def ugc_attributes() -> dict[str, set[str]]:
    """Allowed attributes for user generated content."""
    attributes = {tag: set(attrs) for tag, attrs in nh3.ALLOWED_ATTRIBUTES.items()}
    attributes.setdefault("code", set()).add("class")
    return attributes


def sanitize_html(raw: str) -> str:
    """Strip scripts and unsafe attributes from rendered HTML."""
    return nh3.clean(raw, attributes=ugc_attributes(), link_rel=LINK_REL)


def markdown_to_safe_html(source: bytes) -> bytes:
    """Convert raw Markdown bytes into sanitized HTML bytes."""
    renderer = build_markdown_renderer()
    unsafe = render_markdown(renderer, source.decode("utf-8", errors="replace"))
    return sanitize_html(unsafe).encode("utf-8")


def get_template_env() -> Environment:
    """Create a Jinja environment for HTML templates."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(["html"]),
        auto_reload=True,
    )
    env.globals["inc"] = inc
    env.globals["is_active"] = is_active
    return env


def load_article(path: "Path") -> Markup:
    """Read a cached article as trusted markup."""
    return Markup(path.read_text(encoding="utf-8"))


def render_page(template, view: PageView) -> str:
    """Render a full HTML page using Jinja templates."""
    return template.render(
        page_title=view.title,
        nav_items=view.nav,
        active=view.active,
        content_html=view.content,
    )
