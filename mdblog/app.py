"""Flask application serving Markdown documents with a cached render."""

from __future__ import annotations

import logging
import time

from flask import Flask, abort, g, request
from markupsafe import Markup
from werkzeug.exceptions import HTTPException

from mdblog.articles import ArticleCache, RenderError, SourceNotFound
from mdblog.config import DefaultDocument, SiteConfig
from mdblog.nav import build_navigation, link_to_key, resolve_active
from mdblog.paths import (
    ARTICLES_DIR,
    LAYOUT_TEMPLATE,
    NOT_FOUND_TEMPLATE,
    SERVER_ERROR_TEMPLATE,
    STATIC_DIR,
)
from mdblog.render import PageView, get_template_env, load_article, render_page

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("mdblog.access")


def create_app(config: SiteConfig, cache_dir=ARTICLES_DIR) -> Flask:
    """Build the site application for config."""
    app = Flask(__name__, static_folder=str(STATIC_DIR), static_url_path="/static")
    templates = get_template_env()
    articles = ArticleCache(config.content_dir, cache_dir)
    default_doc = DefaultDocument(config.index)

    def page_view(content: Markup = Markup("")) -> PageView:
        return PageView(
            title=config.title,
            nav=g.get("nav", []),
            active=g.get("active", ""),
            content=content,
        )

    @app.before_request
    def build_nav():
        g.started = time.perf_counter()
        if request.endpoint == "static":
            return
        nav, first = build_navigation(config.content_dir)
        if first is not None:
            default_doc.settle(link_to_key(first.link))
        g.nav = nav
        g.active = resolve_active(
            (request.view_args or {}).get("key", ""), default_doc.key
        )

    @app.after_request
    def log_access(response):
        elapsed = (time.perf_counter() - g.get("started", time.perf_counter())) * 1000
        access_logger.info(
            "%s %s %s %.2fms",
            request.method,
            request.path,
            response.status_code,
            elapsed,
        )
        return response

    @app.route("/", defaults={"key": ""})
    @app.route("/<path:key>")
    def show(key: str):
        active = g.active
        try:
            article = articles.render(active, request_path=request.path)
        except SourceNotFound as exc:
            logger.error("Not Found '%s', Path is %s", exc.path, exc.request_path)
            abort(404)
        except RenderError as exc:
            logger.error(
                "%s, Source is %s, Path is %s",
                exc,
                articles.source_path(active),
                exc.request_path,
            )
            abort(500)

        view = page_view(load_article(article))
        return render_page(templates.get_template(LAYOUT_TEMPLATE), view)

    @app.errorhandler(404)
    def not_found(error: HTTPException):
        return render_page(templates.get_template(NOT_FOUND_TEMPLATE), page_view()), 404

    @app.errorhandler(500)
    def internal_server_error(error):
        return (
            render_page(templates.get_template(SERVER_ERROR_TEMPLATE), page_view()),
            500,
        )

    return app
