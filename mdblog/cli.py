"""Command line entry point: serve a Markdown directory as a website."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from livereload import Server

from mdblog.app import create_app
from mdblog.config import DEFAULT_ENV, DEFAULT_TITLE, SiteConfig, parse_port
from mdblog.logs import setup_logging
from mdblog.paths import TEMPLATES_DIR

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve Markdown files as a website")
    parser.add_argument(
        "--dir",
        default=os.environ.get("MDBLOG_DIR", "md"),
        help="Markdown content directory",
    )
    parser.add_argument(
        "--env",
        default=os.environ.get("MDBLOG_ENV", DEFAULT_ENV),
        help="Runtime environment, 'prod' logs to file only",
    )
    parser.add_argument(
        "--title",
        default=os.environ.get("MDBLOG_TITLE", DEFAULT_TITLE),
        help="Site title",
    )
    parser.add_argument(
        "--index",
        default=os.environ.get("MDBLOG_INDEX", ""),
        help="Default document key, e.g. guide/intro",
    )
    parser.add_argument(
        "--port",
        default=os.environ.get("MDBLOG_PORT"),
        help="Listen port",
    )
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> SiteConfig:
    """Build the site config from parsed arguments."""
    return SiteConfig(
        content_dir=Path(args.dir),
        env=args.env,
        title=args.title,
        index=args.index.strip("/"),
        port=parse_port(args.port),
    )


def serve_dev(app, config: SiteConfig):
    """Serve with live reload on content and template changes."""
    server = Server(app.wsgi_app)
    server.watch(str(config.content_dir))
    server.watch(str(TEMPLATES_DIR))
    server.serve(host="0.0.0.0", port=config.port)


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    config = load_config(args)
    setup_logging(config.is_prod)

    if not config.content_dir.is_dir():
        logger.warning("Content directory %s does not exist", config.content_dir)

    app = create_app(config)
    logger.info("Serving %s on port %d", config.content_dir, config.port)
    if config.is_prod:
        app.run(host="0.0.0.0", port=config.port, threaded=True)
    else:
        serve_dev(app, config)


if __name__ == "__main__":
    main()
