"""Command that serves the book API on port 8081."""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping
from wsgiref.simple_server import WSGIRequestHandler, make_server

from dotenv import load_dotenv

from booklog.db import MockDb
from booklog.eswriter import ESWriter
from booklog.library import MockAdaptor, Service
from booklog.multilog import Level, MultiSourceLogger
from booklog.transport import App, Handler, make_app

DEFAULT_ES_URL = "http://localhost:9200"
PORT = 8081
SUPPORTED_AUTHORS = frozenset({"james smith", "jack jones", "rachel barnes"})


class _QuietRequestHandler(WSGIRequestHandler):
    def log_message(self, format, *args):  # noqa: A002
        pass


def build_app(environ: Mapping[str, str] | None = None) -> App:
    """Assemble the application from environment settings."""
    env = os.environ if environ is None else environ
    es_url = env.get("ENV_ES_URL") or DEFAULT_ES_URL
    level = Level.INFO if env.get("ENV_LOG_LEVEL") == "debug" else Level.ERROR

    logger = MultiSourceLogger(ESWriter(es_url), level=level)
    adaptor = MockAdaptor(MockDb())
    service = Service(adaptor, SUPPORTED_AUTHORS, logger)
    return make_app(Handler(service, logger))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="booklog-server",
        description=f"Serve the book API on port {PORT}.",
    )
    parser.parse_args(argv)

    load_dotenv()
    app = build_app(os.environ)
    logger = app.handler.logger

    logger.info("server started")
    try:
        with make_server("", PORT, app, handler_class=_QuietRequestHandler) as httpd:
            httpd.serve_forever()
    except OSError as err:
        logger.error("server stopped", err=str(err))
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())