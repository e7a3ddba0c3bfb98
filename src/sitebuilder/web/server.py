"""
Local preview server for a built site.
"""

from __future__ import annotations

import functools
import logging
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


class _PreviewRequestHandler(SimpleHTTPRequestHandler):
    def log_message(self, format: str, *args) -> None:
        logger.info("%s %s", self.address_string(), format % args)


def create_server(directory: Path, *, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> ThreadingHTTPServer:
    """
    Bind a static file server rooted at directory (port 0 picks a free port).
    """
    root = Path(directory).expanduser().resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Nothing to serve at {root}")
    handler = functools.partial(_PreviewRequestHandler, directory=str(root))
    return ThreadingHTTPServer((host, port), handler)


def serve_directory(directory: Path, *, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """
    Serve directory until interrupted.
    """
    server = create_server(directory, host=host, port=port)
    bound_host, bound_port = server.server_address[:2]
    logger.info("Serving %s at http://%s:%s/", directory, bound_host, bound_port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Preview server stopped")
    finally:
        server.server_close()
