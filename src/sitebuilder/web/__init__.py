"""
Web output helpers (local preview serving).
"""

from .server import DEFAULT_HOST, DEFAULT_PORT, create_server, serve_directory

__all__ = ["DEFAULT_HOST", "DEFAULT_PORT", "create_server", "serve_directory"]
