import threading
import urllib.request
from pathlib import Path

import pytest

from sitebuilder.web import create_server


def test_server_serves_built_files(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("<!DOCTYPE html><html><body>preview</body></html>", encoding="utf-8")
    server = create_server(tmp_path, port=0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        with urllib.request.urlopen(f"http://{host}:{port}/index.html", timeout=5) as response:
            body = response.read().decode("utf-8")
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)

    assert "preview" in body


def test_server_requires_existing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        create_server(tmp_path / "missing", port=0)
