import socket
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from booklog.seeder import fetch_once, main, run


@pytest.fixture
def server():
    state = {"count": 0, "stop_after": None, "stop": None}

    class BooksHandler(BaseHTTPRequestHandler):
        def do_GET(self):
            state["count"] += 1
            if state["stop_after"] is not None and state["count"] >= state["stop_after"]:
                state["stop"].set()
            if self.path == "/books":
                body, status = b"[]", 200
            else:
                body, status = b"missing", 404
            self.send_response(status)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):  # noqa: A002
            pass

    httpd = HTTPServer(("127.0.0.1", 0), BooksHandler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    base = f"http://127.0.0.1:{httpd.server_address[1]}"
    yield base, state
    httpd.shutdown()
    httpd.server_close()
    thread.join()


def _closed_port_url():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/books"


def test_fetch_once_returns_body(server):
    base, _ = server
    assert fetch_once(base + "/books") == b"[]"


def test_fetch_once_returns_body_for_error_status(server):
    base, _ = server
    assert fetch_once(base + "/other") == b"missing"


def test_fetch_once_connection_failure_raises():
    with pytest.raises(OSError):
        fetch_once(_closed_port_url())


def test_run_returns_immediately_when_stopped(server):
    base, state = server
    stop = threading.Event()
    stop.set()
    assert run(base + "/books", stop) == 0
    assert state["count"] == 0


def test_run_repeats_until_stopped(server):
    base, state = server
    stop = threading.Event()
    state["stop"] = stop
    state["stop_after"] = 3
    assert run(base + "/books", stop) == 3
    assert state["count"] == 3


def test_run_reports_request_errors(capsys):
    stop = threading.Event()
    timer = threading.Timer(0.2, stop.set)
    timer.start()
    try:
        completed = run(_closed_port_url(), stop)
    finally:
        timer.cancel()
    assert completed == 0
    out = capsys.readouterr().out
    assert out.startswith("Error making request:")


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0