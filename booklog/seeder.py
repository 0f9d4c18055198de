"""Command that keeps requesting the book list until interrupted."""

from __future__ import annotations

import argparse
import http.client
import signal
import threading
import urllib.error
import urllib.request

DEFAULT_URL = "http://localhost:8081/books"


def fetch_once(url: str) -> bytes:
    """GET ``url`` and return the body, whatever the status code."""
    try:
        with urllib.request.urlopen(url) as response:
            return response.read()
    except urllib.error.HTTPError as err:
        with err:
            return err.read()


def run(url: str, stop: threading.Event) -> int:
    """Request ``url`` repeatedly until ``stop`` is set; return successful reads."""
    completed = 0
    while not stop.is_set():
        try:
            fetch_once(url)
        except OSError as err:
            print("Error making request:", err)
            continue
        except http.client.HTTPException as err:
            print("Error reading response:", err)
            continue
        completed += 1
    return completed


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="booklog-seeder",
        description="Send requests to the book API until interrupted.",
    )
    parser.add_argument("--url", default=DEFAULT_URL, help="address to request")
    args = parser.parse_args(argv)

    interrupted = threading.Event()

    def _on_signal(signum, frame):
        interrupted.set()

    previous = {
        sig: signal.signal(sig, _on_signal) for sig in (signal.SIGINT, signal.SIGTERM)
    }
    stop = threading.Event()
    worker = threading.Thread(target=run, args=(args.url, stop), daemon=True)
    worker.start()
    try:
        while not interrupted.wait(0.2):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    print("Interrupt received, shutting down...")
    stop.set()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())