"""A writable sink that posts each chunk to an Elasticsearch index."""

from __future__ import annotations

import urllib.error
import urllib.request


class ESWriter:
    """Sends every written chunk as a JSON document to ``<url>/logs/_doc``."""

    def __init__(self, url: str) -> None:
        if not url:
            raise ValueError("url cannot be empty")
        self.url = url

    def write(self, data: bytes | str) -> int:
        """Post ``data`` and return its length; raise OSError on failure."""
        payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        request = urllib.request.Request(
            f"{self.url}/logs/_doc",
            data=payload,
            method="POST",
            headers={"Content-Type": "application/json"},
        )
        try:
            with urllib.request.urlopen(request) as response:
                status = response.status
        except urllib.error.HTTPError as err:
            raise OSError(f"failed to send log, status code: {err.code}") from err
        if status not in (200, 201):
            raise OSError(f"failed to send log, status code: {status}")
        return len(data)