"""HTTP JSON document store persistence gateway."""

import socket
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from ..data.models import AppState
from ..errors import MalformedStoreError, PersistenceError
from .gateway import PersistenceGateway


class HttpJsonGateway(PersistenceGateway):
    """
    Cloud JSON store: GET returns the document (404 when nothing is stored),
    POST replaces the whole document.
    """

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 10,
        headers: Optional[dict[str, str]] = None,
        seed_factory: Optional[Callable[[], AppState]] = None,
        seed_on_empty: bool = True
    ):
        super().__init__("http", seed_factory=seed_factory, seed_on_empty=seed_on_empty)

        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid URL: {url}")

        self.url = url
        self.timeout_seconds = timeout_seconds
        self.headers = headers or {}

    def _read_document(self) -> Optional[str]:
        req = Request(self.url, headers={"Accept": "application/json", **self.headers}, method="GET")

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                raw = response.read()

        except HTTPError as e:
            if e.code == 404:
                return None
            raise PersistenceError(
                f"HTTP {e.code}: {e.reason}", operation="load", target=self.url
            ) from e

        except (OSError, URLError, socket.timeout) as e:
            raise PersistenceError(
                f"Network error: {e}", operation="load", target=self.url
            ) from e

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedStoreError(
                "Store response is not UTF-8 text", reason="encoding"
            ) from e

    def _write_document(self, document: str) -> None:
        data = document.encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Content-Length": str(len(data)),
            "User-Agent": "loadboard-app/0.1",
            **self.headers,
        }
        req = Request(self.url, data=data, headers=headers, method="POST")

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                response_code = response.getcode()

        except HTTPError as e:
            self.logger.warning(
                "State save rejected",
                gateway=self.name,
                error_code=e.code,
                error_reason=e.reason
            )
            raise PersistenceError(
                f"HTTP {e.code}: {e.reason}", operation="save", target=self.url
            ) from e

        except (OSError, URLError, socket.timeout) as e:
            self.logger.warning(
                "State save network error",
                gateway=self.name,
                error=str(e)
            )
            raise PersistenceError(
                f"Network error: {e}", operation="save", target=self.url
            ) from e

        if not 200 <= response_code < 300:
            raise PersistenceError(
                f"HTTP {response_code}", operation="save", target=self.url
            )

    def health_check(self) -> bool:
        """Check if the store host is reachable."""
        try:
            parsed = urlparse(self.url)
            health_url = f"{parsed.scheme}://{parsed.netloc}"

            req = Request(health_url, method="HEAD")
            with urlopen(req, timeout=5) as response:
                return 200 <= response.getcode() < 400

        except Exception as e:
            self.logger.warning(
                "Health check failed",
                gateway=self.name,
                error=str(e)
            )
            return False
