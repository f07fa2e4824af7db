"""Logseq HTTP API client.

Logseq desktop exposes its plugin API over HTTP when the API server is
enabled (Settings > Features > HTTP APIs server). Every call is a POST to
``/api`` with a JSON body naming the API method and its arguments:

    {"method": "logseq.Editor.getCurrentPage", "args": []}

Requests authenticate with a bearer token created in the server settings.
"""

import logging
from typing import Any, Optional

import requests

from ..text import blocks_to_text

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://127.0.0.1:12315"


class LogseqError(Exception):
    """Base exception for Logseq API errors."""

    pass


class LogseqAuthError(LogseqError):
    """Raised when the API token is missing or rejected."""

    pass


class LogseqClient:
    """Client for the Logseq HTTP API."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        token: Optional[str] = None,
        timeout: int = 10,
    ):
        """Initialize client.

        Args:
            base_url: API server address
            token: Authorization token configured in Logseq
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        if token:
            self._session.headers.update({"Authorization": f"Bearer {token}"})

    def call(self, method: str, *args: Any) -> Any:
        """Invoke an API method.

        Args:
            method: Fully qualified method, e.g. ``logseq.Editor.getPage``
            *args: Positional arguments for the method

        Returns:
            The decoded JSON result (None when Logseq returns null)

        Raises:
            LogseqAuthError: If the server rejects the token
            LogseqError: On timeouts, connection failures and API errors
        """
        url = f"{self.base_url}/api"
        logger.debug("Logseq call %s%r", method, args)
        try:
            response = self._session.post(
                url,
                json={"method": method, "args": list(args)},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout:
            raise LogseqError("Request timed out")
        except requests.exceptions.ConnectionError:
            raise LogseqError(
                f"Cannot reach Logseq at {self.base_url}. Is the HTTP API server running?"
            )
        except requests.exceptions.HTTPError as e:
            if e.response.status_code in (401, 403):
                raise LogseqAuthError("Logseq rejected the API token")
            raise LogseqError(f"HTTP error: {e.response.status_code}")
        except requests.exceptions.RequestException as e:
            raise LogseqError(f"Request failed: {e}")

        if not response.content:
            return None

        try:
            data = response.json()
        except ValueError:
            raise LogseqError("Invalid JSON in Logseq response")

        if isinstance(data, dict) and set(data) == {"error"}:
            raise LogseqError(f"Logseq error: {data['error']}")
        return data

    # ========================================================================
    # Editor API
    # ========================================================================

    def get_current_page(self) -> Optional[dict]:
        """Get the page open in the main editor."""
        return self.call("logseq.Editor.getCurrentPage")

    def get_page_blocks_tree(self, name: str) -> list[dict]:
        """Get the block tree of a page."""
        return self.call("logseq.Editor.getPageBlocksTree", name) or []

    def get_selected_blocks(self) -> Optional[list[dict]]:
        """Get the blocks currently selected in the editor."""
        return self.call("logseq.Editor.getSelectedBlocks")


class LogseqSource:
    """DocumentSource reading from a running Logseq instance."""

    def __init__(self, client: LogseqClient):
        self.client = client

    def selected_text(self) -> Optional[str]:
        blocks = self.client.get_selected_blocks()
        if blocks:
            return blocks_to_text(blocks)
        return None

    def page_text(self, name: Optional[str] = None) -> Optional[str]:
        if name is None:
            page = self.client.get_current_page()
            name = page.get("name") if page else None
            if not name:
                return None

        blocks = self.client.get_page_blocks_tree(name)
        if not blocks:
            return None
        return blocks_to_text(blocks)
