"""Facebook Graph API client.

One GET per call, no retries and no backoff. Failures never raise: network
errors and unparseable bodies both come back as ``None``, and callers treat
``None`` as "no data" rather than as a hard error. Graph API error objects
(``{"error": {...}}``, usually with a 4xx status) are passed through as-is so
presentation code can surface ``error.message``.
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from socialmeta import __version__

if TYPE_CHECKING:
    from socialmeta.config import GraphSettings

log = structlog.get_logger()

GRAPH_BASE_URL = "https://graph.facebook.com/"

_TOKEN_RE = re.compile(r"(access_token=)[^&]*")


def redact_token(path: str) -> str:
    """Hide the access token in a Graph API path before it is logged."""
    return _TOKEN_RE.sub(r"\1(hidden)", path)


def build_http_client() -> httpx.AsyncClient:
    """Create the shared httpx client. Timeouts stay at the httpx default."""
    return httpx.AsyncClient(
        headers={"User-Agent": f"socialmeta/{__version__}"},
        follow_redirects=True,
    )


class GraphClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: GraphSettings | None = None,
    ) -> None:
        self._client = client
        self._base_url = settings.base_url if settings is not None else GRAPH_BASE_URL

    async def fetch(self, relative_path: str) -> Any:
        """GET ``base_url + relative_path`` and decode the body as JSON.

        Returns ``None`` on transport failure or when the body is not JSON.
        """
        url = self._base_url + relative_path
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning(
                "graph_fetch_error",
                path=redact_token(relative_path),
                error=type(exc).__name__,
            )
            return None

        try:
            result = json.loads(response.content)
        except (json.JSONDecodeError, UnicodeDecodeError):
            log.warning(
                "graph_malformed_response",
                path=redact_token(relative_path),
                status_code=response.status_code,
            )
            return None

        if isinstance(result, dict) and "error" in result:
            log.info(
                "graph_upstream_error",
                path=redact_token(relative_path),
                status_code=response.status_code,
            )
        else:
            log.debug("graph_fetch_complete", path=redact_token(relative_path))
        return result
