"""
WireMCP URLhaus Blacklist Client

Fetches the URLhaus plain-text host/URL feed. Any failure degrades to an
empty blacklist; fetch problems are logged and never raised.
"""

from dataclasses import dataclass

import httpx
import structlog

from wiremcp.config import settings

logger = structlog.get_logger(__name__)


@dataclass
class BlacklistFetch:
    """Outcome of one feed download."""

    status: int | None = None
    body: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True for a 2xx response without a transport error."""
        return self.error is None and self.status is not None and 200 <= self.status < 300

    @property
    def text(self) -> str:
        """Body when the fetch succeeded, otherwise empty."""
        return self.body if self.ok else ""


class BlacklistClient:
    """
    URLhaus feed client.

    The feed is fetched once per tool invocation; nothing is cached across
    invocations.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            url: Feed URL (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            transport: Optional httpx transport, used by tests
        """
        self.url = url or settings.blacklist_url
        self.timeout = timeout if timeout is not None else settings.blacklist_timeout
        self._transport = transport

    async def fetch(self) -> BlacklistFetch:
        """Download the feed."""
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    self.url,
                    timeout=self.timeout,
                    follow_redirects=True,
                )
        except httpx.TimeoutException:
            logger.warning("blacklist_fetch_timeout", url=self.url)
            return BlacklistFetch(error="timeout")
        except httpx.RequestError as e:
            logger.warning("blacklist_fetch_failed", url=self.url, error=str(e))
            return BlacklistFetch(error=str(e))

        result = BlacklistFetch(status=response.status_code, body=response.text)
        if result.ok:
            logger.debug("blacklist_fetched", url=self.url, size=len(result.body))
        else:
            logger.warning(
                "blacklist_fetch_failed",
                url=self.url,
                status=response.status_code,
            )
        return result


# Singleton instance
_client_instance: BlacklistClient | None = None


def get_blacklist_client() -> BlacklistClient:
    """Get or create the global blacklist client."""
    global _client_instance
    if _client_instance is None:
        _client_instance = BlacklistClient()
    return _client_instance
