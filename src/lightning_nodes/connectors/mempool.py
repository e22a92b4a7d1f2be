"""mempool.space connector for the Lightning node connectivity ranking."""

import logging
from typing import Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from lightning_nodes import __version__
from lightning_nodes.connectors.base import RankingsFetcher
from lightning_nodes.errors import FetchError
from lightning_nodes.models.raw import RemoteNode

logger = logging.getLogger(__name__)

_RANKING_ADAPTER = TypeAdapter(list[RemoteNode])


class MempoolConnector(RankingsFetcher):
    """
    Connector for the mempool.space Lightning API.
    Fetches the top nodes by connectivity as a JSON array.
    """

    source_id = "mempool"

    RANKINGS_URL = "https://mempool.space/api/v1/lightning/nodes/rankings/connectivity"

    DEFAULT_HEADERS = {
        "User-Agent": f"lightning-nodes/{__version__}",
        "Accept": "application/json",
    }

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        url: Optional[str] = None,
        timeout: Optional[float] = 60.0,
    ):
        """
        Args:
            client: Optional httpx async client (tests pass one with a MockTransport)
            url: Override the rankings endpoint
            timeout: Request timeout in seconds; None waits indefinitely
        """
        self.url = url or self.RANKINGS_URL
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )

    async def _get(self) -> httpx.Response:
        """GET the rankings endpoint; raise FetchError on transport or status failure."""
        try:
            response = await self._client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP {e.response.status_code} from {self.url}") from e
        except httpx.RequestError as e:
            raise FetchError(f"Request to {self.url} failed: {e!r}") from e
        return response

    def _parse(self, body: bytes) -> list[RemoteNode]:
        """Parse a JSON array of ranking entries."""
        try:
            return _RANKING_ADAPTER.validate_json(body)
        except ValidationError as e:
            raise FetchError(f"Malformed rankings payload: {e.error_count()} error(s)") from e

    async def fetch_rankings(self) -> list[RemoteNode]:
        """Fetch and parse the connectivity ranking."""
        logger.debug("Fetching %s", self.url)
        response = await self._get()
        nodes = self._parse(response.content)
        logger.debug("Fetched %d nodes from %s", len(nodes), self.source_id)
        return nodes

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
