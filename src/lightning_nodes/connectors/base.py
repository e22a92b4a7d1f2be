"""Abstract base class for remote ranking sources."""

from abc import ABC, abstractmethod

from lightning_nodes.models.raw import RemoteNode


class RankingsFetcher(ABC):
    """
    Standard interface for a source of ranked nodes.
    One call is one request to one fixed endpoint; no retry, no pagination.
    """

    source_id: str = ""

    @abstractmethod
    async def fetch_rankings(self) -> list[RemoteNode]:
        """
        Fetch the full ranking in its raw form.
        Raises FetchError on connection failure, non-success status or an unparseable body.
        """
        pass

    async def aclose(self) -> None:
        """Release network resources. Default: nothing to release."""
        return None
