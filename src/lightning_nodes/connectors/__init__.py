"""Remote sources for node rankings."""

from lightning_nodes.connectors.base import RankingsFetcher
from lightning_nodes.connectors.mempool import MempoolConnector

__all__ = ["MempoolConnector", "RankingsFetcher"]
