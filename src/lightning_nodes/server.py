"""Read-only HTTP surface over the node store."""

import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse

from lightning_nodes import __version__
from lightning_nodes.errors import StorageError
from lightning_nodes.models.node import Node
from lightning_nodes.store.base import NodeStore

logger = logging.getLogger(__name__)

HEALTH_BODY = "OK"


def list_nodes(request: Request):
    """Return the full current snapshot; 500 with an empty body if the store fails."""
    store: NodeStore = request.app.state.store
    try:
        nodes = store.list_all()
    except StorageError:
        logger.exception("Failed to list nodes")
        return Response(status_code=500)
    return [n.model_dump() for n in nodes]


def healthz() -> PlainTextResponse:
    return PlainTextResponse(HEALTH_BODY)


def create_app(store: NodeStore) -> FastAPI:
    """Build the app around an injected store. Routes are sync so store I/O runs in the threadpool."""
    app = FastAPI(title="lightning-nodes", version=__version__, docs_url=None, redoc_url=None)
    app.state.store = store
    app.add_api_route("/nodes", list_nodes, methods=["GET"], response_model=list[Node])
    # Generic alias for consumers that do not know the node vocabulary
    app.add_api_route("/records", list_nodes, methods=["GET"], response_model=list[Node])
    app.add_api_route("/healthz", healthz, methods=["GET"], response_class=PlainTextResponse)
    return app
