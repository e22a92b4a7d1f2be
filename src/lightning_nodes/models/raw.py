"""Raw node representation as received from the rankings API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RemoteNode(BaseModel):
    """
    One entry of the remote connectivity ranking.
    Field names follow the API's camelCase; unknown fields are ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    public_key: str = Field(..., description="Node public key, treated as opaque")
    alias: Optional[str] = None
    capacity: int = Field(..., ge=0, description="Total channel capacity in satoshis")
    first_seen: int = Field(..., description="UNIX seconds when the node was first seen")
