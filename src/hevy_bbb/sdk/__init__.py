"""
Hevy Low-Level SDK.

Thin wrapper over the Hevy public HTTP API.
Each function maps 1:1 to a Hevy endpoint.
"""

from hevy_bbb.sdk.client import (
    HevyClient,
    HevyError,
    RemoteAPIError,
    TransportError,
    HevyDecodeError,
)
from hevy_bbb.sdk.types import (
    API_URL,
    SetType,
    LBS_TO_KG,
)

__all__ = [
    "HevyClient",
    "HevyError",
    "RemoteAPIError",
    "TransportError",
    "HevyDecodeError",
    "API_URL",
    "SetType",
    "LBS_TO_KG",
]
