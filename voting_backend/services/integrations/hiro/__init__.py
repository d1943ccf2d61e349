from voting_backend.services.integrations.hiro.base import BaseHiroApi
from voting_backend.services.integrations.hiro.models import ReadOnlyCallResult
from voting_backend.services.integrations.hiro.node_api import StacksNodeApi
from voting_backend.services.integrations.hiro.utils import (
    HiroApiConnectionError,
    HiroApiError,
)

__all__ = [
    "BaseHiroApi",
    "StacksNodeApi",
    "ReadOnlyCallResult",
    "HiroApiError",
    "HiroApiConnectionError",
]
