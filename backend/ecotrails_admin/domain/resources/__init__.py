from .catalog import RESOURCES, ResourceEndpoint, ResourceSpec, get_resource
from .errors import (
    AdminApiError,
    FetchError,
    FetchHttpStatusError,
    FetchNetworkError,
    FetchParseError,
    ModalTransitionError,
    MutationError,
    MutationNetworkError,
    MutationRemoteError,
    MutationValidationError,
)
from .manager import ResourceListManager

__all__ = [
    "AdminApiError",
    "FetchError",
    "FetchHttpStatusError",
    "FetchNetworkError",
    "FetchParseError",
    "ModalTransitionError",
    "MutationError",
    "MutationNetworkError",
    "MutationRemoteError",
    "MutationValidationError",
    "RESOURCES",
    "ResourceEndpoint",
    "ResourceListManager",
    "ResourceSpec",
    "get_resource",
]
