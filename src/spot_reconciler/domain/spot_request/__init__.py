"""Spot request bounded context."""

from .aggregate import SpotRequestRecord
from .classifier import classify
from .exceptions import (
    PartialRegionFailure,
    ProviderCallFailure,
    SpotRequestException,
    StateStoreFailure,
)
from .value_objects import (
    PENDING_STATUS_CODES,
    PollDecision,
    SpotRequestKey,
    SpotRequestObservation,
    SpotRequestState,
    SpotRequestStatusCode,
)

__all__ = [
    "SpotRequestRecord",
    "classify",
    "SpotRequestException",
    "ProviderCallFailure",
    "StateStoreFailure",
    "PartialRegionFailure",
    "PENDING_STATUS_CODES",
    "PollDecision",
    "SpotRequestKey",
    "SpotRequestObservation",
    "SpotRequestState",
    "SpotRequestStatusCode",
]
