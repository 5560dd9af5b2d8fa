"""Spot request value objects."""
from enum import Enum
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SpotRequestState(str, Enum):
    """Lifecycle states reported by EC2 for a spot instance request."""
    OPEN = "open"
    ACTIVE = "active"
    CLOSED = "closed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class SpotRequestStatusCode(str, Enum):
    """Status codes that keep an open request worth polling.

    EC2 reports many more codes than these; anything not listed here is
    treated as a request that will not be fulfilled on its own.
    """
    PENDING_EVALUATION = "pending-evaluation"
    PENDING_FULFILLMENT = "pending-fulfillment"


PENDING_STATUS_CODES: FrozenSet[str] = frozenset(code.value for code in SpotRequestStatusCode)


class PollDecision(str, Enum):
    """What to do with a tracked spot request after observing it."""
    CONTINUE = "continue"
    KILL = "kill"
    STOP_TRACKING = "stop_tracking"


class SpotRequestKey(BaseModel):
    """Identity of a tracked spot request: the region plus the request id."""
    model_config = ConfigDict(frozen=True)

    region: str
    request_id: str

    def __str__(self) -> str:
        return f"{self.region}/{self.request_id}"


class SpotRequestObservation(BaseModel):
    """One spot request as reported by the provider in a describe call."""
    model_config = ConfigDict(frozen=True)

    request_id: str = Field(..., min_length=1, description="Spot instance request ID")
    state: str = Field("", description="Lifecycle state, e.g. open or active")
    status_code: str = Field("", description="Status code nested under the state")

    @field_validator("state", "status_code", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v
