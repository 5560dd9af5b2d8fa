"""Spot request record - the locally tracked view of an EC2 spot request."""
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import Field

from spot_reconciler.domain.base.entity import Entity
from .value_objects import SpotRequestKey, SpotRequestState, SpotRequestStatusCode


class SpotRequestRecord(Entity):
    """
    A spot request the state store is tracking.

    Records are created by whatever submitted the spot request, updated when
    a poll finds the request still pending, and removed once EC2 no longer
    reports it as open or once a cancellation has been confirmed.
    """

    region: str = Field(..., min_length=1)
    request_id: str = Field(..., min_length=1)
    state: str = SpotRequestState.OPEN.value
    status_code: str = SpotRequestStatusCode.PENDING_EVALUATION.value

    @classmethod
    def track(cls, region: str, request_id: str,
              state: str = SpotRequestState.OPEN.value,
              status_code: str = SpotRequestStatusCode.PENDING_EVALUATION.value) -> "SpotRequestRecord":
        """Create a new record for a freshly submitted spot request."""
        now = datetime.now(timezone.utc)
        return cls(
            region=region,
            request_id=request_id,
            state=state,
            status_code=status_code,
            created_at=now,
            updated_at=now,
        )

    def get_id(self) -> SpotRequestKey:
        return SpotRequestKey(region=self.region, request_id=self.request_id)

    def update_status(self, state: str, status_code: str) -> None:
        """Record the latest state and status observed for this request."""
        self.state = state
        self.status_code = status_code
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpotRequestRecord":
        return cls.model_validate(data)
