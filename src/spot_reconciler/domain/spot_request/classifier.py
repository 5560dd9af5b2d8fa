"""Decision table for observed spot request states."""
from typing import Optional

from .value_objects import PENDING_STATUS_CODES, PollDecision, SpotRequestState


def classify(state: Optional[str], status_code: Optional[str]) -> PollDecision:
    """
    Decide what to do with a spot request given its reported state and status.

    Only an open request still waiting on EC2 (pending-evaluation or
    pending-fulfillment) is kept for another look. An open request in any
    other status will not progress and gets cancelled. Any other state means
    EC2 has already resolved the request, so we simply stop tracking it.

    Args:
        state: Lifecycle state reported by the provider
        status_code: Status code reported by the provider

    Returns:
        PollDecision for the request
    """
    if state != SpotRequestState.OPEN.value:
        return PollDecision.STOP_TRACKING
    if status_code in PENDING_STATUS_CODES:
        return PollDecision.CONTINUE
    return PollDecision.KILL
