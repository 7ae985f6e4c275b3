"""
Finish Reason Mapping

Maps the alternative status of the completion API to the unified finish
reason. PARTIAL marks a non-final stream snapshot; the stream transducer only
publishes the last observed value, this function does not care.
"""

from typing import Dict, Union

from ..ir import FinishReason, UnifiedFinishReason
from ..schemas import FinishStatus


_STATUS_MAP: Dict[FinishStatus, UnifiedFinishReason] = {
    FinishStatus.UNSPECIFIED: UnifiedFinishReason.STOP,
    FinishStatus.PARTIAL: UnifiedFinishReason.OTHER,
    FinishStatus.TRUNCATED_FINAL: UnifiedFinishReason.LENGTH,
    FinishStatus.FINAL: UnifiedFinishReason.STOP,
    FinishStatus.CONTENT_FILTER: UnifiedFinishReason.OTHER,
    FinishStatus.TOOL_CALLS: UnifiedFinishReason.TOOL_CALLS,
}


def map_finish_status(status: Union[FinishStatus, str]) -> FinishReason:
    """
    Map a vendor alternative status to a unified finish reason.

    Args:
        status: FinishStatus member or its wire value

    Returns:
        FinishReason with the raw status preserved

    Raises:
        ValueError: Unknown status value
    """
    status = FinishStatus(status)
    return FinishReason(unified=_STATUS_MAP[status], raw=status.value)
