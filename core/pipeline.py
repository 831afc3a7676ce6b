"""
Application status pipeline.

Stages in canonical order: applied -> screened -> interviewed -> offer -> hired,
with rejected reachable from any non-terminal stage. Hired and rejected are
absorbing. Skipping stages is allowed.
"""

from enum import Enum as PyEnum
from typing import Union

from core.exceptions import InvalidTransitionError, ValidationError


class ApplicationStatus(str, PyEnum):
    """Pipeline stage of an application."""

    APPLIED = "applied"
    SCREENED = "screened"
    INTERVIEWED = "interviewed"
    OFFER = "offer"
    HIRED = "hired"
    REJECTED = "rejected"


PIPELINE_STAGES: tuple[ApplicationStatus, ...] = (
    ApplicationStatus.APPLIED,
    ApplicationStatus.SCREENED,
    ApplicationStatus.INTERVIEWED,
    ApplicationStatus.OFFER,
    ApplicationStatus.HIRED,
    ApplicationStatus.REJECTED,
)

TERMINAL_STATUSES: frozenset[ApplicationStatus] = frozenset(
    {ApplicationStatus.HIRED, ApplicationStatus.REJECTED}
)

VALID_STATUSES: tuple[str, ...] = tuple(stage.value for stage in PIPELINE_STAGES)


def parse_status(value: Union[str, ApplicationStatus, None]) -> ApplicationStatus:
    """
    Coerce a raw value into a pipeline status.

    Raises:
        ValidationError: If the value is not one of the known stages
    """
    if isinstance(value, ApplicationStatus):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        try:
            return ApplicationStatus(normalized)
        except ValueError:
            pass
    raise ValidationError(
        f"Invalid status '{value}'. Must be one of: {', '.join(VALID_STATUSES)}",
        details={"status": value, "allowed": list(VALID_STATUSES)},
    )


def is_terminal(status: Union[str, ApplicationStatus]) -> bool:
    """Whether no further moves are possible from this status."""
    return parse_status(status) in TERMINAL_STATUSES


def check_transition(
    current: Union[str, ApplicationStatus],
    target: Union[str, ApplicationStatus, None],
) -> ApplicationStatus:
    """
    Validate a move and return the parsed target status.

    Any non-terminal stage may move to any stage. A terminal stage may only
    be re-applied to itself, which is a permitted no-op write.

    Raises:
        ValidationError: Unknown target status
        InvalidTransitionError: Move out of a terminal stage
    """
    target_status = parse_status(target)
    current_status = parse_status(current)

    if current_status in TERMINAL_STATUSES and target_status != current_status:
        raise InvalidTransitionError(
            f"Application is {current_status.value}; it cannot move to {target_status.value}",
            details={"current": current_status.value, "target": target_status.value},
        )
    return target_status
