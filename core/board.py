"""
Kanban board projection of applications.

The board is always rebuilt from a full application list; there is no
incremental diffing. Lanes follow the pipeline order and every lane is
present even when empty.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, TypeVar, Union

from core.pipeline import ApplicationStatus, PIPELINE_STAGES, parse_status

T = TypeVar("T")

LANE_TITLES: dict[ApplicationStatus, str] = {
    ApplicationStatus.APPLIED: "Applied",
    ApplicationStatus.SCREENED: "Screened",
    ApplicationStatus.INTERVIEWED: "Interviewed",
    ApplicationStatus.OFFER: "Offer Sent",
    ApplicationStatus.HIRED: "Hired",
    ApplicationStatus.REJECTED: "Rejected",
}


@dataclass
class BoardLane(Generic[T]):
    """One column of the board."""

    status: ApplicationStatus
    title: str
    applications: list[T] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.applications)

    @property
    def is_empty(self) -> bool:
        return not self.applications


def _default_status_of(item: Any) -> Any:
    if isinstance(item, dict):
        return item.get("status")
    return getattr(item, "status", None)


def build_board(
    applications: Iterable[T],
    status_of: Callable[[T], Union[str, ApplicationStatus]] = _default_status_of,
) -> list[BoardLane[T]]:
    """
    Partition applications into the six pipeline lanes.

    Input order is preserved inside each lane.

    Args:
        applications: Application records or dicts with a ``status``
        status_of: Accessor for the status of one item

    Returns:
        Lanes in canonical pipeline order
    """
    lanes = {
        stage: BoardLane(status=stage, title=LANE_TITLES[stage])
        for stage in PIPELINE_STAGES
    }
    for application in applications:
        lanes[parse_status(status_of(application))].applications.append(application)
    return [lanes[stage] for stage in PIPELINE_STAGES]


def lane_for_drop(lane_status: Union[str, ApplicationStatus]) -> ApplicationStatus:
    """Transition target for a card dropped on the given lane."""
    return parse_status(lane_status)
