"""Tests for the Kanban board projection."""

import pytest

from core.board import LANE_TITLES, build_board, lane_for_drop
from core.exceptions import ValidationError
from core.pipeline import ApplicationStatus, PIPELINE_STAGES


def _apps(*statuses):
    return [{"id": f"app-{i}", "status": status} for i, status in enumerate(statuses)]


def test_empty_board_has_all_lanes():
    lanes = build_board([])

    assert [lane.status for lane in lanes] == list(PIPELINE_STAGES)
    assert all(lane.is_empty for lane in lanes)
    assert all(lane.count == 0 for lane in lanes)


def test_lane_titles():
    lanes = build_board([])
    assert [lane.title for lane in lanes] == [
        "Applied", "Screened", "Interviewed", "Offer Sent", "Hired", "Rejected",
    ]
    assert set(LANE_TITLES) == set(PIPELINE_STAGES)


def test_each_application_lands_in_its_lane():
    applications = _apps("applied", "screened", "hired", "applied", "rejected")
    lanes = {lane.status: lane for lane in build_board(applications)}

    assert [a["id"] for a in lanes[ApplicationStatus.APPLIED].applications] == ["app-0", "app-3"]
    assert lanes[ApplicationStatus.SCREENED].count == 1
    assert lanes[ApplicationStatus.INTERVIEWED].count == 0
    assert lanes[ApplicationStatus.HIRED].count == 1
    assert lanes[ApplicationStatus.REJECTED].count == 1


def test_board_partitions_applications():
    applications = _apps("offer", "offer", "screened", "interviewed", "applied", "hired")
    lanes = build_board(applications)

    assert sum(lane.count for lane in lanes) == len(applications)
    ids = [a["id"] for lane in lanes for a in lane.applications]
    assert sorted(ids) == sorted(a["id"] for a in applications)


def test_objects_with_status_attribute():
    class Card:
        def __init__(self, status):
            self.status = status

    lanes = build_board([Card(ApplicationStatus.OFFER)])
    assert lanes[3].status == ApplicationStatus.OFFER
    assert lanes[3].count == 1


def test_custom_status_accessor():
    lanes = build_board([("a", "hired")], status_of=lambda item: item[1])
    assert lanes[4].applications == [("a", "hired")]


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError):
        build_board(_apps("archived"))


def test_lane_for_drop():
    assert lane_for_drop("interviewed") == ApplicationStatus.INTERVIEWED
    with pytest.raises(ValidationError):
        lane_for_drop("backlog")
