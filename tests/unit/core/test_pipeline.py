"""Tests for the application status pipeline rules."""

import pytest

from core.exceptions import InvalidTransitionError, ValidationError
from core.pipeline import (
    ApplicationStatus,
    PIPELINE_STAGES,
    TERMINAL_STATUSES,
    VALID_STATUSES,
    check_transition,
    is_terminal,
    parse_status,
)


class TestParseStatus:
    """Coercion of raw status values."""

    @pytest.mark.parametrize("raw,expected", [
        ("applied", ApplicationStatus.APPLIED),
        ("SCREENED", ApplicationStatus.SCREENED),
        ("  offer ", ApplicationStatus.OFFER),
        (ApplicationStatus.HIRED, ApplicationStatus.HIRED),
    ])
    def test_known_values(self, raw, expected):
        assert parse_status(raw) == expected

    @pytest.mark.parametrize("raw", ["invalid_status", "", None, 3, "offer_sent"])
    def test_unknown_values_raise(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_status(raw)
        assert exc_info.value.details["allowed"] == list(VALID_STATUSES)

    def test_canonical_order(self):
        assert [s.value for s in PIPELINE_STAGES] == [
            "applied", "screened", "interviewed", "offer", "hired", "rejected",
        ]


class TestCheckTransition:
    """Transition validation."""

    def test_forward_move(self):
        assert check_transition("applied", "screened") == ApplicationStatus.SCREENED

    def test_skip_ahead_is_allowed(self):
        assert check_transition("applied", "hired") == ApplicationStatus.HIRED

    def test_backward_move_is_allowed(self):
        assert check_transition("interviewed", "applied") == ApplicationStatus.APPLIED

    @pytest.mark.parametrize("current", ["applied", "screened", "interviewed", "offer"])
    def test_reject_from_any_open_stage(self, current):
        assert check_transition(current, "rejected") == ApplicationStatus.REJECTED

    @pytest.mark.parametrize("current", ["hired", "rejected"])
    @pytest.mark.parametrize("target", ["applied", "screened", "offer"])
    def test_terminal_stages_are_absorbing(self, current, target):
        with pytest.raises(InvalidTransitionError) as exc_info:
            check_transition(current, target)
        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "INVALID_TRANSITION"

    @pytest.mark.parametrize("status", list(VALID_STATUSES))
    def test_same_status_is_permitted(self, status):
        assert check_transition(status, status).value == status

    def test_invalid_target_raises_validation_error(self):
        with pytest.raises(ValidationError):
            check_transition("applied", "invalid_status")

    def test_invalid_transition_is_a_validation_error(self):
        # Callers catching ValidationError also see terminal-stage violations
        assert issubclass(InvalidTransitionError, ValidationError)


def test_is_terminal():
    assert {s for s in PIPELINE_STAGES if is_terminal(s)} == set(TERMINAL_STATUSES)
    assert not is_terminal("offer")
