"""Tests for the appointment lifecycle rules."""
import pytest

from clinic_scheduler.models import AppointmentStatus

S = AppointmentStatus


class TestTransitions:

    @pytest.mark.parametrize("current,new", [
        (S.SCHEDULED, S.CONFIRMED),
        (S.CONFIRMED, S.IN_PROGRESS),
        (S.IN_PROGRESS, S.COMPLETED),
        (S.SCHEDULED, S.IN_PROGRESS),
        (S.SCHEDULED, S.CANCELLED),
        (S.CONFIRMED, S.NO_SHOW),
        (S.IN_PROGRESS, S.CANCELLED),
    ])
    def test_allowed(self, current, new):
        assert current.can_transition_to(new)

    @pytest.mark.parametrize("current,new", [
        (S.CONFIRMED, S.SCHEDULED),
        (S.COMPLETED, S.CANCELLED),
        (S.CANCELLED, S.SCHEDULED),
        (S.NO_SHOW, S.CONFIRMED),
        (S.SCHEDULED, S.COMPLETED),
        (S.SCHEDULED, S.SCHEDULED),
    ])
    def test_rejected(self, current, new):
        assert not current.can_transition_to(new)

    def test_terminal_statuses(self):
        assert {s for s in S if s.is_terminal} == {S.COMPLETED, S.CANCELLED, S.NO_SHOW}

    def test_only_cancelled_frees_slot(self):
        assert [s for s in S if not s.occupies_slot] == [S.CANCELLED]
