"""Tests for the 30-minute day grid."""
from datetime import time

from clinic_scheduler.services.availability.slot_generator import generate_time_slots, format_time_label


class TestGenerateTimeSlots:

    def test_forty_eight_slots(self):
        """Should cover the whole day in 30-minute steps."""
        slots = generate_time_slots()

        assert len(slots) == 48
        assert slots[0].value == "00:00"
        assert slots[1].value == "00:30"
        assert slots[-1].value == "23:30"

    def test_chronological_order(self):
        """Values should be strictly increasing."""
        values = [slot.value for slot in generate_time_slots()]

        assert values == sorted(values)
        assert len(set(values)) == 48

    def test_repeatable(self):
        """Calling twice should give identical output."""
        assert generate_time_slots() == generate_time_slots()

    def test_labels(self):
        """Labels should be 12-hour with AM/PM."""
        labels = {slot.value: slot.label for slot in generate_time_slots()}

        assert labels["00:00"] == "12:00 AM"
        assert labels["00:30"] == "12:30 AM"
        assert labels["09:00"] == "9:00 AM"
        assert labels["11:30"] == "11:30 AM"
        assert labels["12:00"] == "12:00 PM"
        assert labels["13:00"] == "1:00 PM"
        assert labels["23:30"] == "11:30 PM"

    def test_slot_start_parses_value(self):
        slot = generate_time_slots()[19]

        assert slot.start == time(9, 30)


class TestFormatTimeLabel:

    def test_noon_and_midnight(self):
        assert format_time_label(time(0, 0)) == "12:00 AM"
        assert format_time_label(time(12, 30)) == "12:30 PM"
