"""Unit tests for booking form parsing."""
import pytest

from app.api.forms import FormDataError, form_items, parse_shift_form
from app.exceptions import InvalidRangeError, MissingFieldError
from app.models.task import FAKE_TASK_VALUE, MAX_SLOTS


class TestParseShiftForm:
    """Test cases for parse_shift_form."""

    def test_checked_days_only(self):
        submission = parse_shift_form([
            ("card_id", "7"),
            ("curr.checkboxes[2]", "on"),
            ("curr.tasks[2][0]", "1"),
            ("curr.entranceHours[2][0]", "0"),
            ("curr.exitHours[2][0]", "3"),
            ("curr.tasks[4][0]", "2"),
            ("next.checkboxes[0]", "on"),
            ("next.tasks[0][0]", "3"),
            ("next.entranceHours[0][0]", "5"),
            ("next.exitHours[0][0]", "7"),
        ])

        assert submission.card_id == 7
        assert list(submission.current.days) == [2]
        day = submission.current.days[2]
        assert day.tasks == [1]
        assert day.entrance_hours == [0]
        assert day.exit_hours == [3]
        assert submission.next.days[0].tasks == [3]

    def test_missing_slots_become_sentinels(self):
        submission = parse_shift_form([
            ("curr.checkboxes[1]", "on"),
            ("curr.tasks[1][1]", "0"),
            ("curr.exitHours[1][1]", "4"),
        ], card_id=9)

        day = submission.current.days[1]
        assert day.tasks == [FAKE_TASK_VALUE, 0]
        assert day.entrance_hours == [None, None]
        assert day.exit_hours == [None, 4]

    def test_explicit_card_overrides_form(self):
        submission = parse_shift_form([("card_id", "7")], card_id=12)
        assert submission.card_id == 12

    def test_unknown_fields_are_ignored(self):
        submission = parse_shift_form([("card_id", "7"), ("csrf", "x"), ("curr.other[1]", "2")])
        assert submission.current.days == {}

    def test_missing_card(self):
        with pytest.raises(MissingFieldError):
            parse_shift_form([("curr.checkboxes[0]", "on")])

    def test_malformed_number(self):
        with pytest.raises(FormDataError) as exc_info:
            parse_shift_form([("card_id", "7"), ("curr.tasks[0][0]", "abc")])
        assert exc_info.value.error_code == "INVALID_FORM_DATA"

    def test_hour_out_of_range(self):
        with pytest.raises(InvalidRangeError):
            parse_shift_form([("card_id", "7"), ("next.exitHours[0][0]", "11")])

    @pytest.mark.parametrize("slot", ["10", "5000000", "1000000000"])
    def test_slot_index_too_large(self, slot):
        with pytest.raises(InvalidRangeError) as exc_info:
            parse_shift_form([
                ("card_id", "7"),
                ("curr.checkboxes[0]", "on"),
                (f"curr.tasks[0][{slot}]", "0"),
            ])
        assert exc_info.value.details["field_name"] == "slot"
        assert exc_info.value.details["max_value"] == MAX_SLOTS - 1

    def test_last_slot_is_accepted(self):
        submission = parse_shift_form([
            ("card_id", "7"),
            ("curr.checkboxes[0]", "on"),
            (f"curr.tasks[0][{MAX_SLOTS - 1}]", "2"),
        ])
        assert len(submission.current.days[0].tasks) == MAX_SLOTS


def test_form_items_accepts_mapping():
    assert form_items({"card_id": "7"}) == [("card_id", "7")]
