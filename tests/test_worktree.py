"""Tests for WorktreeStatus."""

import pytest

from dxcore import WorktreeStatus
from dxcore.errors import UnmarshalError, ValidationError


class TestWorktreeStatus:

    def test_clean(self):
        status = WorktreeStatus()
        assert status.clean()
        assert status.is_zero()
        assert str(status) == "clean"

    def test_zero_is_valid_and_serializes(self):
        assert WorktreeStatus().to_dict() == {
            'has_unstaged': False,
            'has_staged': False,
            'has_untracked': False,
        }

    @pytest.mark.parametrize("flags,expected", [
        ((True, False, False), "unstaged"),
        ((False, True, False), "staged"),
        ((False, False, True), "untracked"),
        ((True, False, True), "unstaged, untracked"),
        ((True, True, True), "unstaged, staged, untracked"),
    ])
    def test_str(self, flags, expected):
        status = WorktreeStatus.new(*flags)
        assert str(status) == expected
        assert not status.clean()

    def test_non_bool_flag(self):
        with pytest.raises(ValidationError) as exc:
            WorktreeStatus(has_staged="yes").validate()
        assert exc.value.field == "has_staged"

    def test_from_dict_missing_fields(self):
        assert WorktreeStatus.from_dict({'has_untracked': True}) == WorktreeStatus(has_untracked=True)

    def test_json_round_trip(self):
        status = WorktreeStatus.new(True, False, True)
        assert WorktreeStatus.from_json(status.to_json()) == status

    def test_unmarshal_string_flag(self):
        with pytest.raises(UnmarshalError):
            WorktreeStatus.from_json('{"has_staged": "true"}')
