"""Tests for the Signature value type."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from dxcore import Signature
from dxcore.domain.signature import redact_email
from dxcore.errors import MarshalError, UnmarshalError, ValidationError

from conftest import WHEN


class TestSignatureValidate:
    """Tests for Signature validation."""

    def test_valid(self, signature):
        assert signature.is_valid()
        assert not signature.is_zero()

    def test_zero(self):
        assert Signature().is_zero()
        assert not Signature().is_valid()

    def test_empty_name(self):
        with pytest.raises(ValidationError) as exc:
            Signature("", "jane@example.com", WHEN).validate()
        assert exc.value.field == "name"

    def test_name_length_in_bytes(self):
        assert Signature("a" * 256, "jane@example.com", WHEN).is_valid()
        # 129 two-byte characters exceed 256 bytes
        with pytest.raises(ValidationError) as exc:
            Signature("é" * 129, "jane@example.com", WHEN).validate()
        assert "bytes" in str(exc.value)

    def test_unicode_name(self):
        assert Signature("José Müller", "jose@example.com", WHEN).is_valid()

    def test_empty_email(self):
        with pytest.raises(ValidationError) as exc:
            Signature("Jane", "", WHEN).validate()
        assert exc.value.field == "email"

    def test_email_without_at(self):
        with pytest.raises(ValidationError) as exc:
            Signature("Jane", "not-an-email", WHEN).validate()
        assert exc.value.field == "email"

    @pytest.mark.parametrize("email", [
        "jane.@example.com",
        ".jane@example.com",
        "jane@example..com",
        "jane@example.com>",
        "<jane@example.com",
        "jane@example.com trailing",
    ])
    def test_malformed_email(self, email):
        with pytest.raises(ValidationError) as exc:
            Signature("Jane", email, WHEN).validate()
        assert exc.value.field == "email"

    @pytest.mark.parametrize("email", [
        "jane.doe+git@example.com",
        "Jane Doe <jane@example.com>",
        "ci@localhost",
    ])
    def test_accepted_email(self, email):
        Signature("Jane", email, WHEN).validate()

    def test_email_too_long(self):
        email = "a" * 250 + "@example.com"
        with pytest.raises(ValidationError) as exc:
            Signature("Jane", email, WHEN).validate()
        assert "254" in str(exc.value)

    def test_missing_when(self):
        with pytest.raises(ValidationError) as exc:
            Signature("Jane", "jane@example.com").validate()
        assert exc.value.field == "when"

    def test_naive_when(self):
        with pytest.raises(ValidationError) as exc:
            Signature("Jane", "jane@example.com", datetime(2024, 1, 15, 10, 30)).validate()
        assert "timezone-aware" in str(exc.value)


class TestSignatureRendering:
    """Tests for str and redacted output."""

    def test_str(self, signature):
        assert str(signature) == "Signature{Name:Jane Doe, Email:jane@example.com, When:2024-01-15T10:30:00Z}"

    def test_redacted(self, signature):
        assert signature.redacted() == "Signature{Name:Jane Doe, Email:j***@example.com, When:2024-01-15T10:30:00Z}"

    def test_str_keeps_offset(self):
        when = datetime(2024, 1, 15, 12, 30, tzinfo=timezone(timedelta(hours=2)))
        sig = Signature("Jane", "jane@example.com", when)
        assert "When:2024-01-15T12:30:00+02:00" in str(sig)

    @pytest.mark.parametrize("email,expected", [
        ("jane@example.com", "j***@example.com"),
        ("", "[empty]"),
        ("no-at-sign", "[invalid]"),
        ("@example.com", "[invalid]"),
    ])
    def test_redact_email(self, email, expected):
        assert redact_email(email) == expected


class TestSignatureEquality:
    """Timestamps compare as instants."""

    def test_same_instant_different_offset(self, signature):
        other = Signature(
            "Jane Doe", "jane@example.com",
            datetime(2024, 1, 15, 12, 30, tzinfo=timezone(timedelta(hours=2))),
        )
        assert signature == other
        assert signature.equal(other)

    def test_different_instant(self, signature):
        assert signature != Signature("Jane Doe", "jane@example.com", WHEN + timedelta(seconds=1))

    def test_hashable(self, signature):
        assert len({signature, Signature.new("Jane Doe", "jane@example.com", WHEN)}) == 1


class TestSignatureSerialization:
    """Tests for JSON and YAML encoding."""

    def test_to_dict(self, signature):
        assert signature.to_dict() == {
            'name': 'Jane Doe',
            'email': 'jane@example.com',
            'when': '2024-01-15T10:30:00Z',
        }

    def test_json_round_trip(self, signature):
        assert Signature.from_json(signature.to_json()) == signature

    def test_from_json_with_offset(self):
        sig = Signature.from_json(json.dumps({
            'name': 'Jane', 'email': 'jane@example.com', 'when': '2024-01-15T12:30:00+02:00',
        }))
        assert sig.when.utcoffset() == timedelta(hours=2)

    def test_from_json_missing_when(self):
        with pytest.raises(UnmarshalError):
            Signature.from_json('{"name": "Jane", "email": "jane@example.com"}')

    def test_from_json_naive_when(self):
        with pytest.raises(UnmarshalError):
            Signature.from_json(json.dumps({
                'name': 'Jane', 'email': 'jane@example.com', 'when': '2024-01-15T10:30:00',
            }))

    def test_from_json_garbage_when(self):
        with pytest.raises(UnmarshalError) as exc:
            Signature.from_json('{"name": "Jane", "email": "jane@example.com", "when": "yesterday"}')
        assert "malformed data" in str(exc.value)

    def test_marshal_invalid(self):
        with pytest.raises(MarshalError):
            Signature("Jane", "", WHEN).to_json()

    def test_yaml_round_trip(self, signature):
        assert Signature.from_yaml(signature.to_yaml()) == signature

    def test_yaml_native_timestamp(self):
        """Unquoted YAML timestamps load as datetimes."""
        sig = Signature.from_yaml("name: Jane\nemail: jane@example.com\nwhen: 2024-01-15T10:30:00Z\n")
        assert sig.when == WHEN
