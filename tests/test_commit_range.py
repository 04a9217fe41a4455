"""Tests for CommitRange and CommitRangeSpec."""

import pytest

from dxcore import CommitRange, CommitRangeSpec, Hash, Ref, RefKind, RefName
from dxcore.errors import UnmarshalError, ValidationError

from conftest import SHA1, SHA1_OTHER


class TestCommitRange:
    """Tests for resolved commit ranges."""

    def test_from_beginning(self, main_ref):
        cr = CommitRange.new(Ref(), main_ref)
        assert cr.from_beginning
        assert str(cr) == "(zero)..refs/heads/main(a1b2c3d)"

    def test_bounded(self, tag_ref, main_ref):
        cr = CommitRange.new(tag_ref, main_ref)
        assert not cr.from_beginning
        assert str(cr) == "refs/tags/v1.0.0(0fedcba)..refs/heads/main(a1b2c3d)"
        assert cr.redacted() == str(cr)

    def test_zero_range_invalid(self):
        with pytest.raises(ValidationError) as exc:
            CommitRange().validate()
        assert exc.value.field is None
        assert CommitRange().is_zero()

    def test_missing_upper_bound(self, tag_ref):
        with pytest.raises(ValidationError) as exc:
            CommitRange(from_ref=tag_ref).validate()
        assert exc.value.field == "to"

    def test_invalid_lower_bound(self, main_ref):
        bad = Ref(name=RefName("refs/tags/v1"), kind=RefKind.BRANCH, hash=Hash(SHA1_OTHER))
        with pytest.raises(ValidationError) as exc:
            CommitRange(from_ref=bad, to_ref=main_ref).validate()
        assert exc.value.field == "from"

    def test_wrong_bound_type(self, main_ref):
        cr = CommitRange(from_ref="v1.0.0", to_ref=main_ref)
        with pytest.raises(ValidationError) as exc:
            cr.validate()
        assert exc.value.field == "from"
        assert not cr.is_valid()

    def test_to_dict(self, main_ref):
        data = CommitRange.new(Ref(), main_ref).to_dict()
        assert data['from'] == {'name': '', 'kind': 'unknown', 'hash': ''}
        assert data['to']['hash'] == SHA1

    def test_from_dict_without_from(self, main_ref):
        cr = CommitRange.from_dict({'to': main_ref.to_dict()})
        assert cr.from_beginning
        assert cr.to_ref == main_ref

    def test_json_round_trip(self, tag_ref, main_ref):
        cr = CommitRange.new(tag_ref, main_ref)
        assert CommitRange.from_json(cr.to_json()) == cr

    def test_unmarshal_zero(self):
        with pytest.raises(UnmarshalError):
            CommitRange.from_json("{}")


class TestCommitRangeSpec:
    """Tests for unresolved commit ranges."""

    def test_parse_two_sided(self):
        spec = CommitRangeSpec.parse("v1.0.0..v2.0.0")
        assert spec.from_name == RefName("v1.0.0")
        assert spec.to_name == RefName("v2.0.0")
        assert str(spec) == "v1.0.0..v2.0.0"

    def test_parse_open_start(self):
        spec = CommitRangeSpec.parse("..main")
        assert spec.from_name.is_zero()
        assert str(spec) == "(empty)..main"

    def test_parse_single_name(self):
        spec = CommitRangeSpec.parse("HEAD")
        assert spec.from_name.is_zero()
        assert spec.to_name == RefName("HEAD")

    def test_parse_missing_upper_bound(self):
        with pytest.raises(ValidationError) as exc:
            CommitRangeSpec.parse("v1.0.0..")
        assert exc.value.field == "to"

    def test_zero_invalid(self):
        with pytest.raises(ValidationError):
            CommitRangeSpec().validate()

    def test_invalid_name(self):
        with pytest.raises(ValidationError) as exc:
            CommitRangeSpec(from_name=RefName("bad name"), to_name=RefName("main")).validate()
        assert exc.value.field == "from"

    def test_wrong_name_type(self):
        spec = CommitRangeSpec(to_name="main")
        with pytest.raises(ValidationError) as exc:
            spec.validate()
        assert exc.value.field == "to"

    def test_to_dict(self):
        assert CommitRangeSpec.parse("..main").to_dict() == {'from': '', 'to': 'main'}

    def test_yaml_round_trip(self):
        spec = CommitRangeSpec.parse("v1.0.0..main")
        assert CommitRangeSpec.from_yaml(spec.to_yaml()) == spec
