"""
Commit range domain objects for dxcore.

A commit range is the half-open history interval written "A..B" in Git:
commits reachable from B but not from A. From is the exclusive lower
bound and may be absent ("since the beginning of history"); To is the
inclusive upper bound and is always required.

- CommitRange: both ends resolved to Refs (name, kind, hash)
- CommitRangeSpec: both ends as unresolved RefNames, e.g. from config

Neither type checks that From is an ancestor of To; that needs a live
repository and belongs to the caller.
"""

from dataclasses import dataclass, field
from typing import Any

from ..errors import ValidationError
from .base import Record, expect_mapping
from .ref import Ref, RefName


@dataclass(frozen=True)
class CommitRange(Record):
    """
    Resolved commit range.

    Attributes:
        from_ref: Exclusive lower bound; zero Ref means from the beginning
        to_ref: Inclusive upper bound; must be a non-zero valid Ref
    """

    from_ref: Ref = field(default_factory=Ref)
    to_ref: Ref = field(default_factory=Ref)

    @classmethod
    def new(cls, from_ref: Ref, to_ref: Ref) -> 'CommitRange':
        """Build and validate a CommitRange."""
        cr = cls(from_ref=from_ref, to_ref=to_ref)
        cr.validate()
        return cr

    def is_zero(self) -> bool:
        return self.from_ref.is_zero() and self.to_ref.is_zero()

    @property
    def from_beginning(self) -> bool:
        """True when the range has no lower bound."""
        return self.from_ref.is_zero()

    def validate(self) -> None:
        for field_name, value in (("from", self.from_ref), ("to", self.to_ref)):
            if not isinstance(value, Ref):
                raise ValidationError(self.type_name(), field_name, f"must be a Ref, got {type(value).__name__}")
        if self.is_zero():
            raise ValidationError(self.type_name(), None, "is zero (both from and to are zero)")
        if self.to_ref.is_zero():
            raise ValidationError(self.type_name(), "to", "must not be zero (upper bound is required)")
        try:
            self.to_ref.validate()
        except ValidationError as e:
            raise ValidationError(self.type_name(), "to", str(e), self.to_ref) from e
        if not self.from_ref.is_zero():
            try:
                self.from_ref.validate()
            except ValidationError as e:
                raise ValidationError(self.type_name(), "from", str(e), self.from_ref) from e

    def __str__(self) -> str:
        return f"{self.from_ref.label(short=True)}..{self.to_ref.label(short=True)}"

    def redacted(self) -> str:
        return f"{self.from_ref.redacted()}..{self.to_ref.redacted()}"

    def _encode(self) -> Any:
        return {
            'from': self.from_ref._encode(),
            'to': self.to_ref._encode(),
        }

    @classmethod
    def _decode(cls, data: Any) -> 'CommitRange':
        data = expect_mapping(data, cls.type_name())
        from_data = data.get('from')
        to_data = data.get('to')
        return cls(
            from_ref=Ref._decode(from_data) if from_data is not None else Ref(),
            to_ref=Ref._decode(to_data) if to_data is not None else Ref(),
        )


@dataclass(frozen=True)
class CommitRangeSpec(Record):
    """
    Unresolved commit range, as written by a user or in config.

    Attributes:
        from_name: Exclusive lower bound; empty means from the beginning
        to_name: Inclusive upper bound; required
    """

    from_name: RefName = field(default_factory=RefName)
    to_name: RefName = field(default_factory=RefName)

    @classmethod
    def new(cls, from_name: RefName, to_name: RefName) -> 'CommitRangeSpec':
        """Build and validate a CommitRangeSpec."""
        spec = cls(from_name=from_name, to_name=to_name)
        spec.validate()
        return spec

    @classmethod
    def parse(cls, text: str) -> 'CommitRangeSpec':
        """
        Parse "A..B" or "..B" notation.

        Text without ".." is taken as the upper bound alone.
        """
        if '..' in text:
            from_text, to_text = text.split('..', 1)
        else:
            from_text, to_text = '', text
        return cls.new(RefName.parse(from_text), RefName.parse(to_text))

    def is_zero(self) -> bool:
        return self.from_name.is_zero() and self.to_name.is_zero()

    def validate(self) -> None:
        for field_name, value in (("from", self.from_name), ("to", self.to_name)):
            if not isinstance(value, RefName):
                raise ValidationError(self.type_name(), field_name, f"must be a RefName, got {type(value).__name__}")
        if self.is_zero():
            raise ValidationError(self.type_name(), None, "is zero (both from and to are empty)")
        if self.to_name.is_zero():
            raise ValidationError(self.type_name(), "to", "must not be empty (upper bound is required)")
        try:
            self.to_name.validate()
        except ValidationError as e:
            raise ValidationError(self.type_name(), "to", e.reason, self.to_name) from e
        if not self.from_name.is_zero():
            try:
                self.from_name.validate()
            except ValidationError as e:
                raise ValidationError(self.type_name(), "from", e.reason, self.from_name) from e

    def __str__(self) -> str:
        from_str = str(self.from_name) if not self.from_name.is_zero() else "(empty)"
        to_str = str(self.to_name) if not self.to_name.is_zero() else "(empty)"
        return f"{from_str}..{to_str}"

    def _encode(self) -> Any:
        return {
            'from': self.from_name._encode(),
            'to': self.to_name._encode(),
        }

    @classmethod
    def _decode(cls, data: Any) -> 'CommitRangeSpec':
        data = expect_mapping(data, cls.type_name())
        return cls(
            from_name=RefName._decode(data.get('from')),
            to_name=RefName._decode(data.get('to')),
        )
