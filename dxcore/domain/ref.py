"""
Reference domain objects for dxcore.

- RefName: a Git reference name as typed by users or printed by Git
  ("main", "refs/heads/main", "origin/main", "v1.0.0", "HEAD~2")
- RefKind: the syntactic category of a reference
- Ref: a name, its kind and the commit it resolves to

Ref validation enforces that a name whose shape pins down a kind
("refs/tags/..." is always a tag) is not declared as some other kind.
Names that do not pin down a kind ("v1.0.0", "main") accept any kind.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import ParseError, ValidationError
from .base import Model, Record, expect_mapping, expect_str
from .hash import Hash, is_hash_literal

REF_NAME_MIN_LEN = 1
REF_NAME_MAX_LEN = 256

REF_NAME_PATTERN = r'^[a-zA-Z0-9._/@{}\-^~:]+$'
REF_NAME_RE = re.compile(REF_NAME_PATTERN)

BRANCH_PREFIX = "refs/heads/"
REMOTE_BRANCH_PREFIX = "refs/remotes/"
TAG_PREFIX = "refs/tags/"
HEAD_NAME = "HEAD"


def check_name_text(type_name: str, text: str, pattern: re.Pattern, min_len: int, max_len: int) -> None:
    """
    Validate a ref-like name against length, charset and ASCII rules.

    Shared by RefName and TagName, which differ only in their charset.
    """
    if text.strip() != text:
        raise ValidationError(type_name, None, f"{text!r} contains leading or trailing whitespace", text)
    length = len(text)
    if length < min_len:
        raise ValidationError(type_name, None, f"{text!r} is too short: {length} characters (minimum {min_len})", text)
    if length > max_len:
        raise ValidationError(type_name, None, f"{text!r} is too long: {length} characters (maximum {max_len})", text)
    for ch in text:
        if unicodedata.category(ch) == 'Cc':
            raise ValidationError(type_name, None, f"{text!r} contains control character (U+{ord(ch):04X})", text)
        if ord(ch) > 127:
            raise ValidationError(type_name, None, f"{text!r} contains non-ASCII character {ch!r} (U+{ord(ch):04X})", text)
    if not pattern.match(text):
        raise ValidationError(
            type_name, None,
            f"{text!r} contains invalid characters (must match pattern {pattern.pattern})",
            text,
        )


@dataclass(frozen=True)
class RefName(Model):
    """
    Name of a Git reference.

    The empty RefName is the zero value and is valid on its own; types
    that need a name (CommitRangeSpec.to_name) check for it themselves.
    """

    value: str = ""

    @classmethod
    def parse(cls, text: str) -> 'RefName':
        """Trim and validate. Blank input yields the zero RefName."""
        if not isinstance(text, str):
            raise ParseError(cls.type_name(), text, "expected a string")
        name = cls(text.strip())
        try:
            name.validate()
        except ValidationError as e:
            raise ParseError(cls.type_name(), text, e.reason) from e
        return name

    def is_zero(self) -> bool:
        return self.value == ""

    def validate(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError(self.type_name(), None, "value must be a string", self.value)
        if self.is_zero():
            return
        check_name_text(self.type_name(), self.value, REF_NAME_RE, REF_NAME_MIN_LEN, REF_NAME_MAX_LEN)

    def _encode(self) -> Any:
        return self.value

    @classmethod
    def _decode(cls, data: Any) -> 'RefName':
        return cls.parse(expect_str(data, cls.type_name()))

    def __str__(self) -> str:
        return self.value

    def __bool__(self) -> bool:
        return not self.is_zero()


class RefKind(Enum):
    """Syntactic category of a reference."""
    UNKNOWN = "unknown"
    BRANCH = "branch"
    REMOTE_BRANCH = "remote-branch"
    TAG = "tag"
    HEAD = "head"
    HASH = "hash"

    @classmethod
    def type_name(cls) -> str:
        return "RefKind"

    @classmethod
    def parse(cls, text: str) -> 'RefKind':
        """
        Parse a kind name, case-insensitively.

        "remote_branch" and "remotebranch" are accepted as aliases of
        "remote-branch".
        """
        if not isinstance(text, str):
            raise ParseError(cls.type_name(), text, "expected a string")
        normalized = text.strip().lower()
        normalized = _REF_KIND_ALIASES.get(normalized, normalized)
        for kind in cls:
            if kind.value == normalized:
                return kind
        valid = ", ".join(k.value for k in cls)
        raise ParseError(cls.type_name(), text, f"valid: {valid}")

    @classmethod
    def infer(cls, name: str) -> 'RefKind':
        """
        Kind implied by the shape of a reference name.

        Returns UNKNOWN for names that do not pin down a kind.
        """
        name = str(name)
        if name.startswith(BRANCH_PREFIX):
            return cls.BRANCH
        if name.startswith(REMOTE_BRANCH_PREFIX):
            return cls.REMOTE_BRANCH
        if name.startswith(TAG_PREFIX):
            return cls.TAG
        if name == HEAD_NAME:
            return cls.HEAD
        if is_hash_literal(name):
            return cls.HASH
        return cls.UNKNOWN

    def is_zero(self) -> bool:
        return self is RefKind.UNKNOWN

    def validate(self) -> None:
        return None

    def redacted(self) -> str:
        return self.value

    def equal(self, other: Any) -> bool:
        return self is other

    def __str__(self) -> str:
        return self.value


_REF_KIND_ALIASES = {
    "remote_branch": RefKind.REMOTE_BRANCH.value,
    "remotebranch": RefKind.REMOTE_BRANCH.value,
}


def _ref_label(name: RefName, hash_: Hash, short: bool) -> str:
    digest = hash_.short() if short else str(hash_)
    if name.is_zero():
        return digest
    if hash_.is_zero():
        return str(name)
    return f"{name}({digest})"


@dataclass(frozen=True)
class Ref(Record):
    """
    A resolved Git reference.

    Attributes:
        name: Reference name; may be empty for a bare commit
        kind: Syntactic kind; UNKNOWN disables the name/kind check
        hash: Commit the reference resolves to; may be empty
    """

    name: RefName = field(default_factory=RefName)
    kind: RefKind = RefKind.UNKNOWN
    hash: Hash = field(default_factory=Hash)

    @classmethod
    def new(cls, name: RefName, kind: RefKind, hash: Hash) -> 'Ref':
        """Build and validate a Ref."""
        ref = cls(name=name, kind=kind, hash=hash)
        ref.validate()
        return ref

    def is_zero(self) -> bool:
        return self.name.is_zero() and self.kind.is_zero() and self.hash.is_zero()

    def validate(self) -> None:
        if not isinstance(self.name, RefName):
            raise ValidationError(self.type_name(), "name", f"must be a RefName, got {type(self.name).__name__}")
        if not isinstance(self.kind, RefKind):
            raise ValidationError(self.type_name(), "kind", f"{self.kind!r} is not a known RefKind", self.kind)
        if not isinstance(self.hash, Hash):
            raise ValidationError(self.type_name(), "hash", f"must be a Hash, got {type(self.hash).__name__}")
        if self.is_zero():
            return

        try:
            self.name.validate()
        except ValidationError as e:
            raise ValidationError(self.type_name(), "name", e.reason, self.name) from e
        try:
            self.hash.validate()
        except ValidationError as e:
            raise ValidationError(self.type_name(), "hash", e.reason, self.hash) from e

        if self.kind is RefKind.UNKNOWN:
            return
        required = RefKind.infer(self.name.value)
        if required is not RefKind.UNKNOWN and required is not self.kind:
            raise ValidationError(
                self.type_name(), "kind",
                f"name {self.name.value!r} requires kind {required.value!r}, got {self.kind.value!r}",
                self.kind,
            )

    def label(self, short: bool = True) -> str:
        """
        Compact rendering used inside ranges and logs.

        "name(hash)" when both are set, otherwise whichever one is set;
        "(zero)" for the zero Ref.
        """
        if self.is_zero():
            return "(zero)"
        return _ref_label(self.name, self.hash, short) or f"({self.kind.value})"

    def __str__(self) -> str:
        return self.label(short=False)

    def redacted(self) -> str:
        return self.label(short=True)

    def _encode(self) -> Any:
        return {
            'name': self.name._encode(),
            'kind': self.kind.value,
            'hash': self.hash._encode(),
        }

    @classmethod
    def _decode(cls, data: Any) -> 'Ref':
        data = expect_mapping(data, cls.type_name())
        kind_text = expect_str(data.get('kind'), 'kind', RefKind.UNKNOWN.value)
        return cls(
            name=RefName._decode(data.get('name')),
            kind=RefKind.parse(kind_text),
            hash=Hash._decode(data.get('hash')),
        )
