"""
Hash domain object for dxcore.

A Hash is a Git object id in canonical form: lowercase hexadecimal,
40 characters for SHA-1 repositories or 64 for SHA-256 ones. The empty
Hash is the zero value and means "no hash".

Examples:
    Hash.parse("  A1B2C3...  ")  -> Hash("a1b2c3...")   # trimmed, lowercased
    Hash("A1B2C3...").validate() -> ValidationError      # not canonical
"""

import re
from dataclasses import dataclass
from typing import Any

from ..errors import ParseError, ValidationError
from .base import Model, expect_str

HASH_HEX_SIZE_SHA1 = 40
HASH_HEX_SIZE_SHA256 = 64
HASH_SHORT_LEN = 7

HASH_HEX_RE = re.compile(r'^(?:[0-9a-f]{40}|[0-9a-f]{64})$')


def is_hash_literal(text: str) -> bool:
    """True if text is a full canonical SHA-1 or SHA-256 hex id."""
    return bool(HASH_HEX_RE.match(text))


@dataclass(frozen=True)
class Hash(Model):
    """
    Canonical Git object id.

    Attributes:
        value: Lowercase hex digest, or "" for the zero Hash
    """

    value: str = ""

    @classmethod
    def parse(cls, text: str) -> 'Hash':
        """
        Normalize and validate a hash string.

        Surrounding whitespace is trimmed and hex digits are lowercased,
        so output of `git rev-parse` or user input can be fed directly.

        Raises:
            ParseError: if the normalized text is not a valid hash
        """
        if not isinstance(text, str):
            raise ParseError(cls.type_name(), text, "expected a string")
        h = cls(text.strip().lower())
        try:
            h.validate()
        except ValidationError as e:
            raise ParseError(cls.type_name(), text, e.reason) from e
        return h

    def is_zero(self) -> bool:
        return self.value == ""

    def short(self) -> str:
        """First 7 characters, or the whole value if shorter."""
        return self.value[:HASH_SHORT_LEN]

    def is_sha1(self) -> bool:
        return len(self.value) == HASH_HEX_SIZE_SHA1

    def is_sha256(self) -> bool:
        return len(self.value) == HASH_HEX_SIZE_SHA256

    def validate(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError(self.type_name(), None, "value must be a string", self.value)
        if self.is_zero():
            return
        length = len(self.value)
        if length not in (HASH_HEX_SIZE_SHA1, HASH_HEX_SIZE_SHA256):
            raise ValidationError(
                self.type_name(), None,
                f"{self.value!r} has invalid length {length} "
                f"(expected {HASH_HEX_SIZE_SHA1} for SHA-1 or {HASH_HEX_SIZE_SHA256} for SHA-256)",
                self.value,
            )
        if not is_hash_literal(self.value):
            raise ValidationError(
                self.type_name(), None,
                f"{self.value!r} contains invalid characters (must be lowercase hexadecimal [0-9a-f])",
                self.value,
            )

    def redacted(self) -> str:
        return self.short()

    def _encode(self) -> Any:
        return self.value

    @classmethod
    def _decode(cls, data: Any) -> 'Hash':
        return cls.parse(expect_str(data, cls.type_name()))

    def __str__(self) -> str:
        return self.value

    def __bool__(self) -> bool:
        return not self.is_zero()
