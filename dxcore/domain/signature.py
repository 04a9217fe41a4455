"""
Signature domain object for dxcore.

A Signature is the identity Git records for an author, committer or
tagger: a name, an email address and a timestamp.
"""

from dataclasses import dataclass
from datetime import datetime
from email.errors import HeaderParseError
from email.headerregistry import Address
from email.utils import parseaddr
from typing import Any, Optional

from ..errors import ValidationError
from .base import Record, expect_mapping, expect_str

SIGNATURE_NAME_MAX_LENGTH = 256
SIGNATURE_EMAIL_MAX_LENGTH = 254  # RFC 5321 maximum


def format_timestamp(when: datetime) -> str:
    """RFC 3339 rendering, with "Z" for UTC."""
    text = when.isoformat()
    if text.endswith('+00:00'):
        text = text[:-6] + 'Z'
    return text


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Accept an RFC 3339 string or a datetime (YAML may yield either)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise TypeError(f"when must be an RFC 3339 string, got {type(value).__name__}")
    if not value:
        return None
    return datetime.fromisoformat(value)


def check_email(email: str) -> Optional[str]:
    """
    Check an address the way a mail header parser would.

    Accepts a bare addr-spec ("jane@example.com") or a name-addr
    ("Jane <jane@example.com>"). Returns None if acceptable, else the
    reason it was rejected.
    """
    _, addr = parseaddr(email)
    if not addr:
        return "not a parseable address"
    text = email.strip()
    if '<' in text or '>' in text:
        if not text.endswith(f"<{addr}>"):
            return "unexpected text around address"
    elif text != addr:
        return "unexpected text around address"
    local, at, domain = addr.rpartition('@')
    if not at:
        return "missing '@'"
    if not local:
        return "missing local part"
    if not domain:
        return "missing domain"
    if any(ch.isspace() for ch in addr):
        return "contains whitespace"
    try:
        Address(addr_spec=addr)
    except (HeaderParseError, ValueError, IndexError) as e:
        return f"not a valid address: {e}"
    return None



def redact_email(email: str) -> str:
    """Keep the first local-part character and the domain."""
    if not email:
        return "[empty]"
    at = email.find('@')
    if at <= 0:
        return "[invalid]"
    return email[0] + "***" + email[at:]


@dataclass(frozen=True)
class Signature(Record):
    """
    Identity and time of an author, committer or tagger.

    Attributes:
        name: Display name, 1-256 bytes
        email: Address, 1-254 bytes, RFC 5322 parseable
        when: Timezone-aware timestamp; None is the zero value
    """

    name: str = ""
    email: str = ""
    when: Optional[datetime] = None

    @classmethod
    def new(cls, name: str, email: str, when: datetime) -> 'Signature':
        """Build and validate a Signature."""
        sig = cls(name=name, email=email, when=when)
        sig.validate()
        return sig

    def is_zero(self) -> bool:
        return self.name == "" and self.email == "" and self.when is None

    def __eq__(self, other: Any) -> bool:
        # Timestamps compare as instants, so the same moment in two
        # offsets is equal.
        if not isinstance(other, Signature):
            return NotImplemented
        if self.name != other.name or self.email != other.email:
            return False
        if self.when is None or other.when is None:
            return self.when is other.when
        return self.when == other.when

    def __hash__(self) -> int:
        return hash((self.name, self.email))

    def validate(self) -> None:
        if not isinstance(self.name, str) or self.name == "":
            raise ValidationError(self.type_name(), "name", "must not be empty")
        name_len = len(self.name.encode('utf-8'))
        if name_len > SIGNATURE_NAME_MAX_LENGTH:
            raise ValidationError(
                self.type_name(), "name",
                f"exceeds maximum length of {SIGNATURE_NAME_MAX_LENGTH} bytes (got {name_len})",
            )

        if not isinstance(self.email, str) or self.email == "":
            raise ValidationError(self.type_name(), "email", "must not be empty")
        email_len = len(self.email.encode('utf-8'))
        if email_len > SIGNATURE_EMAIL_MAX_LENGTH:
            raise ValidationError(
                self.type_name(), "email",
                f"exceeds maximum length of {SIGNATURE_EMAIL_MAX_LENGTH} bytes (got {email_len})",
            )
        problem = check_email(self.email)
        if problem:
            raise ValidationError(
                self.type_name(), "email",
                f"has invalid format: {self.email!r} ({problem})",
                self.email,
            )

        if self.when is None:
            raise ValidationError(self.type_name(), "when", "must not be zero")
        if not isinstance(self.when, datetime):
            raise ValidationError(self.type_name(), "when", f"must be a datetime, got {type(self.when).__name__}")
        if self.when.tzinfo is None or self.when.utcoffset() is None:
            raise ValidationError(self.type_name(), "when", "must be timezone-aware", self.when)

    def _render(self, email: str) -> str:
        when = format_timestamp(self.when) if isinstance(self.when, datetime) else ""
        return f"Signature{{Name:{self.name}, Email:{email}, When:{when}}}"

    def __str__(self) -> str:
        return self._render(self.email)

    def redacted(self) -> str:
        return self._render(redact_email(self.email))

    def _encode(self) -> Any:
        return {
            'name': self.name,
            'email': self.email,
            'when': format_timestamp(self.when) if self.when is not None else None,
        }

    @classmethod
    def _decode(cls, data: Any) -> 'Signature':
        data = expect_mapping(data, cls.type_name())
        return cls(
            name=expect_str(data.get('name'), 'name'),
            email=expect_str(data.get('email'), 'email'),
            when=parse_timestamp(data.get('when')),
        )
