"""
Commit domain object for dxcore.

Commit aggregates everything a release tool needs to know about one
commit: its hash and parents, author and committer, full message and
summary line, and the files it touched.

The summary is always the stripped first line of the message. Commit.new
derives it when the caller leaves it empty; a Commit built directly must
carry a matching summary or it fails validation. Messages must use LF
line endings; CR and CRLF are rejected rather than normalized.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple

from ..errors import ValidationError
from .base import Record, expect_list, expect_mapping, expect_str
from .file_change import FileChange
from .hash import Hash
from .signature import Signature

COMMIT_MESSAGE_MAX_LEN = 1048576  # 1 MiB
COMMIT_SUMMARY_MAX_LEN = 512
COMMIT_PARENTS_MAX_COUNT = 64
COMMIT_CHANGES_MAX_COUNT = 10000


def summary_of(message: str) -> str:
    """Stripped first line of a commit message."""
    return message.split('\n', 1)[0].strip()


@dataclass(frozen=True)
class Commit(Record):
    """
    A Git commit.

    Attributes:
        hash: Commit id
        parents: Parent ids; empty for a root commit, 2+ for a merge
        author: Who wrote the change
        committer: Who recorded the commit
        message: Full message, LF line endings
        summary: First line of message, stripped
        changes: Files touched by the commit
    """

    hash: Hash = field(default_factory=Hash)
    parents: Tuple[Hash, ...] = ()
    author: Signature = field(default_factory=Signature)
    committer: Signature = field(default_factory=Signature)
    message: str = ""
    summary: str = ""
    changes: Tuple[FileChange, ...] = ()

    def __post_init__(self):
        # Sequence fields are always stored as tuples
        if not isinstance(self.parents, tuple):
            object.__setattr__(self, 'parents', tuple(self.parents))
        if not isinstance(self.changes, tuple):
            object.__setattr__(self, 'changes', tuple(self.changes))

    @classmethod
    def new(
        cls,
        hash: Hash,
        parents: Iterable[Hash],
        author: Signature,
        committer: Signature,
        message: str,
        summary: Optional[str] = None,
        changes: Iterable[FileChange] = (),
    ) -> 'Commit':
        """
        Build and validate a Commit.

        An empty summary is derived from the first line of message.
        """
        if not summary and message:
            summary = summary_of(message)
        commit = cls(
            hash=hash,
            parents=tuple(parents),
            author=author,
            committer=committer,
            message=message,
            summary=summary or "",
            changes=tuple(changes),
        )
        commit.validate()
        return commit

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def is_root(self) -> bool:
        return len(self.parents) == 0

    def is_zero(self) -> bool:
        return (
            self.hash.is_zero() and
            len(self.parents) == 0 and
            self.author.is_zero() and
            self.committer.is_zero() and
            self.message == "" and
            self.summary == "" and
            len(self.changes) == 0
        )

    def validate(self) -> None:
        name = self.type_name()

        if not isinstance(self.hash, Hash):
            raise ValidationError(name, "hash", f"must be a Hash, got {type(self.hash).__name__}")
        if self.hash.is_zero():
            raise ValidationError(name, "hash", "must not be empty")
        try:
            self.hash.validate()
        except ValidationError as e:
            raise ValidationError(name, "hash", f"invalid: {e}", self.hash) from e

        if len(self.parents) > COMMIT_PARENTS_MAX_COUNT:
            raise ValidationError(
                name, "parents",
                f"has too many parents: {len(self.parents)} (maximum {COMMIT_PARENTS_MAX_COUNT})",
            )
        for i, parent in enumerate(self.parents):
            if not isinstance(parent, Hash) or parent.is_zero():
                raise ValidationError(name, f"parents[{i}]", "must not be empty")
            try:
                parent.validate()
            except ValidationError as e:
                raise ValidationError(name, f"parents[{i}]", f"invalid: {e}", parent) from e

        for field_name, sig in (("author", self.author), ("committer", self.committer)):
            if not isinstance(sig, Signature) or sig.is_zero():
                raise ValidationError(name, field_name, "must not be empty")
            try:
                sig.validate()
            except ValidationError as e:
                raise ValidationError(name, field_name, f"invalid: {e}") from e

        self._validate_message()

        if len(self.changes) > COMMIT_CHANGES_MAX_COUNT:
            raise ValidationError(
                name, "changes",
                f"has too many changes: {len(self.changes)} (maximum {COMMIT_CHANGES_MAX_COUNT})",
            )
        for i, change in enumerate(self.changes):
            if not isinstance(change, FileChange):
                raise ValidationError(name, f"changes[{i}]", f"must be a FileChange, got {type(change).__name__}")
            try:
                change.validate()
            except ValidationError as e:
                raise ValidationError(name, f"changes[{i}]", f"invalid: {e}", change) from e

    def _validate_message(self) -> None:
        name = self.type_name()

        if not isinstance(self.message, str):
            raise ValidationError(name, "message", f"must be a string, got {type(self.message).__name__}")
        if self.message == "":
            raise ValidationError(name, "message", "must not be empty")
        size = len(self.message.encode('utf-8'))
        if size > COMMIT_MESSAGE_MAX_LEN:
            raise ValidationError(
                name, "message",
                f"exceeds maximum length of {COMMIT_MESSAGE_MAX_LEN} bytes (got {size})",
            )
        if '\r' in self.message:
            raise ValidationError(name, "message", "contains CRLF or CR line endings (must use LF)")

        if not isinstance(self.summary, str):
            raise ValidationError(name, "summary", f"must be a string, got {type(self.summary).__name__}")
        if self.summary == "":
            raise ValidationError(name, "summary", "must not be empty")
        size = len(self.summary.encode('utf-8'))
        if size > COMMIT_SUMMARY_MAX_LEN:
            raise ValidationError(
                name, "summary",
                f"exceeds maximum length of {COMMIT_SUMMARY_MAX_LEN} bytes (got {size})",
            )
        if '\n' in self.summary or '\r' in self.summary:
            raise ValidationError(name, "summary", "must not contain newlines")
        expected = summary_of(self.message)
        if self.summary != expected:
            raise ValidationError(
                name, "summary",
                f"{self.summary!r} does not match first line of message {expected!r}",
            )

    def _render(self, digest: str) -> str:
        return (
            f"Commit{{Hash:{digest}, Parents:{len(self.parents)}, "
            f"Author:{self.author.name}, Summary:{self.summary}}}"
        )

    def __str__(self) -> str:
        return self._render(str(self.hash))

    def redacted(self) -> str:
        return self._render(self.hash.redacted())

    def _encode(self) -> Any:
        return {
            'hash': self.hash._encode(),
            'parents': [p._encode() for p in self.parents],
            'author': self.author._encode(),
            'committer': self.committer._encode(),
            'message': self.message,
            'summary': self.summary,
            'changes': [c._encode() for c in self.changes],
        }

    @classmethod
    def _decode(cls, data: Any) -> 'Commit':
        data = expect_mapping(data, cls.type_name())
        author = data.get('author')
        committer = data.get('committer')
        return cls(
            hash=Hash._decode(data.get('hash')),
            parents=tuple(Hash._decode(p) for p in expect_list(data.get('parents'), 'parents')),
            author=Signature._decode(author) if author is not None else Signature(),
            committer=Signature._decode(committer) if committer is not None else Signature(),
            message=expect_str(data.get('message'), 'message'),
            summary=expect_str(data.get('summary'), 'summary'),
            changes=tuple(FileChange._decode(c) for c in expect_list(data.get('changes'), 'changes')),
        )
