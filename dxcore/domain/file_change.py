"""
File change domain objects for dxcore.

A FileChange records what happened to one path in a commit, as reported
by `git diff --name-status` or `git show --name-status`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import ParseError, ValidationError
from .base import Record, expect_mapping, expect_str

FILE_PATH_MAX_LENGTH = 4096


class FileChangeKind(Enum):
    """Kind of change applied to a file."""
    UNKNOWN = "unknown"
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    TYPE_CHANGED = "type-changed"

    @classmethod
    def type_name(cls) -> str:
        return "FileChangeKind"

    @classmethod
    def parse(cls, text: str) -> 'FileChangeKind':
        """
        Parse a kind name, case-insensitively.

        "type_changed" and "typechanged" are accepted on read; the
        canonical spelling is "type-changed".
        """
        if not isinstance(text, str):
            raise ParseError(cls.type_name(), text, "expected a string")
        normalized = text.strip().lower()
        if normalized in ("type_changed", "typechanged"):
            return cls.TYPE_CHANGED
        for kind in cls:
            if kind.value == normalized:
                return kind
        raise ParseError(cls.type_name(), text, "unknown kind")

    @property
    def allows_old_path(self) -> bool:
        """True for kinds that carry a source path."""
        return self in (FileChangeKind.RENAMED, FileChangeKind.COPIED)

    def is_zero(self) -> bool:
        return self is FileChangeKind.UNKNOWN

    def validate(self) -> None:
        return None

    def redacted(self) -> str:
        return self.value

    def equal(self, other: Any) -> bool:
        return self is other

    def __str__(self) -> str:
        return self.value


def _check_path(type_name: str, field: str, path: str) -> None:
    size = len(path.encode('utf-8'))
    if size > FILE_PATH_MAX_LENGTH:
        raise ValidationError(
            type_name, field,
            f"exceeds maximum length of {FILE_PATH_MAX_LENGTH} bytes (got {size})",
        )
    if path.startswith('/'):
        raise ValidationError(type_name, field, f"must be relative (no leading slash): {path!r}", path)


@dataclass(frozen=True)
class FileChange(Record):
    """
    A change to one file.

    Attributes:
        path: Repository-relative path after the change
        old_path: Source path; only for RENAMED or COPIED
        kind: What happened to the file

    A RENAMED or COPIED change without old_path is accepted as partial
    data.
    """

    path: str = ""
    old_path: str = ""
    kind: FileChangeKind = FileChangeKind.UNKNOWN

    @classmethod
    def new(cls, path: str, kind: FileChangeKind, old_path: str = "") -> 'FileChange':
        """Build and validate a FileChange."""
        fc = cls(path=path, old_path=old_path, kind=kind)
        fc.validate()
        return fc

    def is_zero(self) -> bool:
        return self.path == "" and self.old_path == "" and self.kind.is_zero()

    def validate(self) -> None:
        if not isinstance(self.path, str) or self.path == "":
            raise ValidationError(self.type_name(), "path", "must not be empty")
        _check_path(self.type_name(), "path", self.path)

        if not isinstance(self.kind, FileChangeKind):
            raise ValidationError(self.type_name(), "kind", f"{self.kind!r} is not a known FileChangeKind", self.kind)

        if not isinstance(self.old_path, str):
            raise ValidationError(self.type_name(), "old_path", "must be a string")
        if self.old_path:
            if not self.kind.allows_old_path:
                raise ValidationError(
                    self.type_name(), "old_path",
                    f"should only be set for renamed/copied files (got kind={self.kind.value})",
                )
            _check_path(self.type_name(), "old_path", self.old_path)

    def __str__(self) -> str:
        if self.old_path:
            return f"FileChange{{Path:{self.path}, OldPath:{self.old_path}, Kind:{self.kind}}}"
        return f"FileChange{{Path:{self.path}, Kind:{self.kind}}}"

    def _encode(self) -> Any:
        result = {'path': self.path}
        if self.old_path:
            result['old_path'] = self.old_path
        result['kind'] = self.kind.value
        return result

    @classmethod
    def _decode(cls, data: Any) -> 'FileChange':
        data = expect_mapping(data, cls.type_name())
        kind_text = expect_str(data.get('kind'), 'kind', FileChangeKind.UNKNOWN.value)
        return cls(
            path=expect_str(data.get('path'), 'path'),
            old_path=expect_str(data.get('old_path'), 'old_path'),
            kind=FileChangeKind.parse(kind_text),
        )
