"""
Worktree status domain object for dxcore.

Three independent flags summarising `git status`. Every combination is
valid, so the zero value (all False) is a clean worktree and serializes
fine.
"""

from dataclasses import dataclass
from typing import Any

from ..errors import ValidationError
from .base import Record, expect_bool, expect_mapping


@dataclass(frozen=True)
class WorktreeStatus(Record):
    """Dirty-state flags of a Git worktree."""
    has_unstaged: bool = False
    has_staged: bool = False
    has_untracked: bool = False

    @classmethod
    def new(cls, has_unstaged: bool, has_staged: bool, has_untracked: bool) -> 'WorktreeStatus':
        return cls(has_unstaged=has_unstaged, has_staged=has_staged, has_untracked=has_untracked)

    def clean(self) -> bool:
        """True when nothing is staged, unstaged or untracked."""
        return not self.has_unstaged and not self.has_staged and not self.has_untracked

    def is_zero(self) -> bool:
        return self.clean()

    def validate(self) -> None:
        for field_name in ('has_unstaged', 'has_staged', 'has_untracked'):
            if not isinstance(getattr(self, field_name), bool):
                raise ValidationError(self.type_name(), field_name, "must be a boolean")

    def __str__(self) -> str:
        if self.clean():
            return "clean"
        parts = []
        if self.has_unstaged:
            parts.append("unstaged")
        if self.has_staged:
            parts.append("staged")
        if self.has_untracked:
            parts.append("untracked")
        return ", ".join(parts)

    def _encode(self) -> Any:
        return {
            'has_unstaged': self.has_unstaged,
            'has_staged': self.has_staged,
            'has_untracked': self.has_untracked,
        }

    @classmethod
    def _decode(cls, data: Any) -> 'WorktreeStatus':
        data = expect_mapping(data, cls.type_name())
        return cls(
            has_unstaged=expect_bool(data.get('has_unstaged'), 'has_unstaged'),
            has_staged=expect_bool(data.get('has_staged'), 'has_staged'),
            has_untracked=expect_bool(data.get('has_untracked'), 'has_untracked'),
        )
