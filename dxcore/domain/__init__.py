"""
Domain layer for dxcore.

Contains pure value objects with no I/O or side effects:
- Hash: Canonical Git object id
- RefName, RefKind, Ref: References and their syntactic kinds
- CommitRange, CommitRangeSpec: "A..B" history intervals
- Signature: Author/committer identity and time
- FileChangeKind, FileChange: Per-file change records
- Commit: A commit with its metadata and changes
- TagName, Tag: Lightweight and annotated tags
- WorktreeStatus: Dirty-state flags of a worktree

These objects are immutable, validate themselves, and serialize to
JSON and YAML through the shared Model contract.
"""

from .base import Model, Record
from .hash import Hash
from .ref import RefName, RefKind, Ref
from .commit_range import CommitRange, CommitRangeSpec
from .signature import Signature
from .file_change import FileChange, FileChangeKind
from .commit import Commit
from .tag import Tag, TagName
from .worktree import WorktreeStatus

# Serializable types by name, for tools that pick a type at runtime
MODEL_TYPES = {
    cls.type_name(): cls
    for cls in (
        Hash,
        RefName,
        Ref,
        CommitRange,
        CommitRangeSpec,
        Signature,
        FileChange,
        Commit,
        TagName,
        Tag,
        WorktreeStatus,
    )
}


def get_model_type(name: str):
    """Look up a model class by name, case-insensitively."""
    for type_name, cls in MODEL_TYPES.items():
        if type_name.lower() == name.strip().lower():
            return cls
    raise KeyError(name)


__all__ = [
    'Model',
    'Record',
    'Hash',
    'RefName',
    'RefKind',
    'Ref',
    'CommitRange',
    'CommitRangeSpec',
    'Signature',
    'FileChange',
    'FileChangeKind',
    'Commit',
    'TagName',
    'Tag',
    'WorktreeStatus',
    'MODEL_TYPES',
    'get_model_type',
]
