"""
dxcore - Validated Git metadata value types for release automation.

dxcore models the Git facts a release tool works with as small immutable
values that check their own invariants and serialize to JSON and YAML.

Quick Start:
    from dxcore import Hash, Ref, RefKind, RefName, CommitRange

    head = Ref.new(
        RefName("refs/heads/main"),
        RefKind.BRANCH,
        Hash.parse("A1B2C3D4E5F67890ABCDEF1234567890ABCDEF12"),
    )
    since_start = CommitRange.new(Ref(), head)
    print(since_start)             # (zero)..refs/heads/main(a1b2c3d)

    text = since_start.to_json()
    assert CommitRange.from_json(text) == since_start

    # Build values from Git output captured elsewhere
    from dxcore.porcelain import parse_status_porcelain
    status = parse_status_porcelain(" M README.md\\n?? notes.txt\\n")
    print(status)                  # unstaged, untracked

Domain Objects:
    Hash, RefName, RefKind, Ref, CommitRange, CommitRangeSpec,
    Signature, FileChangeKind, FileChange, Commit, TagName, Tag,
    WorktreeStatus

Every model offers validate(), is_valid(), is_zero(), equal(),
str(), redacted(), to_json()/from_json() and to_yaml()/from_yaml().
Invalid values never serialize, and deserialization never returns a
value that fails validation.
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    Model,
    Record,
    Hash,
    RefName,
    RefKind,
    Ref,
    CommitRange,
    CommitRangeSpec,
    Signature,
    FileChange,
    FileChangeKind,
    Commit,
    TagName,
    Tag,
    WorktreeStatus,
    MODEL_TYPES,
    get_model_type,
)

# Errors
from .errors import (
    ModelError,
    ValidationError,
    ParseError,
    MarshalError,
    UnmarshalError,
    CollectedErrors,
)

# Generic helpers
from .helpers import (
    validate_all,
    filter_zero,
    must_validate,
    safe_string,
    clone,
    models_equal,
)

# Configuration
from .config import load_config, configure_logging

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "Model",
    "Record",
    "Hash",
    "RefName",
    "RefKind",
    "Ref",
    "CommitRange",
    "CommitRangeSpec",
    "Signature",
    "FileChange",
    "FileChangeKind",
    "Commit",
    "TagName",
    "Tag",
    "WorktreeStatus",
    "MODEL_TYPES",
    "get_model_type",
    # Errors
    "ModelError",
    "ValidationError",
    "ParseError",
    "MarshalError",
    "UnmarshalError",
    "CollectedErrors",
    # Helpers
    "validate_all",
    "filter_zero",
    "must_validate",
    "safe_string",
    "clone",
    "models_equal",
    # Configuration
    "load_config",
    "configure_logging",
]
