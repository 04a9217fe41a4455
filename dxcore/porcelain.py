"""
Parsers for Git porcelain output.

Callers run Git themselves and hand the captured text to these
functions, which build validated dxcore values from it. Nothing here
executes commands or touches the filesystem.

Supported formats:
    git status --porcelain                     -> WorktreeStatus
    git diff --name-status / git show --name-status -> List[FileChange]
    git for-each-ref --format='%(objectname) %(refname)'
    git show-ref                               -> List[Ref]
    raw object signature lines                 -> Signature
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import List

from .domain import FileChange, FileChangeKind, Hash, Ref, RefKind, RefName, Signature, WorktreeStatus
from .errors import ModelError, ParseError

logger = logging.getLogger(__name__)

# Status letters from `git status --porcelain` that count as a change
CHANGE_CODES = set('MADRCT')

NAME_STATUS_KINDS = {
    'A': FileChangeKind.ADDED,
    'M': FileChangeKind.MODIFIED,
    'D': FileChangeKind.DELETED,
    'R': FileChangeKind.RENAMED,
    'C': FileChangeKind.COPIED,
    'T': FileChangeKind.TYPE_CHANGED,
}

# "Jane Doe <jane@example.com> 1700000000 +0100"
SIGNATURE_RE = re.compile(r'^(?P<name>.*?)\s*<(?P<email>[^<>]*)>\s+(?P<ts>-?\d+)\s+(?P<tz>[+-]\d{4})$')


def parse_status_porcelain(output: str) -> WorktreeStatus:
    """
    Summarise `git status --porcelain` (v1) output.

    The first column is the index, the second the worktree; "??" marks
    an untracked path. Ignored ("!!") entries do not make a tree dirty.
    """
    has_staged = False
    has_unstaged = False
    has_untracked = False

    for line in (output or '').splitlines():
        if not line.strip():
            continue
        if len(line) < 2:
            raise ParseError("WorktreeStatus", line, "status line too short")
        code = line[:2]
        if code == '??':
            has_untracked = True
            continue
        if code == '!!':
            continue
        if code[0] in CHANGE_CODES or code[0] == 'U':
            has_staged = True
        if code[1] in CHANGE_CODES or code[1] == 'U':
            has_unstaged = True

    return WorktreeStatus(
        has_unstaged=has_unstaged,
        has_staged=has_staged,
        has_untracked=has_untracked,
    )


def parse_name_status(output: str) -> List[FileChange]:
    """
    Parse `--name-status` output into FileChanges.

    Lines are tab separated: "M\tpath" or "R100\told\tnew". Status
    letters outside A/M/D/R/C/T map to UNKNOWN.
    """
    changes = []
    for line in (output or '').splitlines():
        if not line.strip():
            continue
        fields = line.split('\t')
        status = fields[0].strip()
        if not status:
            raise ParseError("FileChange", line, "missing status")
        kind = NAME_STATUS_KINDS.get(status[0], FileChangeKind.UNKNOWN)
        if kind is FileChangeKind.UNKNOWN:
            logger.debug(f"Unrecognised name-status code {status!r}, recording as unknown")

        if kind.allows_old_path:
            if len(fields) != 3:
                raise ParseError("FileChange", line, f"expected old and new path for status {status}")
            old_path, path = fields[1], fields[2]
        else:
            if len(fields) != 2:
                raise ParseError("FileChange", line, f"expected one path for status {status}")
            old_path, path = "", fields[1]

        try:
            changes.append(FileChange.new(path, kind, old_path=old_path))
        except ModelError as e:
            raise ParseError("FileChange", line, str(e)) from e
    return changes


def parse_ref_line(line: str) -> Ref:
    """
    Parse "<hash> <refname>" as printed by for-each-ref or show-ref.

    The kind is inferred from the name; names that do not pin down a
    kind get UNKNOWN.
    """
    parts = line.strip().split(None, 1)
    if len(parts) != 2:
        raise ParseError("Ref", line, "expected '<hash> <refname>'")
    try:
        hash_ = Hash.parse(parts[0])
        name = RefName.parse(parts[1])
        return Ref.new(name, RefKind.infer(name.value), hash_)
    except ModelError as e:
        raise ParseError("Ref", line, str(e)) from e


def parse_refs(output: str) -> List[Ref]:
    """Parse one ref per non-blank line."""
    return [parse_ref_line(line) for line in (output or '').splitlines() if line.strip()]


def parse_signature(text: str) -> Signature:
    """
    Parse a raw object signature: "Name <email> <unix-seconds> <+hhmm>".

    This is the form found after "author", "committer" and "tagger" in
    `git cat-file -p` output.
    """
    match = SIGNATURE_RE.match(text.strip())
    if not match:
        raise ParseError("Signature", text, "expected 'Name <email> <timestamp> <offset>'")

    tz = match.group('tz')
    sign = -1 if tz[0] == '-' else 1
    try:
        offset = timedelta(hours=int(tz[1:3]), minutes=int(tz[3:5])) * sign
        when = datetime.fromtimestamp(int(match.group('ts')), tz=timezone(offset))
    except (ValueError, OverflowError, OSError) as e:
        raise ParseError("Signature", text, f"bad timestamp or offset: {e}") from e

    try:
        return Signature.new(match.group('name'), match.group('email'), when)
    except ModelError as e:
        raise ParseError("Signature", text, str(e)) from e
