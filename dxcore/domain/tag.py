"""
Git tag domain objects for dxcore.

- TagName: the short name of a tag ("v1.2.3", "release/2024-01",
  "v1.0.0+build.5"). Same rules as RefName, with "+" also allowed so
  SemVer build metadata survives.
- Tag: a tag as found in the repository, lightweight or annotated.

For a lightweight tag the object id is the commit id. For an annotated
tag the object id is the tag object and commit is what it peels to.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from ..errors import ParseError, ValidationError
from .base import Model, Record, expect_bool, expect_mapping, expect_str
from .hash import Hash
from .ref import check_name_text

TAG_NAME_MIN_LEN = 1
TAG_NAME_MAX_LEN = 256
TAG_MESSAGE_MAX_LEN = 65536  # 64 KiB

TAG_NAME_PATTERN = r'^[a-zA-Z0-9._/@{}\-^~:+]+$'
TAG_NAME_RE = re.compile(TAG_NAME_PATTERN)


@dataclass(frozen=True)
class TagName(Model):
    """Short name of a Git tag. The empty TagName is the zero value."""

    value: str = ""

    @classmethod
    def parse(cls, text: str) -> 'TagName':
        """Trim and validate. Blank input yields the zero TagName."""
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
        check_name_text(self.type_name(), self.value, TAG_NAME_RE, TAG_NAME_MIN_LEN, TAG_NAME_MAX_LEN)

    def _encode(self) -> Any:
        return self.value

    @classmethod
    def _decode(cls, data: Any) -> 'TagName':
        return cls.parse(expect_str(data, cls.type_name()))

    def __str__(self) -> str:
        return self.value

    def __bool__(self) -> bool:
        return not self.is_zero()


@dataclass(frozen=True)
class Tag(Record):
    """
    A Git tag.

    Attributes:
        name: Tag name
        object: Id of the tag object (annotated) or the commit (lightweight)
        commit: Id of the commit the tag peels to
        annotated: True for annotated tags
        message: Annotation message; empty for lightweight tags
    """

    name: TagName = field(default_factory=TagName)
    object: Hash = field(default_factory=Hash)
    commit: Hash = field(default_factory=Hash)
    annotated: bool = False
    message: str = ""

    @classmethod
    def new(cls, name: TagName, object: Hash, commit: Hash, annotated: bool = False, message: str = "") -> 'Tag':
        """Build and validate a Tag."""
        tag = cls(name=name, object=object, commit=commit, annotated=annotated, message=message)
        tag.validate()
        return tag

    def is_zero(self) -> bool:
        return (
            self.name.is_zero() and
            self.object.is_zero() and
            self.commit.is_zero() and
            not self.annotated and
            self.message == ""
        )

    def validate(self) -> None:
        name = self.type_name()
        fields = (("name", self.name, TagName), ("object", self.object, Hash), ("commit", self.commit, Hash))
        for field_name, value, expected in fields:
            if not isinstance(value, expected):
                raise ValidationError(name, field_name, f"must be a {expected.__name__}, got {type(value).__name__}")
            if value.is_zero():
                raise ValidationError(name, field_name, "must not be empty")
            try:
                value.validate()
            except ValidationError as e:
                raise ValidationError(name, field_name, e.reason, value) from e

        if not isinstance(self.annotated, bool):
            raise ValidationError(name, "annotated", "must be a boolean", self.annotated)
        if not isinstance(self.message, str):
            raise ValidationError(name, "message", "must be a string")
        size = len(self.message.encode('utf-8'))
        if not self.annotated and size:
            raise ValidationError(
                name, "message",
                f"must be empty for lightweight tags (got {size} bytes)",
            )
        if size > TAG_MESSAGE_MAX_LEN:
            raise ValidationError(
                name, "message",
                f"exceeds maximum length of {TAG_MESSAGE_MAX_LEN} bytes (got {size})",
            )

    def _render(self, obj: str, commit: str) -> str:
        return (
            f"Tag{{Name:{self.name}, Object:{obj}, Commit:{commit}, "
            f"Annotated:{str(self.annotated).lower()}}}"
        )

    def __str__(self) -> str:
        return self._render(str(self.object), str(self.commit))

    def redacted(self) -> str:
        return self._render(self.object.redacted(), self.commit.redacted())

    def _encode(self) -> Any:
        result = {
            'name': self.name._encode(),
            'object': self.object._encode(),
            'commit': self.commit._encode(),
            'annotated': self.annotated,
        }
        if self.message:
            result['message'] = self.message
        return result

    @classmethod
    def _decode(cls, data: Any) -> 'Tag':
        data = expect_mapping(data, cls.type_name())
        return cls(
            name=TagName._decode(data.get('name')),
            object=Hash._decode(data.get('object')),
            commit=Hash._decode(data.get('commit')),
            annotated=expect_bool(data.get('annotated'), 'annotated'),
            message=expect_str(data.get('message'), 'message'),
        )
