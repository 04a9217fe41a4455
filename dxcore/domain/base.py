"""
Shared contract for dxcore domain objects.

Every value type mixes in Model and supplies four things:

- validate(): raise ValidationError or return None
- is_zero(): True when every field holds its zero value
- _encode(): convert to plain data (str / dict / list), no validation
- _decode(data): build an instance from plain data, no validation

The plain-data pair is the serialization boundary. Model wraps it so that
marshaling validates first and produces nothing for an invalid value, and
unmarshaling validates after decoding and hands back either a fully valid
instance or an error.
"""

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar

import yaml

from ..errors import MarshalError, ModelError, UnmarshalError, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar('M', bound='Model')


class Model:
    """Mixin implementing the validate / render / serialize contract."""

    __slots__ = ()

    @classmethod
    def type_name(cls) -> str:
        return cls.__name__

    def validate(self) -> None:
        raise NotImplementedError

    def is_valid(self) -> bool:
        """True if validate() would pass."""
        try:
            self.validate()
        except ValidationError:
            return False
        return True

    def is_zero(self) -> bool:
        raise NotImplementedError

    def redacted(self) -> str:
        """Privacy-reduced rendering. Same as str() unless overridden."""
        return str(self)

    def equal(self, other: Any) -> bool:
        """Structural equality; False for values of another type."""
        if type(other) is not type(self):
            return False
        return self == other

    # -------------------------------------------------------------------------
    # Plain data boundary
    # -------------------------------------------------------------------------

    def _encode(self) -> Any:
        raise NotImplementedError

    @classmethod
    def _decode(cls: Type[M], data: Any) -> M:
        raise NotImplementedError

    def to_data(self) -> Any:
        """Validate, then convert to plain JSON/YAML-ready data."""
        try:
            self.validate()
        except ValidationError as e:
            raise MarshalError(self.type_name(), str(e)) from e
        return self._encode()

    @classmethod
    def from_data(cls: Type[M], data: Any) -> M:
        """Decode plain data and validate the result."""
        try:
            value = cls._decode(data)
        except ModelError as e:
            logger.debug(f"Rejected {cls.type_name()} payload during decode: {e}")
            raise UnmarshalError(cls.type_name(), str(e), data) from e
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            logger.debug(f"Rejected malformed {cls.type_name()} payload: {e}")
            raise UnmarshalError(cls.type_name(), f"malformed data: {e}", data) from e

        try:
            value.validate()
        except ValidationError as e:
            logger.debug(f"Rejected invalid {cls.type_name()} payload: {e}")
            raise UnmarshalError(cls.type_name(), f"validation failed: {e}", data) from e
        return value

    # -------------------------------------------------------------------------
    # JSON / YAML
    # -------------------------------------------------------------------------

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON. Raises MarshalError if invalid."""
        return json.dumps(self.to_data(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_json(cls: Type[M], text: str) -> M:
        """Deserialize from JSON. Raises UnmarshalError on any failure."""
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise UnmarshalError(cls.type_name(), f"invalid JSON: {e}") from e
        return cls.from_data(data)

    def to_yaml(self) -> str:
        """Serialize to YAML. Raises MarshalError if invalid."""
        return yaml.safe_dump(
            self.to_data(),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )

    @classmethod
    def from_yaml(cls: Type[M], text: str) -> M:
        """Deserialize from YAML. Raises UnmarshalError on any failure."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise UnmarshalError(cls.type_name(), f"invalid YAML: {e}") from e
        return cls.from_data(data)


class Record(Model):
    """Model whose plain-data form is a mapping of snake_case fields."""

    __slots__ = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return self.to_data()

    @classmethod
    def from_dict(cls: Type[M], data: Dict[str, Any]) -> M:
        """Create from dictionary."""
        return cls.from_data(data)


# =============================================================================
# DECODING HELPERS
# =============================================================================

def expect_mapping(data: Any, type_name: str) -> Dict[str, Any]:
    """Return data if it is a mapping, else raise TypeError."""
    if not isinstance(data, dict):
        raise TypeError(f"{type_name} must be a mapping, got {type(data).__name__}")
    return data


def expect_str(value: Any, field: str, default: str = "") -> str:
    """Return value if it is a string (None maps to default)."""
    if value is None:
        return default
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a string, got {type(value).__name__}")
    return value


def expect_bool(value: Any, field: str) -> bool:
    """Return value if it is a bool (None maps to False)."""
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"{field} must be a boolean, got {type(value).__name__}")
    return value


def expect_list(value: Any, field: str) -> list:
    """Return value if it is a list (None maps to [])."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{field} must be a list, got {type(value).__name__}")
    return value
