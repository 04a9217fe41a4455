"""
Generic helpers that operate on any dxcore model.

These mirror the per-type methods but work across collections and
types, and route rendering through the configured redaction switch.
"""

import logging
from typing import Iterable, List, Optional, Type, TypeVar

from .config import is_unsafe_logging
from .domain.base import Model
from .errors import CollectedErrors, MarshalError, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar('M', bound=Model)


def validate_all(models: Iterable[Model]) -> None:
    """
    Validate every model and report all failures together.

    Raises:
        CollectedErrors: one entry per invalid model, tagged with its
            position and type
    """
    errors: List[Exception] = []
    for i, model in enumerate(models):
        try:
            model.validate()
        except ValidationError as e:
            errors.append(ValidationError(model.type_name(), f"model[{i}]", str(e), model))
    if errors:
        raise CollectedErrors(errors)


def filter_zero(models: Iterable[M]) -> List[M]:
    """Drop zero-valued models, keeping order."""
    return [m for m in models if not m.is_zero()]


def must_validate(model: M) -> M:
    """Return model unchanged if valid, else raise ValidationError."""
    model.validate()
    return model


def safe_string(model: Model, unsafe: Optional[bool] = None) -> str:
    """
    Render a model for logs.

    Full rendering when unsafe is true, redacted otherwise. When unsafe
    is None the `logging.unsafe` config setting decides.
    """
    if unsafe is None:
        unsafe = is_unsafe_logging()
    return str(model) if unsafe else model.redacted()


def to_json(model: Model, indent: Optional[int] = None) -> str:
    return model.to_json(indent=indent)


def to_yaml(model: Model) -> str:
    return model.to_yaml()


def from_json(cls: Type[M], text: str) -> M:
    return cls.from_json(text)


def from_yaml(cls: Type[M], text: str) -> M:
    return cls.from_yaml(text)


def clone(model: M) -> M:
    """Copy a model through its plain-data form. Raises MarshalError if invalid."""
    return type(model).from_data(model.to_data())


def models_equal(a: Model, b: Model) -> bool:
    """Compare two models by their serialized form. False if either is invalid."""
    if type(a) is not type(b):
        return False
    try:
        return a.to_json() == b.to_json()
    except MarshalError as e:
        logger.debug(f"models_equal: cannot compare invalid model: {e}")
        return False
