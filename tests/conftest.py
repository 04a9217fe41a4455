"""Shared fixtures for dxcore tests."""

import logging
import os
from datetime import datetime, timezone

import pytest

from dxcore import Hash, Ref, RefKind, RefName, Signature

SHA1 = "a1b2c3d4e5f67890abcdef1234567890abcdef12"
SHA1_OTHER = "0fedcba9876543210fedcba9876543210fedcba9"
SHA256 = "0123456789abcdef" * 4
WHEN = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config and DXCORE_* variables out of every test."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in [k for k in os.environ if k.startswith("DXCORE_")]:
        monkeypatch.delenv(key)

    yield

    logger = logging.getLogger("dxcore")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def signature():
    return Signature.new("Jane Doe", "jane@example.com", WHEN)


@pytest.fixture
def main_ref():
    return Ref.new(RefName("refs/heads/main"), RefKind.BRANCH, Hash(SHA1))


@pytest.fixture
def tag_ref():
    return Ref.new(RefName("refs/tags/v1.0.0"), RefKind.TAG, Hash(SHA1_OTHER))
