"""Shared fixtures: every test starts from default settings and no installed log sinks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from typed_jsonb.config import configure
from typed_jsonb.observability import shutdown_logging

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _reset_runtime_state() -> Iterator[None]:
    configure()
    yield
    configure()
    shutdown_logging()
