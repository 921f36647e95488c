"""
Shared fixtures for unit tests.

Provides test isolation fixtures to ensure clean state between tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from object_generator.config import clear_settings_cache

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    """
    Ensure settings cache is cleared before and after each test.

    This prevents test pollution where one test's configuration
    affects another test's behavior.
    """
    clear_settings_cache()
    yield
    clear_settings_cache()
