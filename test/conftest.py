"""
Test Configuration and Fixtures

Environment setup happens before any application import: settings and the loguru
sinks read the environment at import time. Every test runs against the in-memory
store backend; no database is needed.
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    os.environ['PRICING_STORE_BACKEND'] = 'memory'
    os.environ.setdefault('PRICING_TIMEZONE', 'Asia/Kolkata')

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402

from src.platform.config.di import container  # noqa: E402


@pytest.fixture(autouse=True)
def reset_container() -> Generator[None, None, None]:
    """Fresh singletons (stores, caches) for every test"""
    container.reset_singletons()
    yield
    container.reset_singletons()
