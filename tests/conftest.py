"""
Pytest fixtures for the inventory grouping test suite.

Provides:
- Structured logging configured for the session, LogContext cleared per test
- ``captured_logs`` for asserting on emitted JSON log records
- Line-item builders for ungrouped items and groups
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from inventory_kernel.domain.line_item import LineItem
from inventory_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture inventory_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            resize_group(...)
            logs = captured_logs()
            assert any(r["message"] == "group_resized" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("inventory_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Line-item builders
# =============================================================================


def build_item(item_id: int, **overrides) -> LineItem:
    """A saved-looking item with realistic domain fields."""
    fields = {
        "company_uuid": "company-1",
        "uuid": f"u{item_id}",
        "group_id": "",
        "is_new": False,
        "item_code": f"SKU-{item_id:03d}",
        "unit": "m",
        "unit_value": Decimal("10"),
        "packaging_unit": "roll",
        "cost": Decimal("25.50"),
        "properties": {"color": "blue"},
    }
    fields.update(overrides)
    return LineItem(id=item_id, **fields)


def build_group(group_id: str, first_id: int, size: int, **overrides) -> list[LineItem]:
    """*size* consecutive members of *group_id* with ids from *first_id*."""
    return [
        build_item(first_id + offset, group_id=group_id, **overrides)
        for offset in range(size)
    ]


@pytest.fixture
def item_factory():
    return build_item


@pytest.fixture
def group_factory():
    return build_group
