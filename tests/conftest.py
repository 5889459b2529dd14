"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest

from endpoint_doc_merger.models.metadata import RouteMapping


@pytest.fixture
def examples_path() -> Path:
    """Get the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def shop_module_path(examples_path: Path) -> Path:
    """Get the path to the sample controllers module."""
    return examples_path / "controllers" / "shop.py"


@pytest.fixture
def shop_table_path(examples_path: Path) -> Path:
    """Get the path to the sample metadata table."""
    return examples_path / "tables" / "shop.yaml"


@pytest.fixture
def users_mapping() -> RouteMapping:
    """A controller-level mapping."""
    return RouteMapping(
        value=("/users",),
        method=("PUT",),
        produces=("application/xml",),
        consumes=("application/xml",),
        headers=("X-Version=1",),
    )
