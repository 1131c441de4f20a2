"""
Pytest configuration and fixtures for the cleaning pipeline tests.

This file is automatically discovered by pytest and provides
shared fixtures and configuration for all test modules.
"""

import pytest
import pandas as pd
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def raw_products_df():
    """
    Raw products with one of every anomaly the cleaning handles.

    After cleaning only product_id 1, 2, 4 and 6 survive:
    - product_id 3 appears twice (first row kept) and has no repeat_purchase
    - product_id 5 has repeat_purchase=2
    """
    return pd.DataFrame({
        "product_id": [1, 2, 3, 3, 4, 5, 6],
        "category": ["Food", "reptile", None, "Toys", "Housing", "Medicine", "Accessory"],
        "animal": ["Dog", "Cat", "Snake", "Fish", None, "Bird", "Dog"],
        "size": ["Small", "small", "Large", "Medium", "Medium", None, "Large"],
        "price": [10.0, None, 30.0, 99.0, 40.0, None, 20.0],
        "sales": [100.456, 200.0, None, 5.0, 300.0, 400.0, 50.0],
        "rating": [5, 15, None, 3, 7.5, 10, 1],
        "repeat_purchase": [1, 0, None, 1, 1, 2, 0],
    })


@pytest.fixture
def sample_config():
    """
    Provide a pipeline configuration with folders relative to a base dir.
    """
    return {
        "data": {
            "raw_folder": "data/raw/",
            "cleansed_folder": "data/cleansed/",
            "products_key": "pet_supplies.csv",
            "products_clean_key": "pet_supplies_clean.csv",
        },
        "chart": {
            "enabled": True,
            "key": "repeat_purchase_counts.png",
            "title": "Repeat purchases",
            "dpi": 50,
        },
    }


# Add pytest CLI options
def pytest_addoption(parser):
    """Add custom pytest options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run integration tests (requires Apache Airflow installed)"
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: needs Apache Airflow")


def pytest_collection_modifyitems(config, items):
    """Mark integration tests for conditional execution."""
    if config.getoption("--integration"):
        # Run all tests
        return

    # Skip integration tests if flag not provided
    skip_integration = pytest.mark.skip(reason="need --integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
