"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from bankmerge.core import config as config_module
from bankmerge.core.models import Category, Payee, Transaction


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_transaction() -> Transaction:
    """Sample expense transaction for testing."""
    return Transaction(
        bank="tbank",
        account="checking",
        payee="Test Payee",
        amount=Decimal("-100.50"),
        date=datetime(2025, 10, 11, 14, 30, 45, tzinfo=timezone.utc),
        currency="USD",
        category="Food",
        description="Test Description",
    )


@pytest.fixture
def sample_payees() -> list[Payee]:
    """Payees with both expense and top-up enrichment data."""
    return [
        Payee(
            name="Starbucks",
            expense_category="Coffee",
            expense_description="Coffee shop",
            synonyms=("STARBUCKS #123", "Starbucks Coffee"),
        ),
        Payee(
            name="Employer Inc",
            top_up_category="Salary",
            top_up_description="Monthly salary",
            synonyms=("EMPLOYER INC PAYROLL",),
        ),
    ]


@pytest.fixture
def sample_categories() -> list[Category]:
    """Categories with synonyms."""
    return [
        Category(name="Groceries", synonyms=("Supermarkets", "Супермаркеты")),
        Category(name="Transport"),
    ]


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real store data
    monkeypatch.setenv("BANKMERGE_ENV", "test")
    monkeypatch.setenv("BANKMERGE_DATA_DIR", str(tmp_path / "bankmerge_data"))
    monkeypatch.delenv("BANKMERGE_OUTPUT_FORMAT", raising=False)
    monkeypatch.delenv("BANKMERGE_OUTPUT_NAME", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    # Every test loads configuration from its own environment
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for amount parsing and precision")
    config.addinivalue_line("markers", "converters: Tests for bank statement converters")
    config.addinivalue_line("markers", "enrichment: Tests for payee/category enrichment")
    config.addinivalue_line("markers", "exporters: Tests for CSV and OFX exporters")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
