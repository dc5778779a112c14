"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import uuid
from decimal import Decimal
from typing import Dict

import pytest

from clinvoice_schema.config import ClinvoiceSettings, reload_config
from clinvoice_schema.exchange.rates import ExchangeRates
from clinvoice_schema.models import (
    Currency,
    Employee,
    Expense,
    Invoice,
    Job,
    Location,
    Money,
    Organization,
    Timesheet,
)

UTC = dt.timezone.utc


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'ENVIRONMENT': 'testing',
        'DEBUG': 'true',
        'LOG_LEVEL': 'DEBUG',
        'LOG_FORMAT': 'json',
        'DEFAULT_CURRENCY': 'eur',
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    import clinvoice_schema.config.settings
    clinvoice_schema.config.settings._config = None

    yield test_env_vars

    clinvoice_schema.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> ClinvoiceSettings:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def rates() -> ExchangeRates:
    """EUR-based rate table with USD and GBP."""
    return ExchangeRates(
        base=Currency.EUR,
        date=dt.date(2023, 6, 15),
        rates={Currency.USD: Decimal("1.10"), Currency.GBP: Decimal("0.88")},
    )


@pytest.fixture
def location_chain() -> Location:
    """A five-level location chain, innermost first."""
    earth = Location(id=uuid.uuid4(), name="Earth")
    usa = Location(id=uuid.uuid4(), name="USA", outer=earth)
    arizona = Location(id=uuid.uuid4(), name="Arizona", outer=usa)
    phoenix = Location(id=uuid.uuid4(), name="Phoenix", outer=arizona)
    return Location(id=uuid.uuid4(), name="1337 Some Street", outer=phoenix)


@pytest.fixture
def organization(location_chain) -> Organization:
    return Organization(id=uuid.uuid4(), location=location_chain, name="Big Old Test")


@pytest.fixture
def employee() -> Employee:
    return Employee(id=uuid.uuid4(), name="Testy McTesterson", status="Employed", title="CEO")


@pytest.fixture
def job(organization) -> Job:
    """An open job billed at 20.00 USD per hour."""
    return Job(
        id=uuid.uuid4(),
        client=organization,
        date_open=dt.datetime(2023, 6, 1, 9, 0, tzinfo=UTC),
        increment=dt.timedelta(minutes=15),
        invoice=Invoice(hourly_rate=Money(amount="20.00", currency=Currency.USD)),
        notes="Keep the invoices coming",
        objectives="Test the billing schema",
    )


@pytest.fixture
def usd_expense() -> Expense:
    return Expense(
        id=uuid.uuid4(),
        category="Food",
        cost=Money(amount="20.00", currency=Currency.USD),
        description="Lunch with client",
    )


@pytest.fixture
def make_timesheet(employee, job):
    """Factory for timesheets on the sample job, beginning at 2023-06-15 02:00 UTC."""

    def _make(minutes=30, expenses=(), ongoing=False, begin=None):
        time_begin = begin or dt.datetime(2023, 6, 15, 2, 0, tzinfo=UTC)
        return Timesheet(
            id=uuid.uuid4(),
            employee=employee,
            expenses=tuple(expenses),
            job=job,
            time_begin=time_begin,
            time_end=None if ongoing else time_begin + dt.timedelta(minutes=minutes),
            work_notes="Wrote tests",
        )

    return _make


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
