"""Unit tests for exchanging nested records into another currency."""
import datetime as dt
import uuid
from decimal import Decimal

import pytest

from clinvoice_schema.exceptions import UnresolvableRateError
from clinvoice_schema.exchange.exchangeable import Exchangeable, convert, exchange_all
from clinvoice_schema.models import (
    Currency,
    Expense,
    Invoice,
    InvoiceDate,
    Money,
    Organization,
)


def monetary_amounts(timesheet):
    """Every monetary value reachable from a timesheet."""
    return [expense.cost for expense in timesheet.expenses] + [
        timesheet.job.invoice.hourly_rate
    ]


class TestMoneyExchange:
    """Test exchanging a single amount."""

    def test_same_currency_is_unchanged(self, rates):
        money = Money(amount="20.00", currency=Currency.USD)

        assert money.exchange(Currency.USD, rates) is money

    def test_exchange_multiplies_by_factor(self, rates):
        money = Money(amount="20.00", currency=Currency.EUR)

        exchanged = money.exchange(Currency.USD, rates)

        assert exchanged.currency is Currency.USD
        assert exchanged.amount == Decimal("22.0000")

    def test_exchange_is_not_rescaled(self, rates):
        exchanged = Money(amount="10.00", currency=Currency.USD).exchange(Currency.GBP, rates)

        assert exchanged.amount == Decimal("8.000")

    def test_missing_rate_raises_error(self, rates):
        with pytest.raises(UnresolvableRateError):
            Money(amount="1", currency=Currency.USD).exchange(Currency.JPY, rates)


class TestEntityExchange:
    """Test the cascade through composite entities."""

    def test_expense(self, usd_expense, rates):
        exchanged = usd_expense.exchange(Currency.GBP, rates)

        assert exchanged.cost == Money(amount="16.00", currency=Currency.GBP)
        assert exchanged.id == usd_expense.id
        assert exchanged.category == usd_expense.category
        assert exchanged.description == usd_expense.description

    def test_invoice_keeps_date(self, rates):
        date = InvoiceDate(issued=dt.datetime(2023, 6, 30, tzinfo=dt.timezone.utc))
        invoice = Invoice(date=date, hourly_rate=Money(amount="20.00", currency="USD"))

        exchanged = invoice.exchange(Currency.EUR, rates)

        assert exchanged.date == date
        assert exchanged.hourly_rate.currency is Currency.EUR

    def test_job_exchanges_invoice_only(self, job, rates):
        exchanged = job.exchange(Currency.GBP, rates)

        assert exchanged.invoice.hourly_rate == Money(amount="16.00", currency="GBP")
        assert exchanged.model_dump(exclude={"invoice"}) == job.model_dump(exclude={"invoice"})
        assert exchanged.id == job.id

    def test_timesheet_exchanges_every_monetary_leaf(self, make_timesheet, usd_expense, rates):
        eur_expense = Expense(
            id=uuid.uuid4(), category="Travel", cost=Money(amount="5.00", currency="EUR")
        )
        timesheet = make_timesheet(expenses=[usd_expense, eur_expense])

        exchanged = timesheet.exchange(Currency.GBP, rates)

        assert all(money.currency is Currency.GBP for money in monetary_amounts(exchanged))
        assert [expense.id for expense in exchanged.expenses] == [usd_expense.id, eur_expense.id]
        assert exchanged.expenses[1].cost.amount == Decimal("4.4000")

    def test_timesheet_non_monetary_fields_unchanged(self, make_timesheet, usd_expense, rates):
        timesheet = make_timesheet(expenses=[usd_expense])

        exchanged = timesheet.exchange(Currency.EUR, rates)

        assert exchanged.id == timesheet.id
        assert exchanged.employee == timesheet.employee
        assert exchanged.time_begin == timesheet.time_begin
        assert exchanged.time_end == timesheet.time_end
        assert exchanged.work_notes == timesheet.work_notes
        assert exchanged.job.client == timesheet.job.client
        assert exchanged.job.notes == timesheet.job.notes

    def test_exchange_does_not_mutate_input(self, make_timesheet, usd_expense, rates):
        timesheet = make_timesheet(expenses=[usd_expense])
        before = timesheet.model_dump()

        timesheet.exchange(Currency.EUR, rates)

        assert timesheet.model_dump() == before

    def test_organization_is_unchanged(self, organization, rates):
        assert organization.exchange(Currency.EUR, rates) == organization


class TestExchangeProperties:
    """Test idempotence and identity of the cascade."""

    def test_idempotence(self, make_timesheet, usd_expense, rates):
        timesheet = make_timesheet(expenses=[usd_expense])

        once = timesheet.exchange(Currency.GBP, rates)
        twice = once.exchange(Currency.GBP, rates)

        assert twice == once

    def test_identity(self, make_timesheet, usd_expense, rates):
        timesheet = make_timesheet(expenses=[usd_expense])

        exchanged = timesheet.exchange(Currency.USD, rates)

        assert monetary_amounts(exchanged) == monetary_amounts(timesheet)

    def test_missing_rate_aborts_whole_cascade(self, make_timesheet, rates):
        jpy_expense = Expense(category="Food", cost=Money(amount="1000", currency="JPY"))
        timesheet = make_timesheet(expenses=[jpy_expense])

        with pytest.raises(UnresolvableRateError):
            timesheet.exchange(Currency.EUR, rates)


class TestExchangeHelpers:
    """Test exchange_all and convert."""

    @pytest.mark.parametrize("fixture_name", ["usd_expense", "job", "organization"])
    def test_entities_are_exchangeable(self, request, fixture_name):
        assert isinstance(request.getfixturevalue(fixture_name), Exchangeable)

    def test_exchange_all_preserves_order(self, make_timesheet, rates):
        timesheets = [make_timesheet(minutes=minutes) for minutes in (10, 20, 30)]

        exchanged = exchange_all(timesheets, Currency.EUR, rates)

        assert [t.id for t in exchanged] == [t.id for t in timesheets]
        assert all(t.job.invoice.hourly_rate.currency is Currency.EUR for t in exchanged)

    def test_convert_to_explicit_currency(self, job, rates):
        assert convert(job, rates, Currency.GBP).invoice.hourly_rate.currency is Currency.GBP

    def test_convert_to_default_currency(self, job, rates, test_config):
        assert test_config.default_currency is Currency.EUR

        converted = convert(job, rates)

        assert converted.invoice.hourly_rate.currency is Currency.EUR
