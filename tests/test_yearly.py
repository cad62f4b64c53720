"""Tests for the yearly summary."""

from datetime import date

from rentsheet.domain.entities import AppState, MonthTotals, TransactionType
from rentsheet.domain.monthly import MonthlySheetService
from rentsheet.domain.snapshot import COMMON_PROPERTY
from rentsheet.domain.yearly import YearlySummaryService


def test_months_and_totals(sample_state):
    summary = YearlySummaryService().build_summary(sample_state, 2024)

    centro = summary.rows[0]
    assert centro.property.id == "p1"
    assert len(centro.months) == 12
    assert centro.months[3].income == 150000
    # The repair is dated in April, same as its period
    assert centro.months[3].expense == 50000
    assert centro.months[3].net == 100000
    assert centro.total_income == 150000
    assert centro.total_net == 100000

    assert summary.monthly_totals[3] == 320000
    assert summary.grand_total == 320000
    assert summary.rows[-1].property.is_common


def test_single_income_fills_one_month(make_property, make_transaction):
    state = AppState(
        properties=[make_property()],
        transactions=[
            make_transaction("t1", amount=85000.0, txn_date=date(2024, 7, 2), rent_month=5, rent_year=2024)
        ],
    )

    row = YearlySummaryService().build_summary(state, 2024).rows[0]

    assert row.months[5] == MonthTotals(income=85000.0, expense=0.0)
    assert row.months[5].net == 85000
    for index, totals in enumerate(row.months):
        if index != 5:
            assert totals == MonthTotals(0, 0)
    assert row.total_net == 85000


def test_grand_total_is_sum_of_rows_and_months(sample_state, make_transaction):
    sample_state.transactions.append(
        make_transaction(
            "t9", property_id="p2", amount=7000.0, type=TransactionType.EXPENSE, txn_date=date(2024, 8, 1)
        )
    )

    summary = YearlySummaryService().build_summary(sample_state, 2024)

    assert summary.grand_total == sum(row.total_net for row in summary.rows)
    assert summary.grand_total == sum(summary.monthly_totals)
    for row in summary.rows:
        assert row.total_net == sum(m.net for m in row.months)


def test_expenses_use_date_not_period(make_property, make_transaction):
    """The yearly grid places expenses by date even when a period is assigned."""
    state = AppState(
        properties=[make_property()],
        transactions=[
            make_transaction(
                "t1",
                amount=300.0,
                type=TransactionType.EXPENSE,
                txn_date=date(2024, 5, 3),
                rent_month=3,
                rent_year=2024,
            )
        ],
    )

    row = YearlySummaryService().build_summary(state, 2024).rows[0]
    assert row.months[4].expense == 300
    assert row.months[3].expense == 0

    # The monthly sheet puts the same expense in April
    assert MonthlySheetService().build_sheet(state, 3, 2024).global_expense == 300


def test_duplicate_incomes_are_summed(make_property, make_transaction):
    state = AppState(
        properties=[make_property()],
        transactions=[
            make_transaction("a", amount=1000.0, rent_month=0, rent_year=2024),
            make_transaction("b", amount=500.0, rent_month=0, rent_year=2024),
        ],
    )

    row = YearlySummaryService().build_summary(state, 2024).rows[0]

    assert row.months[0].income == 1500


def test_other_years_are_ignored(make_property, make_transaction):
    state = AppState(
        properties=[make_property()],
        transactions=[
            make_transaction("a", amount=1000.0, rent_month=11, rent_year=2023, txn_date=date(2024, 1, 5)),
            make_transaction(
                "b", amount=200.0, type=TransactionType.EXPENSE, txn_date=date(2023, 12, 30)
            ),
        ],
    )

    summary = YearlySummaryService().build_summary(state, 2024)

    assert summary.grand_total == 0


def test_empty_state():
    summary = YearlySummaryService().build_summary(AppState(properties=[COMMON_PROPERTY]), 2024)

    assert summary.monthly_totals == (0,) * 12
    assert summary.grand_total == 0
