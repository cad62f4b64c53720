"""Yearly summary domain service."""

from rentsheet.domain.entities import AppState, MonthTotals, YearlyRow, YearlySummary
from rentsheet.domain.monthly import order_properties
from rentsheet.domain.periods import expense_matches_date, income_matches


class YearlySummaryService:
    """Service for building the twelve-month grid of a year.

    Income is placed by its assigned rent period; expenses by their real
    date. Unlike the monthly sheet, an expense's assigned period is not
    consulted here.
    """

    def build_summary(self, state: AppState, year: int) -> YearlySummary:
        """Build the yearly summary.

        Args:
            state: Current application state (not modified)
            year: Four-digit year

        Returns:
            YearlySummary with per-property months and totals
        """
        rows = []
        for prop in order_properties(state.properties):
            own = [txn for txn in state.transactions if txn.property_id == prop.id]
            months = tuple(
                MonthTotals(
                    income=sum(t.amount for t in own if income_matches(t, month, year)),
                    expense=sum(
                        t.amount for t in own if expense_matches_date(t, month, year)
                    ),
                )
                for month in range(12)
            )
            total_income = sum(m.income for m in months)
            total_expense = sum(m.expense for m in months)
            rows.append(
                YearlyRow(
                    property=prop,
                    months=months,
                    total_income=total_income,
                    total_expense=total_expense,
                    total_net=sum(m.net for m in months),
                )
            )

        monthly_totals = tuple(
            sum(row.months[month].net for row in rows) for month in range(12)
        )
        return YearlySummary(
            year=year,
            rows=tuple(rows),
            monthly_totals=monthly_totals,
            grand_total=sum(row.total_net for row in rows),
        )
