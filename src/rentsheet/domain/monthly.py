"""Monthly sheet domain service.

Builds the per-property rows of one month together with the global totals
and the cash settlement between the two partners.
"""

import logging
from typing import Optional, Sequence

from rentsheet.domain.entities import (
    AppState,
    MonthlyRow,
    MonthlySheet,
    Property,
    Settlement,
    Transaction,
    TransactionAgent,
    empty_services,
)
from rentsheet.domain.periods import expense_matches_period, income_matches

logger = logging.getLogger(__name__)

DEFAULT_SETTLEMENT_THRESHOLD = 100.0


def order_properties(properties: Sequence[Property]) -> list[Property]:
    """Return properties with the common one last, others in original order."""
    return sorted(properties, key=lambda prop: prop.is_common)


class MonthlySheetService:
    """Service for building monthly sheets from a state snapshot."""

    def __init__(self, settlement_threshold: float = DEFAULT_SETTLEMENT_THRESHOLD):
        """Initialize monthly sheet service.

        Args:
            settlement_threshold: Differences below this amount count as settled
        """
        self.settlement_threshold = settlement_threshold

    def build_sheet(self, state: AppState, month: int, year: int) -> MonthlySheet:
        """Build the monthly sheet for a period.

        Args:
            state: Current application state (not modified)
            month: Zero-based month
            year: Four-digit year

        Returns:
            MonthlySheet with rows, totals and settlement
        """
        global_income = 0.0
        global_expense = 0.0
        my_cash = 0.0
        sister_cash = 0.0
        rows: list[MonthlyRow] = []

        for prop in order_properties(state.properties):
            income_txn = self.find_income(state.transactions, prop, month, year)
            expenses = self.match_expenses(state.transactions, prop, month, year)

            income = income_txn.amount if income_txn is not None else 0.0
            total_expense = sum(txn.amount for txn in expenses)

            global_income += income
            global_expense += total_expense

            if income_txn is not None:
                if income_txn.handled_by == TransactionAgent.SISTER:
                    sister_cash += income_txn.amount
                else:
                    my_cash += income_txn.amount
            for txn in expenses:
                if txn.handled_by == TransactionAgent.SISTER:
                    sister_cash -= txn.amount
                else:
                    my_cash -= txn.amount

            rows.append(
                MonthlyRow(
                    property=prop,
                    income_transaction=income_txn,
                    income=income,
                    expenses=tuple(expenses),
                    total_expense=total_expense,
                    net=income - total_expense,
                    services=self.resolve_services(state, prop, month, year),
                )
            )

        global_net = global_income - global_expense
        settlement = self.build_settlement(my_cash, sister_cash, global_net)

        return MonthlySheet(
            month=month,
            year=year,
            rows=tuple(rows),
            global_income=global_income,
            global_expense=global_expense,
            global_net=global_net,
            settlement=settlement,
        )

    def find_income(
        self,
        transactions: Sequence[Transaction],
        prop: Property,
        month: int,
        year: int,
    ) -> Optional[Transaction]:
        """Find the income attributed to a property for a period.

        Only the first match in collection order is used. Duplicates cannot
        be created through the services, so finding more than one means the
        data was edited elsewhere.
        """
        matches = [
            txn
            for txn in transactions
            if txn.property_id == prop.id and income_matches(txn, month, year)
        ]
        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "Property '%s' has %d incomes for %02d/%d; using %s",
                prop.name,
                len(matches),
                month + 1,
                year,
                matches[0].id,
            )
        return matches[0]

    def match_expenses(
        self,
        transactions: Sequence[Transaction],
        prop: Property,
        month: int,
        year: int,
    ) -> list[Transaction]:
        """Collect a property's expenses for a period (assigned period first, then date)."""
        return [
            txn
            for txn in transactions
            if txn.property_id == prop.id and expense_matches_period(txn, month, year)
        ]

    def resolve_services(self, state: AppState, prop: Property, month: int, year: int):
        """Return the service flags of a property, all pending when unrecorded."""
        services = empty_services(prop)
        record = state.find_service_record(prop.id, month, year)
        if record is not None:
            services.update(record.services)
        return services

    def build_settlement(
        self, my_cash: float, sister_cash: float, global_net: float
    ) -> Settlement:
        """Split the month's net in halves and compare with the cash I hold."""
        target_share = global_net / 2
        return Settlement(
            my_cash=my_cash,
            sister_cash=sister_cash,
            target_share=target_share,
            my_difference=my_cash - target_share,
            threshold=self.settlement_threshold,
        )
