"""Rent collection calendar for a property."""

import calendar
from datetime import date
from typing import Optional

from rentsheet.domain.entities import AppState, MonthRentStatus, RentState
from rentsheet.domain.errors import NotFoundError, ValidationError, property_not_found
from rentsheet.domain.periods import income_matches


class RentStatusService:
    """Service for computing which months' rent was collected."""

    def year_status(
        self,
        state: AppState,
        property_id: str,
        year: int,
        today: Optional[date] = None,
    ) -> list[MonthRentStatus]:
        """Return the rent state of each month of a year.

        Args:
            state: Current application state
            property_id: Property to inspect
            year: Four-digit year
            today: Reference date (defaults to today)

        Returns:
            Twelve MonthRentStatus entries, January first

        Raises:
            NotFoundError: If the property doesn't exist
            ValidationError: If the property is the common one
        """
        prop = state.get_property(property_id)
        if prop is None:
            raise NotFoundError(property_not_found(property_id))
        if prop.is_common:
            raise ValidationError(f"'{prop.name}' has no rent to collect")

        today = today or date.today()
        statuses = []
        for month in range(12):
            last_day = calendar.monthrange(year, month + 1)[1]
            due_date = date(year, month + 1, min(prop.due_day, last_day))

            payment = next(
                (
                    txn
                    for txn in state.transactions
                    if txn.property_id == prop.id and income_matches(txn, month, year)
                ),
                None,
            )

            if payment is not None:
                rent_state = RentState.PAID
            elif (year, month) > (today.year, today.month - 1):
                rent_state = RentState.FUTURE
            elif today > due_date:
                rent_state = RentState.LATE
            else:
                rent_state = RentState.PENDING

            statuses.append(
                MonthRentStatus(
                    month=month,
                    year=year,
                    state=rent_state,
                    due_date=due_date,
                    transaction=payment,
                )
            )
        return statuses
