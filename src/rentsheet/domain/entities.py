"""Domain model entities for rentsheet.

These are pure data classes representing the rental bookkeeping concepts,
independent of how they are stored. The whole dataset travels as a single
``AppState`` document: it is loaded, saved and synced as one unit.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional
from uuid import uuid4


class TransactionType(str, Enum):
    """Direction of a money movement."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionAgent(str, Enum):
    """Which of the two partners physically handled the cash."""

    ME = "ME"
    SISTER = "SISTER"


class ExpenseCategory(str, Enum):
    """Fixed expense categories."""

    REPAIR = "REPAIR"
    TAX = "TAX"
    EXTRA_HOA = "EXTRA_HOA"
    MAINTENANCE = "MAINTENANCE"
    OTHER = "OTHER"


class ServiceType(str, Enum):
    """Recurring obligations tracked per property and month."""

    LIGHT = "Luz"
    GAS = "Gas"
    WATER = "Agua"
    ABL = "ABL"
    RENTAS = "Rentas"
    EXPENSAS_EXTRA = "Exp. Extra"


# Utility checklist for regular properties
UTILITY_SERVICES: tuple[ServiceType, ...] = (
    ServiceType.LIGHT,
    ServiceType.GAS,
    ServiceType.WATER,
    ServiceType.ABL,
)

# Checklist for the shared/common pseudo-property
COMMON_SERVICES: tuple[ServiceType, ...] = (
    ServiceType.RENTAS,
    ServiceType.EXPENSAS_EXTRA,
)

COMMON_PROPERTY_ID = "common-shared-expenses"


@dataclass(frozen=True)
class Property:
    """Rental unit, or the synthetic shared-expenses property."""

    id: str
    name: str
    address: str
    tenant_name: str
    rent_amount: float
    due_day: int
    is_common: bool = False


@dataclass(frozen=True)
class Transaction:
    """Single money movement attributed to a property."""

    id: str
    property_id: str
    date: date
    amount: float
    type: TransactionType
    description: str = ""
    category: Optional[ExpenseCategory] = None
    rent_month: Optional[int] = None
    rent_year: Optional[int] = None
    handled_by: TransactionAgent = TransactionAgent.ME

    @property
    def has_period(self) -> bool:
        """True when the transaction carries an accounting period."""
        return self.rent_month is not None and self.rent_year is not None

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


@dataclass(frozen=True)
class ServiceRecord:
    """Paid/pending flags of one property for one month."""

    id: str
    property_id: str
    month: int
    year: int
    services: dict[ServiceType, bool] = field(default_factory=dict)


@dataclass
class AppState:
    """Aggregate root holding the entire dataset.

    Transactions are kept newest first. Service records are unique per
    (property, month, year) by find-or-create at write time.
    """

    properties: list[Property] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    service_records: list[ServiceRecord] = field(default_factory=list)

    def get_property(self, property_id: str) -> Optional[Property]:
        for prop in self.properties:
            if prop.id == property_id:
                return prop
        return None

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        for txn in self.transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def find_service_record(
        self, property_id: str, month: int, year: int
    ) -> Optional[ServiceRecord]:
        for record in self.service_records:
            if (
                record.property_id == property_id
                and record.month == month
                and record.year == year
            ):
                return record
        return None

    def common_property(self) -> Optional[Property]:
        for prop in self.properties:
            if prop.is_common:
                return prop
        return None

    def copy(self) -> "AppState":
        """Return a shallow copy with independent collections."""
        return AppState(
            properties=list(self.properties),
            transactions=list(self.transactions),
            service_records=list(self.service_records),
        )


def services_for(prop: Property) -> tuple[ServiceType, ...]:
    """Return the service checklist that applies to a property."""
    return COMMON_SERVICES if prop.is_common else UTILITY_SERVICES


def empty_services(prop: Property) -> dict[ServiceType, bool]:
    """Return the all-pending checklist for a property."""
    return {service: False for service in services_for(prop)}


class SettlementStatus(str, Enum):
    """Outcome of the two-party cash settlement."""

    EVEN = "EVEN"
    I_PAY = "I_PAY"
    SISTER_PAYS = "SISTER_PAYS"


@dataclass(frozen=True)
class Settlement:
    """Cash each partner holds for a month and the transfer that evens it."""

    my_cash: float
    sister_cash: float
    target_share: float
    my_difference: float
    threshold: float = 100.0

    @property
    def status(self) -> SettlementStatus:
        if abs(self.my_difference) < self.threshold:
            return SettlementStatus.EVEN
        if self.my_difference > 0:
            return SettlementStatus.I_PAY
        return SettlementStatus.SISTER_PAYS

    @property
    def transfer_amount(self) -> float:
        if self.status == SettlementStatus.EVEN:
            return 0.0
        return abs(self.my_difference)

    @property
    def is_balanced(self) -> bool:
        """Whether the cash both partners hold adds up to the monthly net."""
        return math.isclose(
            self.my_cash + self.sister_cash, self.target_share * 2, abs_tol=1e-6
        )


@dataclass(frozen=True)
class MonthlyRow:
    """One property's line on the monthly sheet."""

    property: Property
    income_transaction: Optional[Transaction]
    income: float
    expenses: tuple[Transaction, ...]
    total_expense: float
    net: float
    services: dict[ServiceType, bool]


@dataclass(frozen=True)
class MonthlySheet:
    """Monthly sheet: per-property rows, totals and settlement."""

    month: int
    year: int
    rows: tuple[MonthlyRow, ...]
    global_income: float
    global_expense: float
    global_net: float
    settlement: Settlement


@dataclass(frozen=True)
class MonthTotals:
    """Income, expense and net of one property in one month."""

    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense


@dataclass(frozen=True)
class YearlyRow:
    """One property's twelve months plus yearly totals."""

    property: Property
    months: tuple[MonthTotals, ...]
    total_income: float
    total_expense: float
    total_net: float


@dataclass(frozen=True)
class YearlySummary:
    """Yearly grid: per-property rows, per-month net totals, grand total."""

    year: int
    rows: tuple[YearlyRow, ...]
    monthly_totals: tuple[float, ...]
    grand_total: float


class RentState(str, Enum):
    """Collection state of one month's rent."""

    PAID = "PAID"
    LATE = "LATE"
    PENDING = "PENDING"
    FUTURE = "FUTURE"


@dataclass(frozen=True)
class MonthRentStatus:
    """Rent collection state of a property for one month."""

    month: int
    year: int
    state: RentState
    due_date: date
    transaction: Optional[Transaction] = None


def generate_id() -> str:
    """Return a short random identifier for a new entity."""
    return uuid4().hex[:9]
