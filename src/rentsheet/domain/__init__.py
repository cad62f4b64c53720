"""Domain layer for rentsheet application."""

from rentsheet.domain.transaction import TransactionService
from rentsheet.domain.property import PropertyService
from rentsheet.domain.service_record import ServiceRecordService
from rentsheet.domain.monthly import MonthlySheetService
from rentsheet.domain.yearly import YearlySummaryService
from rentsheet.domain.rent_status import RentStatusService
from rentsheet.domain.export import ExportService

__all__ = [
    "TransactionService",
    "PropertyService",
    "ServiceRecordService",
    "MonthlySheetService",
    "YearlySummaryService",
    "RentStatusService",
    "ExportService",
]
