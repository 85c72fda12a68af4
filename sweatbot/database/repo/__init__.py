from .base import Report, ReportRepository
from .memory_repo import InMemoryReportRepository
from .report_repo import SqlReportRepository

__all__ = [
    "Report",
    "ReportRepository",
    "InMemoryReportRepository",
    "SqlReportRepository",
]
