from .financial import FinancialReportService
from .performance import PerformanceReportService

__all__ = ["FinancialReportService", "PerformanceReportService"]
