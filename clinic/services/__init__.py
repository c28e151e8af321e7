from .inventory_service import InventoryService, apply_consumption
from .billing_service import BillingService
from .report_service import ReportService

__all__ = ["InventoryService", "apply_consumption", "BillingService", "ReportService"]
