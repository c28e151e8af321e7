# Routes package
from fastapi import APIRouter
from .auth_routes import router as auth_router
from .patient_routes import router as patient_router
from .catalog_routes import router as catalog_router
from .billing_routes import router as billing_router
from .expense_routes import router as expense_router
from .report_routes import router as report_router

# Create main router
api_router = APIRouter()

# Include all route modules
api_router.include_router(auth_router, tags=["Authentication"])
api_router.include_router(patient_router, tags=["Patients"])
api_router.include_router(catalog_router, tags=["Masters"])
api_router.include_router(billing_router, prefix="/bills", tags=["Billing"])
api_router.include_router(expense_router, prefix="/expenses", tags=["Expenses"])
api_router.include_router(report_router, tags=["Reports"])


__all__ = ["api_router"]
