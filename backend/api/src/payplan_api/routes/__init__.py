"""API routes package.

Routers are organized by domain:

- health: Health check endpoints
- bookings: Booking CRUD
- payment_plan: Computed payment plan and paid-period selection
- holidays: Holiday calendar

All routers are registered in main.py with /api prefix.
"""

from payplan_api.routes.bookings import router as bookings_router
from payplan_api.routes.health import router as health_router
from payplan_api.routes.holidays import router as holidays_router
from payplan_api.routes.payment_plan import router as payment_plan_router

__all__ = [
    "bookings_router",
    "health_router",
    "holidays_router",
    "payment_plan_router",
]
