"""API-specific request/response models.

Domain models (Booking, PaymentPlan, ...) are in payplan.models and are
reused here where appropriate.

Modules:
- bookings: Booking request and list response models
- payment_plan: Paid-period selection request
- holidays: Holiday calendar request and response models
"""

__all__: list[str] = []
