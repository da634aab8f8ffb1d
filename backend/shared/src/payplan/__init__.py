"""Payment plan calculator for multi-property bookings."""

__version__ = "0.1.0"
