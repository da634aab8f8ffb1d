"""REST API for booking payment plans."""
