"""Service layer for the life underwriting engine."""
