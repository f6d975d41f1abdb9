"""
Shared Kernel

Value objects, domain errors and persistence helpers used by every club app.
"""
