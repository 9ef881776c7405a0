"""
Request DTOs

Pydantic models for incoming API requests. Field limits here mirror the
column sizes in models.py; the domain re-checks every business rule.
"""
