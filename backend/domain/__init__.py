"""
Domain Layer

This package contains the tailoring shop's business rules, separated from
persistence concerns and infrastructure.

Structure:
- entities/: Customers and appointments, objects with identity and lifecycle
- value_objects/: Money, measurements, statuses and time windows
- aggregates/: The work order aggregate root and its line items
"""
