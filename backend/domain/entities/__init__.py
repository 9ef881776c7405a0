"""
Domain Entities

Entities are business objects with identity and lifecycle.
They are mutable and have a unique identifier that persists through their lifetime.

- Customer: client record with measurement history and notes
- Appointment: a booked time slot for one customer
"""
