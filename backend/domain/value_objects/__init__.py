"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

- Money: amount and currency, rounded to cents
- GarmentMeasurements: optional measurements on a line item
- TimeWindow: validated [start, end) interval in UTC
- WorkOrderStatus / AppointmentStatus: lifecycle states
"""
