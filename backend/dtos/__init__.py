"""
Data Transfer Objects (DTOs) Layer

This package contains DTOs that decouple the API layer from the domain model.
DTOs keep the aggregates' internals out of the public API and allow both to
evolve independently.

Structure:
- request/: DTOs for incoming API requests
- response/: DTOs for outgoing API responses
"""
