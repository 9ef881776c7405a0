"""
Response DTOs

Pydantic models for outgoing API responses, built from domain objects with
from_domain(). Money is flattened into an amount plus currency.
"""
