"""
Pets bounded context: domain layer.

This module contains all domain logic for the pets context:
- Value objects (Email, PhoneNumber, Address)
- The Animal hierarchy (Dog, Cat, Bird) and the Owner aggregate
- Ownership transfer and statistics across aggregates
"""
