"""
Infrastructure adapters for the pets bounded context.

Each adapter implements a domain port (ABC) on top of SQLAlchemy Core.
"""
