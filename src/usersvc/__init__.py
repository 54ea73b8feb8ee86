"""
User service - CRUD API for a single "user" resource backed by PostgreSQL.

Pipeline per request:
    HTTP request -> handler -> validators -> UserRepository -> PostgreSQL
"""

__version__ = "0.1.0"
