"""Database package for the CRM exercises."""
from db.connection import AsyncSessionLocal, create_schema, dispose_engine, engine, get_db

__all__ = ["engine", "AsyncSessionLocal", "get_db", "create_schema", "dispose_engine"]
