"""Database package for the CRM record-store examples."""
from crm_db.connection import AsyncSessionLocal, build_engine, dispose_engine, engine, get_db

__all__ = ["engine", "AsyncSessionLocal", "build_engine", "get_db", "dispose_engine"]
