from .async_db import AsyncSessionFactory, create_async_db_and_tables, engine, get_async_db

__all__ = ["AsyncSessionFactory", "create_async_db_and_tables", "engine", "get_async_db"]
