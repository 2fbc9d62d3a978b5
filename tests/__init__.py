#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v

Database tests run against an in-memory SQLite database, so no server is
needed. The match upsert uses SQLite's native ON CONFLICT clause there, the
same statement shape as on PostgreSQL.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.database import init_db


def create_test_session_factory() -> sessionmaker:
    """
    Fresh in-memory SQLite database with all tables created.

    StaticPool keeps one connection so every session (and every thread)
    sees the same in-memory database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    init_db(engine)
    return sessionmaker(autoflush=False, bind=engine)
