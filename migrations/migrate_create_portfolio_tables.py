#!/usr/bin/env python3
"""
Migration script to create the portfolio service tables.

This script:
1. Creates contact_messages table (stored contact form submissions)
2. Creates event_logs table (client and server events)
3. Creates indexes for the newest-first queries

Safe to run repeatedly: existing tables are left untouched.
"""

import os
import sys
from sqlalchemy import create_engine, text, inspect
from sqlalchemy.exc import ProgrammingError

# Load environment variables
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

DATABASE_URL = os.environ.get("DATABASE_URL")

if not DATABASE_URL:
    print("ERROR: DATABASE_URL environment variable is required.")
    sys.exit(1)

# Heroku uses postgres:// but SQLAlchemy 2.0+ requires postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

engine = create_engine(DATABASE_URL)

JSON_TYPE = "JSONB" if engine.dialect.name == "postgresql" else "JSON"


def check_table_exists(connection, table_name):
    """Check if a table exists."""
    return inspect(connection).has_table(table_name)


def create_contact_messages_table():
    """Create contact_messages table."""
    with engine.begin() as connection:
        try:
            if not check_table_exists(connection, "contact_messages"):
                print("Creating 'contact_messages' table...")
                connection.execute(text("""
                    CREATE TABLE contact_messages (
                        id VARCHAR PRIMARY KEY,
                        name VARCHAR NOT NULL,
                        email VARCHAR NOT NULL,
                        message TEXT NOT NULL,
                        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                    )
                """))
                connection.execute(text("""
                    CREATE INDEX ix_contact_messages_email ON contact_messages(email)
                """))
                connection.execute(text("""
                    CREATE INDEX ix_contact_messages_created_at ON contact_messages(created_at)
                """))
                print("✓ Successfully created 'contact_messages' table.")
            else:
                print("✓ Table 'contact_messages' already exists.")

        except ProgrammingError as e:
            print(f"ERROR: Database error: {str(e)}")
            sys.exit(1)


def create_event_logs_table():
    """Create event_logs table."""
    with engine.begin() as connection:
        try:
            if not check_table_exists(connection, "event_logs"):
                print("Creating 'event_logs' table...")
                connection.execute(text(f"""
                    CREATE TABLE event_logs (
                        id VARCHAR PRIMARY KEY,
                        timestamp TIMESTAMP NOT NULL,
                        session_id VARCHAR NULL,
                        event VARCHAR NOT NULL,
                        data {JSON_TYPE} NULL,
                        url TEXT NULL,
                        user_agent TEXT NULL,
                        ip_address VARCHAR NULL,
                        referrer TEXT NULL,
                        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                    )
                """))
                connection.execute(text("CREATE INDEX ix_event_logs_timestamp ON event_logs(timestamp)"))
                connection.execute(text("CREATE INDEX ix_event_logs_session_id ON event_logs(session_id)"))
                connection.execute(text("CREATE INDEX ix_event_logs_event ON event_logs(event)"))
                connection.execute(text(
                    "CREATE INDEX idx_event_logs_event_timestamp ON event_logs(event, timestamp)"
                ))
                print("✓ Successfully created 'event_logs' table.")
            else:
                print("✓ Table 'event_logs' already exists.")

        except ProgrammingError as e:
            print(f"ERROR: Database error: {str(e)}")
            sys.exit(1)


if __name__ == "__main__":
    print("Running migration to create portfolio service tables...")
    print(f"Database: {DATABASE_URL.split('@')[-1] if '@' in DATABASE_URL else 'local'}")
    print()

    create_contact_messages_table()
    create_event_logs_table()

    print()
    print("✓ Migration completed successfully!")
