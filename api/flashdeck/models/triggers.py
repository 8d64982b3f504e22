"""
Row triggers installed alongside the tables.

Every table keeps ``updated_at`` current on UPDATE, and ``cards`` keeps one
step of rating history: when ``rating`` changes, the old value lands in
``prev_rating``. The PostgreSQL bodies match the Alembic migrations; the
SQLite versions exist so local databases and tests behave the same way.
"""
from sqlalchemy import DDL, Table, event

TIMESTAMPED_TABLES = ("users", "decks", "cards")


def postgres_modtime_ddl(table_name: str) -> list[str]:
    """Function and BEFORE UPDATE trigger that stamp ``updated_at``."""
    return [
        f"""
        CREATE OR REPLACE FUNCTION update_{table_name}_modified_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = GREATEST(timezone('utc', clock_timestamp()), OLD.updated_at + interval '1 microsecond');
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
        """,
        f"""
        CREATE TRIGGER update_{table_name}_modtime
            BEFORE UPDATE
            ON {table_name}
            FOR EACH ROW
            EXECUTE FUNCTION update_{table_name}_modified_column();
        """,
    ]


POSTGRES_PREV_RATING_DDL = [
    """
    CREATE OR REPLACE FUNCTION update_prev_rating_column()
    RETURNS TRIGGER AS $$
    BEGIN
        IF OLD.rating IS DISTINCT FROM NEW.rating THEN
            NEW.prev_rating = OLD.rating;
        END IF;
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql;
    """,
    """
    CREATE TRIGGER update_cards_rating
        BEFORE UPDATE
        ON cards
        FOR EACH ROW
        WHEN (OLD.rating IS DISTINCT FROM NEW.rating)
        EXECUTE FUNCTION update_prev_rating_column();
    """,
]


def sqlite_modtime_ddl(table_name: str) -> list[str]:
    # SQLite has no BEFORE-row assignment, so patch the row after the fact.
    # Millisecond precision, never earlier than OLD.updated_at + 1ms.
    # '%%' is DDL escaping for a literal '%'.
    return [
        f"""
        CREATE TRIGGER update_{table_name}_modtime
            AFTER UPDATE
            ON {table_name}
            FOR EACH ROW
        BEGIN
            UPDATE {table_name}
               SET updated_at = max(
                       strftime('%%Y-%%m-%%d %%H:%%M:%%f', 'now'),
                       strftime('%%Y-%%m-%%d %%H:%%M:%%f', OLD.updated_at, '+0.001 seconds')
                   )
             WHERE id = NEW.id;
        END;
        """,
    ]


SQLITE_PREV_RATING_DDL = [
    """
    CREATE TRIGGER update_cards_rating
        AFTER UPDATE OF rating
        ON cards
        FOR EACH ROW
        WHEN OLD.rating IS NOT NEW.rating
    BEGIN
        UPDATE cards SET prev_rating = OLD.rating WHERE id = NEW.id;
    END;
    """,
]


def _listen(table: Table, statements: list[str], dialect: str) -> None:
    for statement in statements:
        event.listen(table, "after_create", DDL(statement).execute_if(dialect=dialect))


def attach_triggers(table: Table) -> None:
    """Register trigger DDL to run right after ``table`` is created."""
    if table.name not in TIMESTAMPED_TABLES:
        raise ValueError(f"No triggers defined for table {table.name}")

    _listen(table, postgres_modtime_ddl(table.name), "postgresql")
    _listen(table, sqlite_modtime_ddl(table.name), "sqlite")

    if table.name == "cards":
        _listen(table, POSTGRES_PREV_RATING_DDL, "postgresql")
        _listen(table, SQLITE_PREV_RATING_DDL, "sqlite")
