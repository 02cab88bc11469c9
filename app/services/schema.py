from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from app.models.base import Base


def _has_column(engine: Engine, table_name: str, column_name: str) -> bool:
    inspector = inspect(engine)
    columns = inspector.get_columns(table_name)
    return any(column["name"] == column_name for column in columns)


def _add_column_if_missing(engine: Engine, table_name: str, column_name: str, definition_sql: str) -> bool:
    if _has_column(engine, table_name, column_name):
        return False
    with engine.begin() as connection:
        connection.execute(text(f"ALTER TABLE {table_name} ADD COLUMN {column_name} {definition_sql}"))
    return True


def ensure_runtime_schema(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    if not engine.dialect.name.startswith("sqlite"):
        return

    _add_column_if_missing(engine, "donations", "payment_reference", "VARCHAR(255)")
    if _has_column(engine, "donations", "stripe_payment_intent_id"):
        with engine.begin() as connection:
            connection.execute(
                text(
                    "UPDATE donations SET payment_reference = stripe_payment_intent_id "
                    "WHERE payment_reference IS NULL AND stripe_payment_intent_id IS NOT NULL"
                )
            )
    _add_column_if_missing(engine, "yard_sign_requests", "quantity", "INTEGER NOT NULL DEFAULT 1")
    with engine.begin() as connection:
        connection.execute(
            text("CREATE INDEX IF NOT EXISTS ix_donation_payment_reference ON donations(payment_reference)")
        )
