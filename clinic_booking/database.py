from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from clinic_booking.core import config


def build_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # FastAPI serves sync endpoints from a threadpool.
        connect_args = {"check_same_thread": False}
    return create_engine(database_url, connect_args=connect_args)


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_checked_engine_urls: set[str] = set()


def ensure_booking_schema(bind: Engine | None = None) -> None:
    """Bring tables created by older releases up to the current constraints."""
    bind = bind or engine
    engine_url = bind.url.render_as_string(hide_password=False)

    if engine_url in _checked_engine_urls:
        return

    with _schema_lock:
        if engine_url in _checked_engine_urls:
            return

        inspector = inspect(bind)
        table_names = set(inspector.get_table_names())

        with bind.begin() as connection:
            if 'users' in table_names:
                existing_columns = {column['name'] for column in inspector.get_columns('users')}
                if 'session_version' not in existing_columns:
                    connection.execute(
                        text('ALTER TABLE users ADD COLUMN session_version INTEGER NOT NULL DEFAULT 0')
                    )
            if 'bookings' in table_names:
                connection.execute(
                    text('CREATE UNIQUE INDEX IF NOT EXISTS uq_bookings_slot_id ON bookings(slot_id)')
                )
                connection.execute(
                    text('CREATE INDEX IF NOT EXISTS idx_bookings_user_created ON bookings(user_id, created_at)')
                )
            if 'slots' in table_names:
                connection.execute(
                    text('CREATE UNIQUE INDEX IF NOT EXISTS uq_slots_start_at ON slots(start_at)')
                )

        _checked_engine_urls.add(engine_url)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
