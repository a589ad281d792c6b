from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from freelancehub.core.config import settings

url = make_url(settings.DATABASE_URL)
engine_kwargs = {"echo": settings.SQL_ECHO, "pool_pre_ping": True}
if url.get_backend_name().startswith("postgresql"):
    engine_kwargs["connect_args"] = {"options": "-c timezone=utc"}
elif url.get_backend_name() == "sqlite":
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if url.database in (None, "", ":memory:"):
        # One shared connection so every session sees the same in-memory database
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(settings.DATABASE_URL, **engine_kwargs)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


if url.get_backend_name() == "sqlite":

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
