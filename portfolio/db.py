import logging
import sqlite3

from alembic import command
from alembic.config import Config
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event, inspect, select
from sqlalchemy.dialects import postgresql, sqlite

from portfolio.constants import ALEMBIC_CONF, ALEMBIC_DIR
from portfolio.utils import serialize_value

# Retrieve main logger
logger = logging.getLogger("main")

db = SQLAlchemy()
migrate = Migrate()


# Alembic functions
def get_alembic_cfg(database_url=None):
    cfg = Config(ALEMBIC_CONF)
    cfg.set_main_option("script_location", ALEMBIC_DIR)
    if database_url:
        # '%' must be escaped for configparser
        cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return cfg


def to_dict(db_results):
    return {c.name: serialize_value(getattr(db_results, c.name)) for c in db_results.__table__.columns}


def insert_ignore(session, table, rows):
    """
    Bulk insert rows, silently skipping those that hit a unique or primary key.
    Runs inside the caller's transaction; nothing is committed here.
    """
    if not rows:
        return
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(table).values(rows).on_conflict_do_nothing()
    elif dialect == "sqlite":
        stmt = sqlite.insert(table).values(rows).on_conflict_do_nothing()
    else:
        # Other dialects: look each row up by primary key
        pk_columns = [c.name for c in table.primary_key.columns]
        for row in rows:
            exists = session.execute(
                select(table).filter_by(**{k: row[k] for k in pk_columns})
            ).first()
            if exists is None:
                session.execute(table.insert().values(**row))
        return
    session.execute(stmt)


def _configure_sqlite(engine):
    # Ensure foreign keys, WAL mode, and timeout are set when connection is opened
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        if not isinstance(dbapi_connection, sqlite3.Connection):
            return

        # Let SQLAlchemy emit BEGIN itself so SAVEPOINTs nest properly
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON;")
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA busy_timeout=30000;")
        cursor.close()

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def init_db(app):
    with app.app_context():
        if db.engine.dialect.name == "sqlite":
            _configure_sqlite(db.engine)

        inspector = inspect(db.engine)
        fresh = not inspector.has_table("portfolio_projects")
        # create_all only adds missing tables, existing ones are left alone
        db.create_all()
        if fresh:
            logger.info("Database tables created.")
            if not app.testing:
                command.stamp(get_alembic_cfg(app.config["SQLALCHEMY_DATABASE_URI"]), "head")
                logger.info("Database stamped to the latest migration version.")


def ping_db():
    """Return True when the database answers a trivial query."""
    try:
        with db.engine.connect() as conn:
            conn.exec_driver_sql("SELECT 1")
        return True
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False
