import re
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from urllib.parse import urlparse, parse_qs, urlencode, urlunparse

from taskee.config import DATABASE_URL as _raw_url

_logger = logging.getLogger(__name__)


def normalize_database_url(raw_url: str) -> tuple[str, dict]:
    """Return a SQLAlchemy URL and connect_args for the configured database.

    Hosted PostgreSQL URLs come as postgres:// with ssl query params that
    psycopg2 does not accept in the URL; those move into connect_args.
    """
    if raw_url.startswith("sqlite"):
        return raw_url, {"check_same_thread": False}

    url = re.sub(r'^postgres(ql)?(\+\w+)?://', 'postgresql+psycopg2://', raw_url)

    parsed = urlparse(url)
    params = parse_qs(parsed.query)
    needs_ssl = bool(params.pop("ssl", None) or params.pop("sslmode", None))
    clean_query = urlencode({k: v[0] for k, v in params.items()}) if params else ""
    url = urlunparse((parsed.scheme, parsed.netloc, parsed.path, parsed.params, clean_query, parsed.fragment))

    connect_args = {}
    if needs_ssl:
        connect_args["sslmode"] = "require"
    return url, connect_args


DATABASE_URL, _connect_args = normalize_database_url(_raw_url)

_logger.info("DB URL normalized: %s...  ssl=%s", DATABASE_URL[:50], "sslmode" in _connect_args)

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
