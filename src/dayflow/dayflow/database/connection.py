from __future__ import annotations

import urllib.parse
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


@dataclass
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "dayflow_db"
    url: Optional[str] = None

    def sqlalchemy_url(self) -> str:
        if self.url:
            return self.url
        password = urllib.parse.quote_plus(self.password)
        return f"mysql+mysqlconnector://{self.user}:{password}@{self.host}:{int(self.port)}/{self.database}"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "dayflow_db")),
            url=db_config.get("url") or None,
        )


class DatabaseConnection:
    """Singleton-like engine + session factory.

    Note: Repositories open one short-lived session per operation.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig, *, echo: bool = False):
        self._config = config
        self.engine = _build_engine(config.sqlalchemy_url(), echo=echo)
        self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @classmethod
    def from_url(cls, url: str, *, echo: bool = False) -> "DatabaseConnection":
        return cls(DBConfig(url=url), echo=echo)

    def session(self) -> Session:
        return self._sessions()

    def dispose(self) -> None:
        self.engine.dispose()


def _build_engine(url: str, *, echo: bool) -> Engine:
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo, pool_pre_ping=True, future=True)

    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if url in {"sqlite://", "sqlite:///:memory:"}:
        # One shared connection, otherwise every session sees an empty database.
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, echo=echo, future=True, **kwargs)

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

    return engine
