from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shortener.config import settings


def _engine_options(database_url: str, timeout: float) -> dict[str, Any]:
    """
    Build create_engine() keyword arguments that bound every store call.

    - pool_timeout: 從連線池取得連線的最長等待時間
    - sqlite: busy timeout，且允許跨thread使用同一個連線
      (FastAPI的sync endpoint會在threadpool中執行)
    - postgresql: 連線逾時 + statement_timeout (毫秒)
    """
    url = make_url(database_url)
    backend = url.get_backend_name()

    if backend == "sqlite":
        options: dict[str, Any] = {
            "connect_args": {"check_same_thread": False, "timeout": timeout},
        }
        # In-memory databases live inside a single connection, so every
        # session must share it.
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options

    options = {"pool_timeout": timeout, "pool_pre_ping": True}
    if backend == "postgresql":
        options["connect_args"] = {
            "connect_timeout": max(int(timeout), 1),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        }
    return options


# 建立與資料庫的底層連線池
engine = create_engine(
    settings.DATABASE_URL,
    **_engine_options(settings.DATABASE_URL, settings.DATABASE_TIMEOUT_SECONDS),
)
# 用來建立新的資料庫會話（Session）實例
#   - bind=engine：綁定到上面的引擎
#   - autocommit=False：不自動提交，需手動呼叫db.commit()
#   - autoflush=False：不自動將暫存的變更送出到資料庫
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


# 所有模型繼承同一個基底(這個Base class)
# 透過Base.metadata可以讓Alembic找到所有資料表
class Base(DeclarativeBase):
    pass


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        # 將db交給呼叫者（API路由函式），執行完畢後回到這裡
        yield db
    finally:
        # 關閉資料庫連線，將連線釋放回連線池
        db.close()
