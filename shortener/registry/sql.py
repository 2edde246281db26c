"""
SQLAlchemy-backed URL registry.

Every database error is translated into a registry exception so callers
never see driver-specific exceptions.
"""
import logging

from sqlalchemy import exc as sa_exc
from sqlalchemy import select
from sqlalchemy.orm import Session

from shortener.models.url_mapping import UrlMapping
from shortener.registry.base import CodeGenerator, UrlRegistry
from shortener.registry.exceptions import (
    ShortCodeCollisionError,
    StoreTimeoutError,
    StoreUnavailableError,
)

logger = logging.getLogger("shortener.registry")

# Fragments drivers put in their messages when a statement/lock times out
TIMEOUT_MARKERS = ("timeout", "timed out", "database is locked")


def _is_short_code_collision(error: sa_exc.IntegrityError) -> bool:
    return "short_url" in str(error.orig)


def _store_error(operation: str, error: Exception) -> StoreUnavailableError:
    """Wrap a SQLAlchemy error, picking the timeout variant when it applies."""
    reason = str(getattr(error, "orig", None) or error)
    if isinstance(error, sa_exc.TimeoutError) or any(
        marker in reason.lower() for marker in TIMEOUT_MARKERS
    ):
        return StoreTimeoutError(operation, reason)
    return StoreUnavailableError(operation, reason)


class SqlAlchemyUrlRegistry(UrlRegistry):
    """
    Registry storing mappings in the ``url_mappings`` table.

    Args:
        db: Request-scoped database session
        code_generator: Zero-argument callable returning a new short code
        max_attempts: Maximum short codes tried per create()
    """

    def __init__(
        self,
        db: Session,
        code_generator: CodeGenerator | None = None,
        max_attempts: int = 3,
    ):
        super().__init__(code_generator=code_generator, max_attempts=max_attempts)
        self.db = db

    def exists_by_long_url(self, long_url: str) -> bool:
        stmt = select(UrlMapping.id).where(UrlMapping.long_url == long_url).limit(1)
        try:
            return self.db.execute(stmt).first() is not None
        except sa_exc.SQLAlchemyError as e:
            raise _store_error("exists_by_long_url", e) from e

    def create(self, long_url: str, name: str | None = None) -> UrlMapping:
        for attempt in range(1, self.max_attempts + 1):
            short_url = self.code_generator()
            mapping = UrlMapping(name=name, long_url=long_url, short_url=short_url)
            try:
                self.db.add(mapping)
                self.db.commit()
                # 從資料庫重新讀取id、created_at、updated_at等由DB產生的欄位
                self.db.refresh(mapping)
                return mapping
            except sa_exc.IntegrityError as e:
                self.db.rollback()
                if not _is_short_code_collision(e):
                    raise _store_error("create", e) from e
                logger.warning(
                    f"Short code collision on attempt {attempt}/{self.max_attempts}: "
                    f"{short_url}"
                )
            except sa_exc.SQLAlchemyError as e:
                self.db.rollback()
                raise _store_error("create", e) from e

        raise ShortCodeCollisionError(self.max_attempts)

    def list_all(self) -> list[UrlMapping]:
        stmt = select(UrlMapping).order_by(UrlMapping.id)
        try:
            return list(self.db.execute(stmt).scalars().all())
        except sa_exc.SQLAlchemyError as e:
            raise _store_error("list_all", e) from e
