"""
Registry dependency injection for FastAPI.

This module provides FastAPI dependency functions that build a
request-scoped registry and service on top of the request's database
session.
"""
from functools import partial

from fastapi import Depends
from sqlalchemy.orm import Session

from shortener.config import settings
from shortener.database import get_db
from shortener.logging_config import setup_logging
from shortener.registry.base import UrlRegistry
from shortener.registry.sql import SqlAlchemyUrlRegistry
from shortener.services.short_url import ShortUrlService
from shortener.utils.codes import generate_short_code


def get_registry(db: Session = Depends(get_db)) -> UrlRegistry:
    """
    Return a SQLAlchemy registry bound to the request's session.

    Short codes use SHORT_CODE_LENGTH and SHORT_CODE_CHARSET; collisions
    are retried up to SHORT_CODE_MAX_ATTEMPTS times.
    """
    return SqlAlchemyUrlRegistry(
        db,
        code_generator=partial(
            generate_short_code,
            length=settings.SHORT_CODE_LENGTH,
            charset=settings.SHORT_CODE_CHARSET,
        ),
        max_attempts=settings.SHORT_CODE_MAX_ATTEMPTS,
    )


def get_short_url_service(
    registry: UrlRegistry = Depends(get_registry),
) -> ShortUrlService:
    return ShortUrlService(registry, logger=setup_logging())
