# storefront/utils/db_guard.py
import functools

from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.results import Err, ServiceError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def persistence_guard(message: str, repo_attr: str):
    """
    Blad bazy (odczyt albo zapis) w metodzie serwisu -> rollback i
    Err(PERSISTENCE) zamiast wyjatku, zeby klient zawsze dostal komunikat.
    """

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            try:
                return fn(self, *args, **kwargs)
            except SQLAlchemyError:
                getattr(self, repo_attr).rollback()
                logger.exception(f"{message} ({fn.__qualname__})")
                return Err(ServiceError.persistence(message))

        return wrapper

    return decorator
