# storefront/domain/results.py
"""
Jawne typy wynikow dla serwisow.

Serwis zwraca Ok(value) albo Err(ServiceError); router zamienia Err na
odpowiedz HTTP. Oczekiwane bledy (pusty koszyk, zly adres, brak towaru)
nie sa wyjatkami.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PERSISTENCE = "persistence"
    UNAVAILABLE = "unavailable"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.PERSISTENCE: 500,
    ErrorKind.UNAVAILABLE: 503,
}


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str

    @classmethod
    def validation(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def not_found(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def persistence(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.PERSISTENCE, message)

    @classmethod
    def unavailable(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.UNAVAILABLE, message)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: ServiceError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
