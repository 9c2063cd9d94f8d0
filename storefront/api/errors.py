# storefront/api/errors.py
from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.results import Err, Result


def unwrap(result: Result):
    """Ok -> wartosc, Err -> HTTPException z kodem wg rodzaju bledu."""
    if isinstance(result, Err):
        raise HTTPException(
            status_code=result.error.kind.status_code,
            detail=result.error.message,
        )
    return result.value


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    #bledy walidacji wejscia jako 400, tak jak bledy walidacji w serwisach
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )
