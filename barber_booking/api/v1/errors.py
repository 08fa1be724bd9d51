from fastapi import HTTPException

from barber_booking.application.dto.outcomes import ErrorKind, OperationError

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAVAILABLE: 503,
}


def raise_for_error(error: OperationError | None) -> None:
    if error is None:
        return
    raise HTTPException(
        status_code=STATUS_BY_KIND[error.kind],
        detail={"code": error.code, "message": error.message, "field": error.field},
    )
