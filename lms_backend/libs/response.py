from typing import Iterable

from lms_backend.schemas.shares.base import BaseResponse, ValidationErrorItem


def success_response(message: str) -> BaseResponse:
    return BaseResponse(
        status_code=200, message=message, is_error=False, validation_errors=None
    )


def bad_request_response(message: str) -> BaseResponse:
    return BaseResponse(
        status_code=400, message=message, is_error=True, validation_errors=None
    )


def not_found_response(message: str) -> BaseResponse:
    return BaseResponse(
        status_code=404, message=message, is_error=True, validation_errors=None
    )


def validation_error_response(errors: Iterable[dict]) -> BaseResponse:
    """Build the envelope from pydantic's `errors()` output."""
    items = [
        ValidationErrorItem(
            field=".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            message=err.get("msg", ""),
        )
        for err in errors
    ]
    return BaseResponse(
        status_code=400,
        message="Validation error",
        is_error=True,
        validation_errors=items,
    )
