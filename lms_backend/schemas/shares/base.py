from typing import List, Optional

from pydantic import BaseModel


class ValidationErrorItem(BaseModel):
    field: str
    message: str


class BaseResponse(BaseModel):
    """Uniform result envelope carried by every response."""

    status_code: int
    message: str
    is_error: bool = False
    validation_errors: Optional[List[ValidationErrorItem]] = None


class EnvelopeResponse(BaseModel):
    base: BaseResponse


class IdResponse(EnvelopeResponse):
    id: Optional[str] = None
