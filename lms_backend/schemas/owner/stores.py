from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field

from lms_backend.schemas.shares.base import EnvelopeResponse


class CreateStore(BaseModel):
    id: Optional[Annotated[str, Field(min_length=1, max_length=36)]] = None
    name: Annotated[str, Field(min_length=1, max_length=255)]
    address: Annotated[str, Field(min_length=1)]
    image_file_name: Annotated[str, Field(min_length=1, max_length=255)]


class EditStore(BaseModel):
    name: Annotated[str, Field(min_length=1, max_length=255)]
    address: Annotated[str, Field(min_length=1)]
    image_file_name: Annotated[str, Field(min_length=1, max_length=255)]


class DetailStoreResponse(EnvelopeResponse):
    id: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    image_file_name: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None
