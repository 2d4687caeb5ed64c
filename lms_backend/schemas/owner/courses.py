from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, Field

from lms_backend.schemas.shares.base import EnvelopeResponse


class CourseFields(BaseModel):
    name: Annotated[str, Field(min_length=1, max_length=255)]
    address: str = ""
    image_file_name: Annotated[str, Field(min_length=1, max_length=255)]
    slug: Optional[str] = None
    instructor_id: Optional[str] = None
    category_id: Optional[str] = None
    course_type: Optional[str] = None
    seo_description: Optional[str] = None
    duration: Optional[str] = None
    timezone: Optional[str] = None
    thumbnail: Optional[str] = None
    demo_video_storage: Optional[str] = None
    demo_video_source: Optional[str] = None
    description: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    price: Optional[Decimal] = Field(default=None, ge=0)
    discount: Optional[Decimal] = Field(default=None, ge=0)
    certificate: Optional[str] = None
    gna: Optional[str] = None
    message_for_reviewer: Optional[str] = None
    is_approved: Optional[str] = None
    status: Optional[str] = None
    course_level_id: Optional[str] = None
    course_language_id: Optional[str] = None


class CreateCourse(CourseFields):
    # id returned by the image upload endpoint; generated when absent
    id: Optional[Annotated[str, Field(min_length=1, max_length=36)]] = None


class EditCourse(CourseFields):
    pass


class DetailCourseResponse(EnvelopeResponse):
    id: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    image_file_name: Optional[str] = None
    slug: Optional[str] = None
    instructor_id: Optional[str] = None
    category_id: Optional[str] = None
    course_type: Optional[str] = None
    seo_description: Optional[str] = None
    duration: Optional[str] = None
    timezone: Optional[str] = None
    thumbnail: Optional[str] = None
    demo_video_storage: Optional[str] = None
    demo_video_source: Optional[str] = None
    description: Optional[str] = None
    capacity: Optional[int] = None
    price: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    certificate: Optional[str] = None
    gna: Optional[str] = None
    message_for_reviewer: Optional[str] = None
    is_approved: Optional[str] = None
    status: Optional[str] = None
    course_level_id: Optional[str] = None
    course_language_id: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None
