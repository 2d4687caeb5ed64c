from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field

from lms_backend.schemas.shares.base import EnvelopeResponse


class CourseChapterFields(BaseModel):
    instructor_id: Annotated[str, Field(min_length=1, max_length=36)]
    course_id: Annotated[str, Field(min_length=1, max_length=36)]
    title: Annotated[str, Field(min_length=1, max_length=255)]
    order_chapter: Annotated[int, Field(ge=0)]
    status: str = "draft"


class CreateCourseChapter(CourseChapterFields):
    pass


class EditCourseChapter(CourseChapterFields):
    pass


class DetailCourseChapterResponse(EnvelopeResponse):
    id: Optional[str] = None
    instructor_id: Optional[str] = None
    course_id: Optional[str] = None
    title: Optional[str] = None
    order_chapter: Optional[int] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None
