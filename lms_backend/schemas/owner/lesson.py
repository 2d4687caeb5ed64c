from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field

from lms_backend.schemas.shares.base import EnvelopeResponse


class ChapterLessonFields(BaseModel):
    instructor_id: Optional[str] = None
    course_id: Optional[str] = None
    chapter_id: Optional[str] = None
    title: Annotated[str, Field(min_length=1, max_length=255)]
    order_lesson: Annotated[int, Field(ge=0)]
    slug: Optional[str] = None
    description: Optional[str] = None
    file_path: Optional[str] = None
    storage_lesson: Optional[str] = None
    lesson_type: Optional[str] = None
    volume: Optional[str] = None
    duration: Optional[str] = None
    file_type: Optional[str] = None
    downloadable: Optional[bool] = None
    is_preview: Optional[bool] = None
    status: Optional[str] = None


class CreateChapterLesson(ChapterLessonFields):
    pass


class EditChapterLesson(ChapterLessonFields):
    pass


class DetailChapterLessonResponse(EnvelopeResponse):
    id: Optional[str] = None
    instructor_id: Optional[str] = None
    course_id: Optional[str] = None
    chapter_id: Optional[str] = None
    title: Optional[str] = None
    order_lesson: Optional[int] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    file_path: Optional[str] = None
    storage_lesson: Optional[str] = None
    lesson_type: Optional[str] = None
    volume: Optional[str] = None
    duration: Optional[str] = None
    file_type: Optional[str] = None
    downloadable: Optional[bool] = None
    is_preview: Optional[bool] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None
