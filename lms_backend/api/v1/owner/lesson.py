from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query

from lms_backend.core.deps import get_current_claims
from lms_backend.schemas.auth.user import JwtClaims
from lms_backend.schemas.owner.lesson import (
    CreateChapterLesson,
    DetailChapterLessonResponse,
    EditChapterLesson,
)
from lms_backend.schemas.shares.base import EnvelopeResponse, IdResponse
from lms_backend.services.owner.lesson import ChapterLessonService

router = APIRouter(prefix="/chapter-lessons", tags=["Owner Chapter Lessons"])


@router.post("", response_model=IdResponse)
async def create_lesson(
    schema: CreateChapterLesson = Body(...),
    claims: JwtClaims = Depends(get_current_claims),
    lesson_service: ChapterLessonService = Depends(ChapterLessonService),
):
    return await lesson_service.create_lesson_async(claims, schema)


@router.get(
    "/{lesson_id}",
    response_model=DetailChapterLessonResponse,
    response_model_exclude_unset=True,
)
async def detail_lesson(
    lesson_id: str,
    fields: Optional[List[str]] = Query(None),
    claims: JwtClaims = Depends(get_current_claims),
    lesson_service: ChapterLessonService = Depends(ChapterLessonService),
):
    return await lesson_service.detail_lesson_async(claims, lesson_id, fields)


@router.put("/{lesson_id}", response_model=IdResponse)
async def edit_lesson(
    lesson_id: str,
    schema: EditChapterLesson = Body(...),
    claims: JwtClaims = Depends(get_current_claims),
    lesson_service: ChapterLessonService = Depends(ChapterLessonService),
):
    return await lesson_service.edit_lesson_async(claims, lesson_id, schema)


@router.delete("/{lesson_id}", response_model=EnvelopeResponse)
async def delete_lesson(
    lesson_id: str,
    claims: JwtClaims = Depends(get_current_claims),
    lesson_service: ChapterLessonService = Depends(ChapterLessonService),
):
    return await lesson_service.delete_lesson_async(claims, lesson_id)
