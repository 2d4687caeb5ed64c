from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query

from lms_backend.core.deps import get_current_claims
from lms_backend.schemas.auth.user import JwtClaims
from lms_backend.schemas.owner.chapter import (
    CreateCourseChapter,
    DetailCourseChapterResponse,
    EditCourseChapter,
)
from lms_backend.schemas.shares.base import EnvelopeResponse, IdResponse
from lms_backend.services.owner.chapter import CourseChapterService

router = APIRouter(prefix="/course-chapters", tags=["Owner Course Chapters"])


@router.post("", response_model=IdResponse)
async def create_chapter(
    schema: CreateCourseChapter = Body(...),
    claims: JwtClaims = Depends(get_current_claims),
    chapter_service: CourseChapterService = Depends(CourseChapterService),
):
    return await chapter_service.create_chapter_async(claims, schema)


@router.get(
    "/{chapter_id}",
    response_model=DetailCourseChapterResponse,
    response_model_exclude_unset=True,
)
async def detail_chapter(
    chapter_id: str,
    fields: Optional[List[str]] = Query(None),
    claims: JwtClaims = Depends(get_current_claims),
    chapter_service: CourseChapterService = Depends(CourseChapterService),
):
    return await chapter_service.detail_chapter_async(claims, chapter_id, fields)


@router.put("/{chapter_id}", response_model=IdResponse)
async def edit_chapter(
    chapter_id: str,
    schema: EditCourseChapter = Body(...),
    claims: JwtClaims = Depends(get_current_claims),
    chapter_service: CourseChapterService = Depends(CourseChapterService),
):
    return await chapter_service.edit_chapter_async(claims, chapter_id, schema)


@router.delete("/{chapter_id}", response_model=EnvelopeResponse)
async def delete_chapter(
    chapter_id: str,
    claims: JwtClaims = Depends(get_current_claims),
    chapter_service: CourseChapterService = Depends(CourseChapterService),
):
    return await chapter_service.delete_chapter_async(claims, chapter_id)
