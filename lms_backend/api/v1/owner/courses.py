from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query

from lms_backend.core.deps import get_current_claims
from lms_backend.schemas.auth.user import JwtClaims
from lms_backend.schemas.owner.courses import CreateCourse, DetailCourseResponse, EditCourse
from lms_backend.schemas.shares.base import EnvelopeResponse, IdResponse
from lms_backend.services.owner.course import CourseService

router = APIRouter(prefix="/courses", tags=["Owner Courses"])


@router.post("", response_model=IdResponse)
async def create_course(
    schema: CreateCourse = Body(...),
    claims: JwtClaims = Depends(get_current_claims),
    course_service: CourseService = Depends(CourseService),
):
    return await course_service.create_course_async(claims, schema)


@router.get(
    "/{course_id}",
    response_model=DetailCourseResponse,
    response_model_exclude_unset=True,
)
async def detail_course(
    course_id: str,
    fields: Optional[List[str]] = Query(None),
    claims: JwtClaims = Depends(get_current_claims),
    course_service: CourseService = Depends(CourseService),
):
    return await course_service.detail_course_async(claims, course_id, fields)


@router.put("/{course_id}", response_model=IdResponse)
async def edit_course(
    course_id: str,
    schema: EditCourse = Body(...),
    claims: JwtClaims = Depends(get_current_claims),
    course_service: CourseService = Depends(CourseService),
):
    return await course_service.edit_course_async(claims, course_id, schema)


@router.delete("/{course_id}", response_model=EnvelopeResponse)
async def delete_course(
    course_id: str,
    claims: JwtClaims = Depends(get_current_claims),
    course_service: CourseService = Depends(CourseService),
):
    return await course_service.delete_course_async(claims, course_id)
