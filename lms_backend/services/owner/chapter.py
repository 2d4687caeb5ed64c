# lms_backend/services/owner/chapter.py
import uuid
from typing import Optional, Sequence

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lms_backend.core.policy import RolePolicy, get_role_policy
from lms_backend.db.models.database import CourseChapters
from lms_backend.db.repositories.chapter import CourseChapterRepository
from lms_backend.db.session import get_session, get_session_factory
from lms_backend.db.transaction import transaction
from lms_backend.libs.formats.datetime import now as get_now
from lms_backend.libs.response import not_found_response, success_response
from lms_backend.schemas.auth.user import JwtClaims
from lms_backend.schemas.owner.chapter import (
    CreateCourseChapter,
    DetailCourseChapterResponse,
    EditCourseChapter,
)
from lms_backend.schemas.shares.base import EnvelopeResponse, IdResponse


class CourseChapterService:
    def __init__(
        self,
        db: AsyncSession = Depends(get_session),
        session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
        policy: RolePolicy = Depends(get_role_policy),
    ):
        self.db = db
        self.session_factory = session_factory
        self.repository = CourseChapterRepository(db)
        self.policy = policy

    async def create_chapter_async(
        self, claims: JwtClaims, schema: CreateCourseChapter
    ) -> IdResponse:
        """Order values are stored as given; duplicates within a course are allowed."""
        self.policy.require(claims, "course_chapter.create")

        async with transaction(self.session_factory) as tx:
            chapter = CourseChapters(
                id=str(uuid.uuid4()),
                **schema.model_dump(),
                created_at=get_now(),
                created_by=claims.full_name,
            )
            await self.repository.with_transaction(tx).create_new(chapter)
            await tx.commit()

        return IdResponse(
            base=success_response("Course chapter successfully created"), id=chapter.id
        )

    async def detail_chapter_async(
        self,
        claims: JwtClaims,
        chapter_id: str,
        fields: Optional[Sequence[str]] = None,
    ) -> DetailCourseChapterResponse:
        self.policy.require(claims, "course_chapter.detail")

        row = await self.repository.get_by_id_field_mask(chapter_id, fields)
        if row is None:
            return DetailCourseChapterResponse(
                base=not_found_response("Course chapter not found")
            )

        return DetailCourseChapterResponse(
            base=success_response("Course Chapter Detail Success"), **row
        )

    async def edit_chapter_async(
        self, claims: JwtClaims, chapter_id: str, schema: EditCourseChapter
    ) -> IdResponse:
        self.policy.require(claims, "course_chapter.edit")

        if not await self.repository.get_by_id(chapter_id):
            return IdResponse(base=not_found_response("Course chapter not found"))

        async with transaction(self.session_factory) as tx:
            await self.repository.with_transaction(tx).update(
                CourseChapters(
                    id=chapter_id,
                    **schema.model_dump(),
                    updated_at=get_now(),
                    updated_by=claims.full_name,
                )
            )
            await tx.commit()

        return IdResponse(base=success_response("Edit Course Chapter Success"), id=chapter_id)

    async def delete_chapter_async(
        self, claims: JwtClaims, chapter_id: str
    ) -> EnvelopeResponse:
        self.policy.require(claims, "course_chapter.delete")

        if not await self.repository.get_by_id(chapter_id):
            return EnvelopeResponse(base=not_found_response("Course chapter not found"))

        async with transaction(self.session_factory) as tx:
            await self.repository.with_transaction(tx).delete(
                chapter_id, get_now(), claims.full_name
            )
            await tx.commit()

        return EnvelopeResponse(
            base=success_response("Delete with SoftDelete Course Chapter Success")
        )
