# lms_backend/services/owner/lesson.py
import uuid
from typing import Optional, Sequence

from fastapi import Depends
from slugify import slugify
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lms_backend.core.policy import RolePolicy, get_role_policy
from lms_backend.db.models.database import ChapterLessons
from lms_backend.db.repositories.lesson import ChapterLessonRepository
from lms_backend.db.session import get_session, get_session_factory
from lms_backend.db.transaction import transaction
from lms_backend.libs.formats.datetime import now as get_now
from lms_backend.libs.response import not_found_response, success_response
from lms_backend.schemas.auth.user import JwtClaims
from lms_backend.schemas.owner.lesson import (
    CreateChapterLesson,
    DetailChapterLessonResponse,
    EditChapterLesson,
)
from lms_backend.schemas.shares.base import EnvelopeResponse, IdResponse


class ChapterLessonService:
    def __init__(
        self,
        db: AsyncSession = Depends(get_session),
        session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
        policy: RolePolicy = Depends(get_role_policy),
    ):
        self.db = db
        self.session_factory = session_factory
        self.repository = ChapterLessonRepository(db)
        self.policy = policy

    async def create_lesson_async(
        self, claims: JwtClaims, schema: CreateChapterLesson
    ) -> IdResponse:
        self.policy.require(claims, "chapter_lesson.create")

        async with transaction(self.session_factory) as tx:
            lesson = ChapterLessons(
                id=str(uuid.uuid4()),
                **schema.model_dump(),
                created_at=get_now(),
                created_by=claims.full_name,
            )
            if not lesson.slug:
                lesson.slug = slugify(schema.title)
            await self.repository.with_transaction(tx).create_new(lesson)
            await tx.commit()

        return IdResponse(
            base=success_response("Course chapter lesson successfully created"),
            id=lesson.id,
        )

    async def detail_lesson_async(
        self,
        claims: JwtClaims,
        lesson_id: str,
        fields: Optional[Sequence[str]] = None,
    ) -> DetailChapterLessonResponse:
        self.policy.require(claims, "chapter_lesson.detail")

        row = await self.repository.get_by_id_field_mask(lesson_id, fields)
        if row is None:
            return DetailChapterLessonResponse(
                base=not_found_response("Course chapter lesson not found")
            )

        return DetailChapterLessonResponse(
            base=success_response("Course Chapter Lesson Detail Success"), **row
        )

    async def edit_lesson_async(
        self, claims: JwtClaims, lesson_id: str, schema: EditChapterLesson
    ) -> IdResponse:
        self.policy.require(claims, "chapter_lesson.edit")

        existing = await self.repository.get_by_id(lesson_id)
        if not existing:
            return IdResponse(base=not_found_response("Course chapter lesson not found"))

        async with transaction(self.session_factory) as tx:
            lesson = ChapterLessons(
                id=lesson_id,
                **schema.model_dump(),
                updated_at=get_now(),
                updated_by=claims.full_name,
            )
            if not lesson.slug:
                lesson.slug = existing.slug or slugify(schema.title)
            await self.repository.with_transaction(tx).update(lesson)
            await tx.commit()

        return IdResponse(
            base=success_response("Edit Course Chapter Lesson Success"), id=lesson_id
        )

    async def delete_lesson_async(
        self, claims: JwtClaims, lesson_id: str
    ) -> EnvelopeResponse:
        self.policy.require(claims, "chapter_lesson.delete")

        if not await self.repository.get_by_id(lesson_id):
            return EnvelopeResponse(
                base=not_found_response("Course chapter lesson not found")
            )

        async with transaction(self.session_factory) as tx:
            await self.repository.with_transaction(tx).delete(
                lesson_id, get_now(), claims.full_name
            )
            await tx.commit()

        return EnvelopeResponse(
            base=success_response("Delete with SoftDelete Course Chapter Lesson Success")
        )
