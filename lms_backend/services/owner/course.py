# lms_backend/services/owner/course.py
import uuid
from typing import Optional, Sequence

from fastapi import Depends
from slugify import slugify
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lms_backend.core.enum import FileEntity
from lms_backend.core.policy import RolePolicy, get_role_policy
from lms_backend.db.models.database import Courses
from lms_backend.db.repositories.course import CourseRepository
from lms_backend.db.session import get_session, get_session_factory
from lms_backend.db.transaction import transaction
from lms_backend.libs.formats.datetime import now as get_now
from lms_backend.libs.response import (
    bad_request_response,
    not_found_response,
    success_response,
)
from lms_backend.schemas.auth.user import JwtClaims
from lms_backend.schemas.owner.courses import CreateCourse, DetailCourseResponse, EditCourse
from lms_backend.schemas.shares.base import EnvelopeResponse, IdResponse
from lms_backend.services.shares.storage import (
    LocalStorageService,
    get_storage_service,
    image_url,
)

KIND = FileEntity.COURSE.value


class CourseService:
    def __init__(
        self,
        db: AsyncSession = Depends(get_session),
        session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
        storage: LocalStorageService = Depends(get_storage_service),
        policy: RolePolicy = Depends(get_role_policy),
    ):
        self.db = db
        self.session_factory = session_factory
        self.repository = CourseRepository(db)
        self.storage = storage
        self.policy = policy

    # ======================================================
    # 🧩 Create: row and image must both exist, or nothing is kept
    # ======================================================
    async def create_course_async(
        self, claims: JwtClaims, schema: CreateCourse
    ) -> IdResponse:
        self.policy.require(claims, "course.create")

        async with transaction(self.session_factory) as tx:
            course_repo = self.repository.with_transaction(tx)

            course = Courses(
                id=schema.id or str(uuid.uuid4()),
                **schema.model_dump(exclude={"id"}),
                created_at=get_now(),
                created_by=claims.full_name,
            )
            if not course.slug:
                course.slug = slugify(schema.name)
            await course_repo.create_new(course)

            # the upload endpoint must already have stored the image
            if not await self.storage.exists(course.id, KIND, course.image_file_name):
                return IdResponse(base=bad_request_response("File not found"))

            await tx.commit()

        return IdResponse(
            base=success_response("Course successfully created"), id=course.id
        )

    async def detail_course_async(
        self,
        claims: JwtClaims,
        course_id: str,
        fields: Optional[Sequence[str]] = None,
    ) -> DetailCourseResponse:
        self.policy.require(claims, "course.detail")

        row = await self.repository.get_by_id_field_mask(course_id, fields)
        if row is None:
            return DetailCourseResponse(base=not_found_response("Course not found"))

        if row.get("image_file_name"):
            row["image_file_name"] = image_url(row["id"], KIND, row["image_file_name"])

        return DetailCourseResponse(base=success_response("Course Detail Success"), **row)

    async def edit_course_async(
        self, claims: JwtClaims, course_id: str, schema: EditCourse
    ) -> IdResponse:
        self.policy.require(claims, "course.edit")

        existing = await self.repository.get_by_id(course_id)
        if not existing:
            return IdResponse(base=not_found_response("Course not found"))

        async with transaction(self.session_factory) as tx:
            course_repo = self.repository.with_transaction(tx)

            course = Courses(
                id=course_id,
                **schema.model_dump(),
                updated_at=get_now(),
                updated_by=claims.full_name,
            )
            if not course.slug:
                course.slug = existing.slug or slugify(schema.name)
            await course_repo.update(course)

            # 🖼 new image replaces the old one on disk
            if existing.image_file_name != schema.image_file_name:
                if not await self.storage.exists(course_id, KIND, schema.image_file_name):
                    return IdResponse(base=bad_request_response("Image not found"))
                # row statements already ran; a failed removal rolls them back
                await self.storage.remove(course_id, KIND, existing.image_file_name)

            await tx.commit()

        return IdResponse(base=success_response("Edit Course Success"), id=course_id)

    async def delete_course_async(
        self, claims: JwtClaims, course_id: str
    ) -> EnvelopeResponse:
        self.policy.require(claims, "course.delete")

        existing = await self.repository.get_by_id(course_id)
        if not existing:
            return EnvelopeResponse(base=not_found_response("Course not found"))

        async with transaction(self.session_factory) as tx:
            course_repo = self.repository.with_transaction(tx)
            await course_repo.delete(course_id, get_now(), claims.full_name)

            if existing.image_file_name:
                await self.storage.remove(course_id, KIND, existing.image_file_name)

            await tx.commit()

        return EnvelopeResponse(
            base=success_response("Delete with SoftDelete Course Success")
        )
