import pytest
from fastapi import HTTPException

from lms_backend.db.repositories.lesson import ChapterLessonRepository
from lms_backend.schemas.owner.lesson import CreateChapterLesson, EditChapterLesson
from lms_backend.services.owner.lesson import ChapterLessonService


@pytest.fixture
def service(db, session_factory, policy):
    return ChapterLessonService(db=db, session_factory=session_factory, policy=policy)


async def test_lesson_lifecycle(service, owner_claims, db):
    created = await service.create_lesson_async(
        owner_claims,
        CreateChapterLesson(
            chapter_id="ch-1",
            course_id="c-1",
            title="Wedging Clay",
            order_lesson=1,
            lesson_type="video",
            downloadable=False,
            is_preview=True,
        ),
    )
    assert created.base.message == "Course chapter lesson successfully created"

    detail = await service.detail_lesson_async(
        owner_claims, created.id, ["slug", "is_preview", "file_path"]
    )
    assert detail.model_dump(exclude_unset=True) == {
        "base": detail.base.model_dump(),
        "id": created.id,
        "slug": "wedging-clay",
        "is_preview": True,
        "file_path": None,
    }

    edited = await service.edit_lesson_async(
        owner_claims,
        created.id,
        EditChapterLesson(title="Wedging", order_lesson=3, file_path="lessons/1.mp4"),
    )
    assert edited.base.message == "Edit Course Chapter Lesson Success"
    row = await ChapterLessonRepository(db).get_by_id(created.id)
    assert row.order_lesson == 3
    assert row.file_path == "lessons/1.mp4"
    assert row.slug == "wedging-clay"
    assert row.is_preview is None

    deleted = await service.delete_lesson_async(owner_claims, created.id)
    assert deleted.base.message == "Delete with SoftDelete Course Chapter Lesson Success"
    detail = await service.detail_lesson_async(owner_claims, created.id)
    assert detail.base.message == "Course chapter lesson not found"


async def test_user_role_is_rejected(service, user_claims, db):
    with pytest.raises(HTTPException) as exc:
        await service.create_lesson_async(
            user_claims, CreateChapterLesson(title="Nope", order_lesson=0)
        )
    assert exc.value.status_code == 401
