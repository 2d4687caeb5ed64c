from decimal import Decimal

import pytest
from fastapi import HTTPException

from lms_backend.db.models.database import Courses
from lms_backend.db.repositories.course import CourseRepository
from lms_backend.schemas.owner.courses import CreateCourse, EditCourse
from lms_backend.services.owner.course import CourseService

COURSE_ID = "c0ffee00-0000-4000-8000-000000000001"


@pytest.fixture
def service(db, session_factory, storage, policy):
    return CourseService(
        db=db, session_factory=session_factory, storage=storage, policy=policy
    )


def create_schema(**overrides):
    data = {
        "id": COURSE_ID,
        "name": "Intro to Pottery",
        "address": "Workshop 4",
        "image_file_name": "course_1.png",
        "price": Decimal("49.90"),
        "capacity": 12,
    }
    data.update(overrides)
    return CreateCourse(**data)


async def test_create_then_detail(service, owner_claims, put_image):
    put_image(COURSE_ID, "course", "course_1.png")

    res = await service.create_course_async(owner_claims, create_schema())
    assert res.base.is_error is False
    assert res.base.message == "Course successfully created"
    assert res.id == COURSE_ID

    detail = await service.detail_course_async(owner_claims, COURSE_ID)
    assert detail.base.message == "Course Detail Success"
    assert detail.name == "Intro to Pottery"
    assert detail.slug == "intro-to-pottery"
    assert detail.created_by == owner_claims.full_name
    assert detail.price == Decimal("49.90")


async def test_wrong_role_is_rejected_and_nothing_inserted(
    service, user_claims, db, put_image
):
    put_image(COURSE_ID, "course", "course_1.png")

    with pytest.raises(HTTPException) as exc:
        await service.create_course_async(user_claims, create_schema())

    assert exc.value.status_code == 401
    assert await CourseRepository(db).get_by_id(COURSE_ID) is None


async def test_missing_image_rolls_back_create(service, owner_claims, db):
    res = await service.create_course_async(owner_claims, create_schema())

    assert res.base.is_error is True
    assert res.base.message == "File not found"
    assert res.id is None
    assert await CourseRepository(db).get_by_id(COURSE_ID) is None


async def test_detail_field_mask_returns_only_selected_columns(
    service, owner_claims, put_image
):
    put_image(COURSE_ID, "course", "course_1.png")
    await service.create_course_async(owner_claims, create_schema())

    detail = await service.detail_course_async(
        owner_claims, COURSE_ID, ["name", "description", "password"]
    )
    body = detail.model_dump(exclude_unset=True)

    assert set(body) == {"base", "id", "name", "description"}
    # requested but NULL stays present as None
    assert body["description"] is None


async def test_detail_unknown_id_is_not_found(service, owner_claims):
    detail = await service.detail_course_async(owner_claims, "missing")
    assert detail.base.status_code == 404
    assert detail.base.message == "Course not found"


async def test_edit_replaces_image_and_removes_old_file(
    service, owner_claims, storage, put_image, db
):
    old_path = put_image(COURSE_ID, "course", "course_1.png")
    await service.create_course_async(owner_claims, create_schema())
    put_image(COURSE_ID, "course", "course_2.png")

    res = await service.edit_course_async(
        owner_claims,
        COURSE_ID,
        EditCourse(name="Advanced Pottery", address="Workshop 5", image_file_name="course_2.png"),
    )

    assert res.base.message == "Edit Course Success"
    assert not old_path.exists()
    course = await CourseRepository(db).get_by_id(COURSE_ID)
    assert course.name == "Advanced Pottery"
    assert course.image_file_name == "course_2.png"
    assert course.updated_by == owner_claims.full_name
    # slug survives a full-row update that does not resupply it
    assert course.slug == "intro-to-pottery"
    # full-row semantics: omitted optional fields are cleared
    assert course.price is None


async def test_edit_with_missing_new_image_keeps_row_and_old_file(
    service, owner_claims, put_image, db
):
    old_path = put_image(COURSE_ID, "course", "course_1.png")
    await service.create_course_async(owner_claims, create_schema())

    res = await service.edit_course_async(
        owner_claims,
        COURSE_ID,
        EditCourse(name="Renamed", image_file_name="course_404.png"),
    )

    assert res.base.message == "Image not found"
    assert old_path.exists()
    course = await CourseRepository(db).get_by_id(COURSE_ID)
    assert course.name == "Intro to Pottery"


async def test_edit_rolls_back_when_old_image_cannot_be_removed(
    service, owner_claims, put_image, db
):
    old_path = put_image(COURSE_ID, "course", "course_1.png")
    await service.create_course_async(owner_claims, create_schema())
    put_image(COURSE_ID, "course", "course_2.png")
    old_path.unlink()

    with pytest.raises(FileNotFoundError):
        await service.edit_course_async(
            owner_claims,
            COURSE_ID,
            EditCourse(name="Renamed", image_file_name="course_2.png"),
        )

    course = await CourseRepository(db).get_by_id(COURSE_ID)
    assert course.name == "Intro to Pottery"
    assert course.image_file_name == "course_1.png"


async def test_edit_unknown_id_is_not_found(service, owner_claims):
    res = await service.edit_course_async(
        owner_claims, "missing", EditCourse(name="x", image_file_name="y.png")
    )
    assert res.base.status_code == 404


async def test_soft_delete_hides_row_and_removes_image(
    service, owner_claims, put_image, db, session_factory
):
    path = put_image(COURSE_ID, "course", "course_1.png")
    await service.create_course_async(owner_claims, create_schema())

    res = await service.delete_course_async(owner_claims, COURSE_ID)

    assert res.base.message == "Delete with SoftDelete Course Success"
    assert not path.exists()
    assert await CourseRepository(db).get_by_id(COURSE_ID) is None
    assert (await service.detail_course_async(owner_claims, COURSE_ID)).base.status_code == 404

    async with session_factory() as session:
        row = await session.get(Courses, COURSE_ID)
        assert row is not None
        assert row.deleted_at is not None
        assert row.deleted_by == owner_claims.full_name


async def test_delete_twice_reports_not_found(service, owner_claims, put_image):
    put_image(COURSE_ID, "course", "course_1.png")
    await service.create_course_async(owner_claims, create_schema())
    await service.delete_course_async(owner_claims, COURSE_ID)

    res = await service.delete_course_async(owner_claims, COURSE_ID)
    assert res.base.message == "Course not found"
