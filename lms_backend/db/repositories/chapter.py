from lms_backend.db.models.database import CourseChapters
from lms_backend.db.repositories.base import AuditedRepository
from lms_backend.libs.field_mask import check_allow_list

CHAPTER_MUTABLE_COLUMNS = (
    "instructor_id",
    "course_id",
    "title",
    "order_chapter",
    "status",
)

CHAPTER_FIELD_MASK = check_allow_list(
    CourseChapters.__table__,
    (
        "id",
        *CHAPTER_MUTABLE_COLUMNS,
        "created_at",
        "created_by",
        "updated_at",
        "updated_by",
        "deleted_at",
        "deleted_by",
    ),
)


class CourseChapterRepository(AuditedRepository[CourseChapters]):
    model = CourseChapters
    field_mask_columns = CHAPTER_FIELD_MASK
    mutable_columns = CHAPTER_MUTABLE_COLUMNS
