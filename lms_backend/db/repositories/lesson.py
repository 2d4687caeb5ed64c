from lms_backend.db.models.database import ChapterLessons
from lms_backend.db.repositories.base import AuditedRepository
from lms_backend.libs.field_mask import check_allow_list

LESSON_MUTABLE_COLUMNS = (
    "instructor_id",
    "course_id",
    "chapter_id",
    "title",
    "order_lesson",
    "slug",
    "description",
    "file_path",
    "storage_lesson",
    "lesson_type",
    "volume",
    "duration",
    "file_type",
    "downloadable",
    "is_preview",
    "status",
)

LESSON_FIELD_MASK = check_allow_list(
    ChapterLessons.__table__,
    (
        "id",
        *LESSON_MUTABLE_COLUMNS,
        "created_at",
        "created_by",
        "updated_at",
        "updated_by",
        "deleted_at",
        "deleted_by",
    ),
)


class ChapterLessonRepository(AuditedRepository[ChapterLessons]):
    model = ChapterLessons
    field_mask_columns = LESSON_FIELD_MASK
    mutable_columns = LESSON_MUTABLE_COLUMNS
