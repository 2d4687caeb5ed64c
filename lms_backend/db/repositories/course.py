from lms_backend.db.models.database import Courses
from lms_backend.db.repositories.base import AuditedRepository
from lms_backend.libs.field_mask import check_allow_list

COURSE_MUTABLE_COLUMNS = (
    "name",
    "address",
    "image_file_name",
    "slug",
    "instructor_id",
    "category_id",
    "course_type",
    "seo_description",
    "duration",
    "timezone",
    "thumbnail",
    "demo_video_storage",
    "demo_video_source",
    "description",
    "capacity",
    "price",
    "discount",
    "certificate",
    "gna",
    "message_for_reviewer",
    "is_approved",
    "status",
    "course_level_id",
    "course_language_id",
)

COURSE_FIELD_MASK = check_allow_list(
    Courses.__table__,
    (
        "id",
        *COURSE_MUTABLE_COLUMNS,
        "created_at",
        "created_by",
        "updated_at",
        "updated_by",
        "deleted_at",
        "deleted_by",
    ),
)


class CourseRepository(AuditedRepository[Courses]):
    model = Courses
    field_mask_columns = COURSE_FIELD_MASK
    mutable_columns = COURSE_MUTABLE_COLUMNS
