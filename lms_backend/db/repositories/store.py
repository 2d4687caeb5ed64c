from lms_backend.db.models.database import Stores
from lms_backend.db.repositories.base import AuditedRepository
from lms_backend.libs.field_mask import check_allow_list

STORE_MUTABLE_COLUMNS = ("name", "address", "image_file_name")

STORE_FIELD_MASK = check_allow_list(
    Stores.__table__,
    (
        "id",
        *STORE_MUTABLE_COLUMNS,
        "created_at",
        "created_by",
        "updated_at",
        "updated_by",
        "deleted_at",
        "deleted_by",
    ),
)


class StoreRepository(AuditedRepository[Stores]):
    model = Stores
    field_mask_columns = STORE_FIELD_MASK
    mutable_columns = STORE_MUTABLE_COLUMNS
