from enum import Enum


class UserRole(str, Enum):
    """Roles are mutually exclusive; each user carries exactly one."""

    OWNER = "Owner"
    INSTRUCTOR = "Instructor"
    USER = "User"


class FileEntity(str, Enum):
    """Entity kinds that own an image under storage/{id}/{kind}/."""

    COURSE = "course"
    STORE = "store"
