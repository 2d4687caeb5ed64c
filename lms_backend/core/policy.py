from functools import lru_cache
from typing import Mapping

from fastapi import HTTPException, status

from lms_backend.core.enum import UserRole
from lms_backend.schemas.auth.user import JwtClaims

# one accepted role per operation
DEFAULT_ROLE_POLICY: Mapping[str, UserRole] = {
    "course.create": UserRole.OWNER,
    "course.detail": UserRole.OWNER,
    "course.edit": UserRole.OWNER,
    "course.delete": UserRole.OWNER,
    "store.create": UserRole.OWNER,
    "store.detail": UserRole.OWNER,
    "store.edit": UserRole.OWNER,
    "store.delete": UserRole.OWNER,
    "course_chapter.create": UserRole.OWNER,
    "course_chapter.detail": UserRole.OWNER,
    "course_chapter.edit": UserRole.OWNER,
    "course_chapter.delete": UserRole.OWNER,
    "chapter_lesson.create": UserRole.OWNER,
    "chapter_lesson.detail": UserRole.OWNER,
    "chapter_lesson.edit": UserRole.OWNER,
    "chapter_lesson.delete": UserRole.OWNER,
}


def unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthenticated"
    )


class RolePolicy:
    def __init__(self, table: Mapping[str, UserRole] | None = None):
        self.table = dict(table if table is not None else DEFAULT_ROLE_POLICY)

    def role_for(self, operation: str) -> UserRole:
        try:
            return self.table[operation]
        except KeyError:
            raise KeyError(f"No role configured for operation '{operation}'")

    def require(self, claims: JwtClaims | None, operation: str) -> JwtClaims:
        """Return the claims when the caller holds the operation's role, else 401."""
        required = self.role_for(operation)
        if claims is None or claims.role != required.value:
            raise unauthenticated()
        return claims


@lru_cache(maxsize=1)
def get_role_policy() -> RolePolicy:
    return RolePolicy()
