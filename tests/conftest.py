import time
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from lms_backend.core.enum import UserRole
from lms_backend.core.policy import RolePolicy
from lms_backend.core.revocation import MemoryRevocationCache
from lms_backend.core.security import SecurityService
from lms_backend.db.init_db import create_all, drop_all
from lms_backend.schemas.auth.user import JwtClaims
from lms_backend.services.shares.storage import LocalStorageService


class FakeOutbox:
    """Records queued OTP emails instead of sending them."""

    def __init__(self, accept: bool = True):
        self.accept = accept
        self.queued: list[tuple[str, str]] = []

    def enqueue_otp(self, email: str, code: str) -> bool:
        if not self.accept:
            return False
        self.queued.append((email, code))
        return True


def make_claims(role: UserRole, email: str = "owner@x.com", full_name: str = "Olive Owner"):
    return JwtClaims(
        sub="11111111-1111-1111-1111-111111111111",
        email=email,
        full_name=full_name,
        role=role.value,
        iat=int(time.time()),
        exp=int(time.time()) + 3600,
    )


@pytest.fixture
async def engine(tmp_path: Path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'lms.db'}")
    await create_all(engine)
    yield engine
    await drop_all(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorageService:
    return LocalStorageService(tmp_path / "storage")


@pytest.fixture
def policy() -> RolePolicy:
    return RolePolicy()


@pytest.fixture
def revocation() -> MemoryRevocationCache:
    return MemoryRevocationCache()


@pytest.fixture
def outbox() -> FakeOutbox:
    return FakeOutbox()


@pytest.fixture
def security() -> SecurityService:
    return SecurityService()


@pytest.fixture
def owner_claims() -> JwtClaims:
    return make_claims(UserRole.OWNER)


@pytest.fixture
def user_claims() -> JwtClaims:
    return make_claims(UserRole.USER, email="user@x.com", full_name="Uma User")


@pytest.fixture
def put_image(storage: LocalStorageService):
    """Place an image on disk the way the upload endpoint would."""

    def _put(entity_id: str, kind: str, file_name: str) -> Path:
        path = storage.path_for(entity_id, kind, file_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"\x89PNG\r\n\x1a\n")
        return path

    return _put
