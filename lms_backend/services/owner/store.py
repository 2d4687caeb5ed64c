# lms_backend/services/owner/store.py
import uuid
from typing import Optional, Sequence

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lms_backend.core.enum import FileEntity
from lms_backend.core.policy import RolePolicy, get_role_policy
from lms_backend.db.models.database import Stores
from lms_backend.db.repositories.store import StoreRepository
from lms_backend.db.session import get_session, get_session_factory
from lms_backend.db.transaction import transaction
from lms_backend.libs.formats.datetime import now as get_now
from lms_backend.libs.response import (
    bad_request_response,
    not_found_response,
    success_response,
)
from lms_backend.schemas.auth.user import JwtClaims
from lms_backend.schemas.owner.stores import CreateStore, DetailStoreResponse, EditStore
from lms_backend.schemas.shares.base import EnvelopeResponse, IdResponse
from lms_backend.services.shares.storage import (
    LocalStorageService,
    get_storage_service,
    image_url,
)

KIND = FileEntity.STORE.value


class StoreService:
    def __init__(
        self,
        db: AsyncSession = Depends(get_session),
        session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
        storage: LocalStorageService = Depends(get_storage_service),
        policy: RolePolicy = Depends(get_role_policy),
    ):
        self.db = db
        self.session_factory = session_factory
        self.repository = StoreRepository(db)
        self.storage = storage
        self.policy = policy

    async def create_store_async(
        self, claims: JwtClaims, schema: CreateStore
    ) -> IdResponse:
        self.policy.require(claims, "store.create")

        async with transaction(self.session_factory) as tx:
            store_repo = self.repository.with_transaction(tx)

            store = Stores(
                id=schema.id or str(uuid.uuid4()),
                name=schema.name,
                address=schema.address,
                image_file_name=schema.image_file_name,
                created_at=get_now(),
                created_by=claims.full_name,
            )
            await store_repo.create_new(store)

            if not await self.storage.exists(store.id, KIND, store.image_file_name):
                return IdResponse(base=bad_request_response("File not found"))

            await tx.commit()

        return IdResponse(base=success_response("Store successfully created"), id=store.id)

    async def detail_store_async(
        self,
        claims: JwtClaims,
        store_id: str,
        fields: Optional[Sequence[str]] = None,
    ) -> DetailStoreResponse:
        self.policy.require(claims, "store.detail")

        row = await self.repository.get_by_id_field_mask(store_id, fields)
        if row is None:
            return DetailStoreResponse(base=not_found_response("Store not found"))

        if row.get("image_file_name"):
            row["image_file_name"] = image_url(row["id"], KIND, row["image_file_name"])

        return DetailStoreResponse(base=success_response("Store Detail Success"), **row)

    async def edit_store_async(
        self, claims: JwtClaims, store_id: str, schema: EditStore
    ) -> IdResponse:
        self.policy.require(claims, "store.edit")

        existing = await self.repository.get_by_id(store_id)
        if not existing:
            return IdResponse(base=not_found_response("Store not found"))

        async with transaction(self.session_factory) as tx:
            store_repo = self.repository.with_transaction(tx)
            await store_repo.update(
                Stores(
                    id=store_id,
                    name=schema.name,
                    address=schema.address,
                    image_file_name=schema.image_file_name,
                    updated_at=get_now(),
                    updated_by=claims.full_name,
                )
            )

            if existing.image_file_name != schema.image_file_name:
                if not await self.storage.exists(store_id, KIND, schema.image_file_name):
                    return IdResponse(base=bad_request_response("Image not found"))
                # row statements already ran; a failed removal rolls them back
                await self.storage.remove(store_id, KIND, existing.image_file_name)

            await tx.commit()

        return IdResponse(base=success_response("Edit Store Success"), id=store_id)

    async def delete_store_async(
        self, claims: JwtClaims, store_id: str
    ) -> EnvelopeResponse:
        self.policy.require(claims, "store.delete")

        existing = await self.repository.get_by_id(store_id)
        if not existing:
            return EnvelopeResponse(base=not_found_response("Store not found"))

        async with transaction(self.session_factory) as tx:
            store_repo = self.repository.with_transaction(tx)
            await store_repo.delete(store_id, get_now(), claims.full_name)

            if existing.image_file_name:
                await self.storage.remove(store_id, KIND, existing.image_file_name)

            await tx.commit()

        return EnvelopeResponse(base=success_response("Delete with SoftDelete Store Success"))
