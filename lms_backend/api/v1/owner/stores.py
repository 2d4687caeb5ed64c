from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query

from lms_backend.core.deps import get_current_claims
from lms_backend.schemas.auth.user import JwtClaims
from lms_backend.schemas.owner.stores import CreateStore, DetailStoreResponse, EditStore
from lms_backend.schemas.shares.base import EnvelopeResponse, IdResponse
from lms_backend.services.owner.store import StoreService

router = APIRouter(prefix="/stores", tags=["Owner Stores"])


@router.post("", response_model=IdResponse)
async def create_store(
    schema: CreateStore = Body(...),
    claims: JwtClaims = Depends(get_current_claims),
    store_service: StoreService = Depends(StoreService),
):
    return await store_service.create_store_async(claims, schema)


@router.get(
    "/{store_id}",
    response_model=DetailStoreResponse,
    response_model_exclude_unset=True,
)
async def detail_store(
    store_id: str,
    fields: Optional[List[str]] = Query(None),
    claims: JwtClaims = Depends(get_current_claims),
    store_service: StoreService = Depends(StoreService),
):
    return await store_service.detail_store_async(claims, store_id, fields)


@router.put("/{store_id}", response_model=IdResponse)
async def edit_store(
    store_id: str,
    schema: EditStore = Body(...),
    claims: JwtClaims = Depends(get_current_claims),
    store_service: StoreService = Depends(StoreService),
):
    return await store_service.edit_store_async(claims, store_id, schema)


@router.delete("/{store_id}", response_model=EnvelopeResponse)
async def delete_store(
    store_id: str,
    claims: JwtClaims = Depends(get_current_claims),
    store_service: StoreService = Depends(StoreService),
):
    return await store_service.delete_store_async(claims, store_id)
