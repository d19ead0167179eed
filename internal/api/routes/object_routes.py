"""
Object storage routes.

Thin HTTP rendering of StorageGateway: gateway responses pass through with
their status code and body unchanged.
"""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.logger import logger
from domain.results import StorageResult
from domain.value_objects import ObjectReference
from internal.api.dependencies.gateway_dependencies import get_storage_gateway
from internal.api.schemas import (
    ArchiveRequest,
    ArchiveResponse,
    MessageResponse,
    PresignedUrlResponse,
    StandardResponse,
)
from internal.api.utils import render_gateway_response, success_response
from services.storage_gateway import StorageGateway

router = APIRouter(prefix="/objects", tags=["Objects"])

PRESIGNED_RESPONSES = {
    200: {"model": PresignedUrlResponse, "description": "Presigned URL issued"},
    404: {"model": MessageResponse, "description": "Object does not exist"},
    500: {"model": MessageResponse, "description": "Signing or storage failure"},
}


def _reference(bucket: str, key: str) -> ObjectReference:
    try:
        return ObjectReference(bucket, key)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _expiry(expires_in: Optional[int]) -> int:
    return expires_in or get_settings().presigned_default_expiry_seconds


@router.get(
    "/{bucket}/presigned-get",
    summary="Presigned Download URL",
    description="Issue a time-limited GET URL for an existing object.",
    responses=PRESIGNED_RESPONSES,
)
async def presigned_get(
    bucket: str,
    key: str = Query(..., min_length=1, description="Object key"),
    expires_in: Optional[int] = Query(None, gt=0, description="Validity in seconds"),
    filename: Optional[str] = Query(
        None, description="Suggested filename for inline display"
    ),
    gateway: StorageGateway = Depends(get_storage_gateway),
) -> JSONResponse:
    ref = _reference(bucket, key)
    response = await gateway.generate_get_presigned_url(ref, _expiry(expires_in), filename)
    return render_gateway_response(response)


@router.get(
    "/{bucket}/presigned-put",
    summary="Presigned Upload URL",
    description="Issue a time-limited PUT URL. The object need not exist.",
    responses=PRESIGNED_RESPONSES,
)
async def presigned_put(
    bucket: str,
    key: str = Query(..., min_length=1, description="Object key"),
    expires_in: Optional[int] = Query(None, gt=0, description="Validity in seconds"),
    gateway: StorageGateway = Depends(get_storage_gateway),
) -> JSONResponse:
    ref = _reference(bucket, key)
    response = await gateway.generate_put_presigned_url(ref, _expiry(expires_in))
    return render_gateway_response(response)


@router.get(
    "/{bucket}/exists",
    response_model=StandardResponse,
    summary="Object Exists",
    description="Metadata-only existence probe.",
)
async def object_exists(
    bucket: str,
    key: str = Query(..., min_length=1, description="Object key"),
    gateway: StorageGateway = Depends(get_storage_gateway),
):
    ref = _reference(bucket, key)
    try:
        exists = await gateway.file_exists(ref)
    except Exception as e:
        # Existence could not be determined
        return render_gateway_response(StorageResult.from_exception(e).to_response())

    return success_response(
        message="Object lookup completed",
        data={"bucket": bucket, "key": key, "exists": exists},
    )


@router.post(
    "/{bucket}/archives",
    status_code=status.HTTP_201_CREATED,
    response_model=StandardResponse,
    summary="Create Zip Archive",
    description="Zip stored objects into a new object, streaming from store to store.",
    responses={
        404: {"model": MessageResponse, "description": "A source object does not exist"},
        500: {"model": MessageResponse, "description": "Archive could not be stored"},
        503: {"model": MessageResponse, "description": "Store temporarily unavailable"},
    },
)
async def create_archive(
    bucket: str,
    request: ArchiveRequest,
    gateway: StorageGateway = Depends(get_storage_gateway),
):
    archive_ref = _reference(bucket, request.zip_file_key)
    source_refs = [_reference(bucket, key) for key in request.source_keys]

    logger.info(f"Archive requested: {archive_ref} from {len(source_refs)} objects")
    result = await gateway.stream_archive_to_store(archive_ref, source_refs)
    if not result.ok:
        return render_gateway_response(result.to_response())

    ack = ArchiveResponse(**asdict(result.payload))
    return success_response(message="Archive stored", data=ack.model_dump())
