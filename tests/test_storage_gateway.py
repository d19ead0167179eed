import io
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.config import Settings
from domain.entities import ObjectMetadata, WriteAck
from domain.results import ResultKind
from domain.value_objects import ObjectReference, SignedUrlOperation, SignedUrlResult
from ports.storage import BlobStorePort, UrlSignerPort
from services.storage_gateway import StorageGateway
from tests.fakes import TrackingStream, make_s3_error

REF = ObjectReference("reports-bucket", "reports/q1.csv")
NOT_FOUND_BODY = '{"message":"The specified key does not exist in the bucket."}'


@pytest.fixture
def blob_store():
    store = MagicMock(spec=BlobStorePort)
    store.get = AsyncMock(return_value=TrackingStream(b"id,total\n1,10\n"))
    store.put = AsyncMock(return_value=WriteAck(bucket=REF.bucket, key=REF.key, etag="e1"))
    store.head = AsyncMock(return_value=ObjectMetadata(bucket=REF.bucket, key=REF.key, size=14))
    store.delete = AsyncMock(return_value=None)
    return store


@pytest.fixture
def url_signer():
    signer = MagicMock(spec=UrlSignerPort)
    signer.sign.return_value = SignedUrlResult(url="https://minio.local/reports-bucket/signed")
    return signer


@pytest.fixture
def gateway(blob_store, url_signer):
    return StorageGateway(blob_store, url_signer, MagicMock(), settings=Settings())


# get_object


@pytest.mark.asyncio
async def test_get_object_decodes_text_by_default(gateway, blob_store):
    stream = TrackingStream("café".encode("utf-8"))
    blob_store.get.return_value = stream

    assert await gateway.get_object(REF) == "café"
    assert stream.closed and stream.released


@pytest.mark.asyncio
async def test_get_object_replaces_undecodable_bytes(gateway, blob_store):
    stream = TrackingStream(b"caf\xe9 ok")
    blob_store.get.return_value = stream

    assert await gateway.get_object(REF) == "caf\ufffd ok"
    assert stream.closed and stream.released


@pytest.mark.asyncio
async def test_get_object_returns_raw_stream(gateway, blob_store):
    stream = TrackingStream(b"raw")
    blob_store.get.return_value = stream

    result = await gateway.get_object(REF, transform_response=False)

    assert result is stream
    assert not stream.closed


@pytest.mark.asyncio
async def test_get_object_applies_sync_transform(gateway):
    result = await gateway.get_object(REF, transform_fn=lambda body: body.read().upper())
    assert result == b"ID,TOTAL\n1,10\n"


@pytest.mark.asyncio
async def test_get_object_awaits_async_transform(gateway):
    async def count_lines(body):
        return body.read().count(b"\n")

    assert await gateway.get_object(REF, transform_fn=count_lines) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error", [make_s3_error("NoSuchKey", 404), ConnectionError("reset"), make_s3_error("AccessDenied", 403)]
)
async def test_get_object_returns_none_on_any_failure(gateway, blob_store, error):
    blob_store.get.side_effect = error
    assert await gateway.get_object(REF) is None


@pytest.mark.asyncio
async def test_get_object_returns_none_when_transform_fails(gateway, blob_store):
    stream = TrackingStream(b"id,total\n")
    blob_store.get.return_value = stream

    def broken(body):
        raise ValueError("not csv")

    assert await gateway.get_object(REF, transform_fn=broken) is None
    assert stream.closed and stream.released


# fetch_object


@pytest.mark.asyncio
async def test_fetch_object_distinguishes_failures(gateway, blob_store):
    result = await gateway.fetch_object(REF)
    assert result.ok
    assert result.payload == b"id,total\n1,10\n"

    blob_store.get.side_effect = make_s3_error("NoSuchKey", 404)
    assert (await gateway.fetch_object(REF)).kind is ResultKind.NOT_FOUND

    blob_store.get.side_effect = ConnectionError("reset")
    assert (await gateway.fetch_object(REF)).kind is ResultKind.TRANSIENT_FAILURE


# put_object / delete_object


@pytest.mark.asyncio
async def test_put_object_returns_store_ack(gateway, blob_store):
    ack = await gateway.put_object(REF, "id,total\n", content_type="text/csv")

    assert ack.etag == "e1"
    blob_store.put.assert_awaited_once_with(REF, "id,total\n", content_type="text/csv")


@pytest.mark.asyncio
async def test_put_object_propagates_permission_error_unchanged(gateway, blob_store):
    error = make_s3_error("AccessDenied", 403, "Access Denied.")
    blob_store.put.side_effect = error

    with pytest.raises(Exception) as excinfo:
        await gateway.put_object(REF, b"data")

    assert excinfo.value is error


@pytest.mark.asyncio
async def test_delete_object_propagates_failures(gateway, blob_store):
    error = ConnectionError("reset")
    blob_store.delete.side_effect = error

    with pytest.raises(ConnectionError):
        await gateway.delete_object(REF)


# file_exists


@pytest.mark.asyncio
async def test_file_exists_true_when_head_succeeds(gateway):
    assert await gateway.file_exists(REF) is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        make_s3_error("NoSuchKey", 404),
        make_s3_error("NotFound", 404),
        make_s3_error("UnexpectedCode", 404),
    ],
)
async def test_file_exists_false_when_not_found(gateway, blob_store, error):
    blob_store.head.side_effect = error
    assert await gateway.file_exists(REF) is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error", [make_s3_error("AccessDenied", 403), ConnectionError("reset")]
)
async def test_file_exists_propagates_other_errors(gateway, blob_store, error):
    blob_store.head.side_effect = error

    with pytest.raises(type(error)) as excinfo:
        await gateway.file_exists(REF)

    assert excinfo.value is error


# generate_get_presigned_url


@pytest.mark.asyncio
async def test_get_presigned_url_missing_object(gateway, blob_store, url_signer):
    blob_store.head.side_effect = make_s3_error("NoSuchKey", 404)

    response = await gateway.generate_get_presigned_url(REF, 900)

    assert response.status_code == 404
    assert response.body == NOT_FOUND_BODY
    url_signer.sign.assert_not_called()


@pytest.mark.asyncio
async def test_get_presigned_url_with_download_filename(gateway, url_signer):
    response = await gateway.generate_get_presigned_url(REF, 300, "My Report.csv")

    assert response.status_code == 200
    assert response.json() == {"presignedUrl": "https://minio.local/reports-bucket/signed"}

    request = url_signer.sign.call_args.args[0]
    assert request.reference == REF
    assert request.operation is SignedUrlOperation.GET
    assert request.expires_in_seconds == 300
    assert request.content_disposition == 'inline; filename="My%20Report.csv"'


@pytest.mark.asyncio
async def test_get_presigned_url_without_filename_has_no_disposition(gateway, url_signer):
    await gateway.generate_get_presigned_url(REF, 60)
    assert url_signer.sign.call_args.args[0].content_disposition is None


@pytest.mark.asyncio
async def test_get_presigned_url_existence_failure_becomes_500(gateway, blob_store, url_signer):
    blob_store.head.side_effect = make_s3_error("AccessDenied", 403, "Access Denied.")

    response = await gateway.generate_get_presigned_url(REF, 900)

    assert response.status_code == 500
    assert response.json() == {"message": "Access Denied."}
    url_signer.sign.assert_not_called()


@pytest.mark.asyncio
async def test_get_presigned_url_signing_failure_becomes_500(gateway, url_signer):
    url_signer.sign.side_effect = ValueError("expires_in_seconds must not exceed 604800 (7 days)")

    response = await gateway.generate_get_presigned_url(REF, 10**7)

    assert response.status_code == 500
    assert "7 days" in response.json()["message"]


# generate_put_presigned_url


@pytest.mark.asyncio
async def test_put_presigned_url_skips_existence_check(gateway, blob_store, url_signer):
    response = await gateway.generate_put_presigned_url(REF, 600)

    assert response.status_code == 200
    assert response.json()["presignedUrl"]
    blob_store.head.assert_not_called()

    request = url_signer.sign.call_args.args[0]
    assert request.operation is SignedUrlOperation.PUT
    assert request.download_filename is None


@pytest.mark.asyncio
async def test_put_presigned_url_never_raises(gateway, url_signer):
    response = await gateway.generate_put_presigned_url(REF, 0)
    assert response.status_code == 500
    assert response.json() == {"message": "expires_in_seconds must be positive"}

    url_signer.sign.side_effect = RuntimeError("credentials unavailable")
    response = await gateway.generate_put_presigned_url(REF, 600)
    assert response.status_code == 500
    assert response.json() == {"message": "credentials unavailable"}


# misc


def test_get_client_exposes_sdk_client(gateway, blob_store):
    assert gateway.get_client() is blob_store.client


@pytest.mark.asyncio
async def test_zip_with_invalid_key_is_reported(gateway):
    result = await gateway.generate_and_stream_zipfile_to_s3("bucket", "", "source.csv")
    assert result.kind is ResultKind.PERMANENT_FAILURE
