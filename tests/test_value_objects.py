import pytest
from urllib.parse import unquote

from domain.value_objects import (
    ObjectReference,
    SignedUrlOperation,
    SignedUrlRequest,
    encode_uri_component,
)


def _request(filename=None, expires=300):
    return SignedUrlRequest(
        reference=ObjectReference("reports", "q1.csv"),
        operation=SignedUrlOperation.GET,
        expires_in_seconds=expires,
        download_filename=filename,
    )


def test_content_disposition_encodes_spaces():
    assert _request("My Report.csv").content_disposition == 'inline; filename="My%20Report.csv"'


def test_content_disposition_absent_without_filename():
    assert _request().content_disposition is None
    assert _request("").content_disposition is None


@pytest.mark.parametrize(
    "name",
    ['quarter "final" report.csv', "résumé 2024.pdf", "日本語.txt", "a+b&c=d?.csv"],
)
def test_filename_encoding_round_trips(name):
    encoded = encode_uri_component(name)
    assert '"' not in encoded
    assert " " not in encoded
    assert unquote(encoded) == name


def test_encoding_matches_uri_component_safe_set():
    assert encode_uri_component("it's (v1)!~*.csv") == "it's%20(v1)!~*.csv"


def test_object_reference_requires_bucket_and_key():
    with pytest.raises(ValueError):
        ObjectReference("", "key")
    with pytest.raises(ValueError):
        ObjectReference("bucket", "")


def test_object_reference_is_immutable_value():
    ref = ObjectReference("bucket", "path/to/key")
    assert ref == ObjectReference("bucket", "path/to/key")
    assert str(ref) == "bucket/path/to/key"
    with pytest.raises(Exception):
        ref.key = "other"


@pytest.mark.parametrize("expires", [0, -5])
def test_signed_url_request_rejects_non_positive_expiry(expires):
    with pytest.raises(ValueError):
        _request(expires=expires)


def test_signed_url_request_rejects_non_integer_expiry():
    with pytest.raises(TypeError):
        _request(expires=1.5)
    with pytest.raises(TypeError):
        _request(expires=True)
