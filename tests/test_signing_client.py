"""
Tests for SigningServiceClient with urlopen stubbed out.
"""
import io
import json
from urllib.error import HTTPError, URLError

import pytest

import core.signing.client as client_module
from core.errors import DocumentFetchError, SignError, UploadError
from core.signing import SignRequest, SigningServiceClient, create_client
from core.signing.client import encode_multipart

BASE = "https://backend.example.com"


class FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class FakeUrlopen:
    """Records requests and replays canned responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request, timeout=None):
        self.requests.append((request, timeout))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, (dict, list)):
            response = json.dumps(response).encode("utf-8")
        return FakeResponse(response)


@pytest.fixture
def client():
    return SigningServiceClient(BASE + "/", timeout=5)


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "contract.pdf"
    path.write_bytes(b"%PDF-1.4 test")
    return str(path)


def http_error(url, code):
    return HTTPError(url, code, "error", {}, io.BytesIO(b""))


class TestUpload:

    def test_posts_multipart(self, monkeypatch, client, pdf_file):
        fake = FakeUrlopen({"pdfId": "p1", "pdfUrl": "/uploads/p1.pdf"})
        monkeypatch.setattr(client_module, "urlopen", fake)

        handle = client.upload_pdf(pdf_file)

        assert handle.pdf_id == "p1"
        assert handle.url == BASE + "/uploads/p1.pdf"
        request, timeout = fake.requests[0]
        assert request.full_url == BASE + "/api/upload-pdf"
        assert request.get_method() == "POST"
        assert timeout == 5
        assert request.get_header("Content-type").startswith("multipart/form-data; boundary=")
        assert b'name="pdf"; filename="contract.pdf"' in request.data
        assert b"%PDF-1.4 test" in request.data

    def test_absolute_pdf_url_is_kept(self, monkeypatch, client, pdf_file):
        fake = FakeUrlopen({"pdfId": "p1", "pdfUrl": "https://cdn.example.com/p1.pdf"})
        monkeypatch.setattr(client_module, "urlopen", fake)
        assert client.upload_pdf(pdf_file).url == "https://cdn.example.com/p1.pdf"

    def test_missing_fields(self, monkeypatch, client, pdf_file):
        monkeypatch.setattr(client_module, "urlopen", FakeUrlopen({"pdfId": "p1"}))
        with pytest.raises(UploadError, match="missing"):
            client.upload_pdf(pdf_file)

    def test_http_error(self, monkeypatch, client, pdf_file):
        monkeypatch.setattr(client_module, "urlopen",
                            FakeUrlopen(http_error(BASE, 500)))
        with pytest.raises(UploadError) as info:
            client.upload_pdf(pdf_file)
        assert info.value.status == 500

    def test_unreachable(self, monkeypatch, client, pdf_file):
        monkeypatch.setattr(client_module, "urlopen",
                            FakeUrlopen(URLError("connection refused")))
        with pytest.raises(UploadError, match="unreachable"):
            client.upload_pdf(pdf_file)

    def test_invalid_json(self, monkeypatch, client, pdf_file):
        monkeypatch.setattr(client_module, "urlopen", FakeUrlopen(b"<html>"))
        with pytest.raises(UploadError, match="invalid JSON"):
            client.upload_pdf(pdf_file)

    def test_missing_file(self, client, tmp_path):
        with pytest.raises(UploadError, match="Cannot read"):
            client.upload_pdf(str(tmp_path / "nope.pdf"))


class TestSign:

    def test_posts_json(self, monkeypatch, client):
        fake = FakeUrlopen({"signedPdfUrl": "/signed/p1.pdf"})
        monkeypatch.setattr(client_module, "urlopen", fake)
        request = SignRequest("p1", "data:image/png;base64,AAA", [{"type": "signature"}])

        url = client.sign_pdf(request)

        assert url == BASE + "/signed/p1.pdf"
        sent, _ = fake.requests[0]
        assert sent.full_url == BASE + "/api/sign-pdf"
        assert sent.get_header("Content-type") == "application/json"
        assert json.loads(sent.data) == request.to_dict()

    def test_missing_url(self, monkeypatch, client):
        monkeypatch.setattr(client_module, "urlopen", FakeUrlopen({}))
        with pytest.raises(SignError):
            client.sign_pdf(SignRequest("p1", "data:", []))

    def test_non_object_response(self, monkeypatch, client):
        monkeypatch.setattr(client_module, "urlopen", FakeUrlopen([1, 2]))
        with pytest.raises(SignError, match="unexpected"):
            client.sign_pdf(SignRequest("p1", "data:", []))


class TestFetch:

    def test_returns_bytes(self, monkeypatch, client):
        monkeypatch.setattr(client_module, "urlopen", FakeUrlopen(b"%PDF"))
        assert client.fetch_document(BASE + "/uploads/p1.pdf") == b"%PDF"

    def test_http_error(self, monkeypatch, client):
        monkeypatch.setattr(client_module, "urlopen", FakeUrlopen(http_error(BASE, 404)))
        with pytest.raises(DocumentFetchError) as info:
            client.fetch_document(BASE + "/uploads/p1.pdf")
        assert info.value.status == 404


def test_absolute_url(client):
    assert client.absolute_url("/a") == BASE + "/a"
    assert client.absolute_url("a") == BASE + "/a"
    assert client.absolute_url("http://other/a") == "http://other/a"


def test_encode_multipart():
    body, content_type = encode_multipart("pdf", "x.pdf", b"DATA")
    boundary = content_type.split("boundary=")[1]
    assert body.startswith(f"--{boundary}\r\n".encode())
    assert body.endswith(f"\r\n--{boundary}--\r\n".encode())
    assert b"Content-Type: application/pdf" in body


def test_create_client():
    from config import AppConfig
    client = create_client(AppConfig(backend_base_url="http://localhost:5000", request_timeout=3))
    assert client.base_url == "http://localhost:5000"
    assert client.timeout == 3
