"""API integration tests for the Billed pages."""

from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import NoCredentialsError

from billed.api.dependencies import get_file_service
from billed.core.errors import StoreError
from billed.services.store import SqlBillsResource
from main import app

HTTP_200_OK = 200
HTTP_303_SEE_OTHER = 303
HTTP_400_BAD_REQUEST = 400
HTTP_500_INTERNAL_SERVER_ERROR = 500

BILL_FORM = {
    "expense-type": "Transports",
    "expense-name": "Déplacement professionnel",
    "amount": "300",
    "datepicker": "2024-10-27",
    "vat": "10",
    "pct": "20",
    "commentary": "Voyage pour conférence",
}


def test_health(client) -> None:
    """Test the /health endpoint returns status ok."""
    response = client.get("/health")
    if response.status_code != HTTP_200_OK:
        msg = f"Expected status {HTTP_200_OK}, got {response.status_code}"
        raise AssertionError(msg)
    if response.json() != {"status": "ok"}:
        msg = f"Expected response {{'status': 'ok'}}, got {response.json()}"
        raise AssertionError(msg)


def test_scalar_docs(client) -> None:
    """Test the /scalar endpoint returns OpenAPI docs."""
    response = client.get("/scalar")
    if response.status_code != HTTP_200_OK:
        msg = f"Expected status {HTTP_200_OK}, got {response.status_code}"
        raise AssertionError(msg)
    if "openapi" not in response.text:
        msg = "Expected 'openapi' in response text"
        raise AssertionError(msg)


def test_bills_page_requires_session(client) -> None:
    """Without a session the bills page redirects to the login page."""
    response = client.get("/employee/bills", follow_redirects=False)
    if response.status_code != HTTP_303_SEE_OTHER or response.headers["location"] != "/":
        msg = f"Expected a redirect to /, got {response.status_code} {response.headers.get('location')}"
        raise AssertionError(msg)


def test_submit_then_list(employee_client, file_service) -> None:
    """A submitted bill shows up on the bills page."""
    files = {"file": ("image.png", b"image", "image/png")}
    response = employee_client.post("/employee/bill/new", data=BILL_FORM, files=files, follow_redirects=False)
    if response.status_code != HTTP_303_SEE_OTHER or response.headers["location"] != "/employee/bills":
        msg = f"Expected a redirect to the bills page, got {response.status_code}"
        raise AssertionError(msg)
    file_service.save_receipt.assert_called_once()

    page = employee_client.get("/employee/bills")
    for text in ("Mes notes de frais", "Déplacement professionnel", "2024-10-27", "En attente"):
        if text not in page.text:
            msg = f"Expected {text!r} on the bills page"
            raise AssertionError(msg)


def test_submit_rejects_invalid_receipt(employee_client, file_service) -> None:
    """A PDF receipt re-renders the form with the not-allowed message."""
    files = {"file": ("document.pdf", b"doc", "application/pdf")}
    response = employee_client.post("/employee/bill/new", data=BILL_FORM, files=files)
    if response.status_code != HTTP_400_BAD_REQUEST:
        msg = f"Expected status {HTTP_400_BAD_REQUEST}, got {response.status_code}"
        raise AssertionError(msg)
    if "fichier n&#x27;est pas autorisé" not in response.text:
        msg = "Expected the file type message"
        raise AssertionError(msg)
    file_service.save_receipt.assert_not_called()


@pytest.mark.parametrize("status", [404, 500])
def test_list_failure_shows_error(employee_client, monkeypatch, status: int) -> None:
    """Store failures while listing are shown verbatim."""

    async def failing_list(self):
        raise StoreError(status)

    monkeypatch.setattr(SqlBillsResource, "list", failing_list)
    response = employee_client.get("/employee/bills")
    if f"Erreur {status}" not in response.text:
        msg = f"Expected 'Erreur {status}' on the page"
        raise AssertionError(msg)


@pytest.mark.parametrize("status", [404, 500])
def test_create_failure_shows_error(employee_client, monkeypatch, status: int) -> None:
    """Store failures while submitting are shown verbatim on the bills page."""

    async def failing_create(self, payload):
        raise StoreError(status)

    monkeypatch.setattr(SqlBillsResource, "create", failing_create)
    response = employee_client.post("/employee/bill/new", data=BILL_FORM)
    if response.status_code != status or f"Erreur {status}" not in response.text:
        msg = f"Expected 'Erreur {status}' with status {status}, got {response.status_code}"
        raise AssertionError(msg)


def test_new_bill_button_redirects(employee_client) -> None:
    """The new-bill button leads to the form."""
    response = employee_client.post("/employee/bills/new-bill", follow_redirects=False)
    if response.headers.get("location") != "/employee/bill/new":
        msg = f"Expected a redirect to the form, got {response.headers.get('location')}"
        raise AssertionError(msg)
    form = employee_client.get("/employee/bill/new")
    if "Envoyer une note de frais" not in form.text:
        msg = "Expected the new-bill form"
        raise AssertionError(msg)


def test_preview_fragment(employee_client) -> None:
    """The preview endpoint returns the modal body for a receipt URL."""
    response = employee_client.get("/employee/bills/preview", params={"bill_url": "/receipts/x.png", "width": 400})
    if 'src="/receipts/x.png"' not in response.text or 'width="200"' not in response.text:
        msg = f"Unexpected preview: {response.text}"
        raise AssertionError(msg)


def test_download_receipt(client) -> None:
    """Stored receipts are served with their content type."""
    response = client.get("/receipts/receipts/abc/image.png")
    if response.status_code != HTTP_200_OK or response.content != b"image":
        msg = f"Unexpected receipt response: {response.status_code}"
        raise AssertionError(msg)
    if response.headers["content-type"] != "image/png":
        msg = f"Unexpected content type: {response.headers['content-type']}"
        raise AssertionError(msg)


def test_logout_closes_session(employee_client) -> None:
    """After logout the bills page is no longer reachable."""
    employee_client.post("/logout", follow_redirects=False)
    response = employee_client.get("/employee/bills", follow_redirects=False)
    if response.status_code != HTTP_303_SEE_OTHER:
        msg = f"Expected a redirect after logout, got {response.status_code}"
        raise AssertionError(msg)


@pytest.fixture
def unreachable_s3_client(employee_client):
    """Logged-in client using the real receipt service over an S3 that rejects every call."""
    s3 = Mock()
    s3.head_bucket.side_effect = NoCredentialsError()
    s3.put_object.side_effect = NoCredentialsError()
    app.dependency_overrides.pop(get_file_service, None)
    get_file_service.cache_clear()
    with patch("billed.services.s3_file_service.boto3.client", return_value=s3):
        yield employee_client, s3
    get_file_service.cache_clear()


def test_bills_page_works_without_s3(unreachable_s3_client) -> None:
    """Listing bills never needs S3, even when it cannot be reached."""
    client, s3 = unreachable_s3_client
    response = client.get("/employee/bills")
    if response.status_code != HTTP_200_OK or "Mes notes de frais" not in response.text:
        msg = f"Expected the bills page, got {response.status_code}"
        raise AssertionError(msg)
    s3.head_bucket.assert_not_called()


def test_submit_with_unreachable_s3_shows_error(unreachable_s3_client) -> None:
    """A receipt that cannot be stored fails the submission with ``Erreur 500``."""
    client, _ = unreachable_s3_client
    files = {"file": ("image.png", b"image", "image/png")}
    response = client.post("/employee/bill/new", data=BILL_FORM, files=files, follow_redirects=False)
    if response.status_code != HTTP_500_INTERNAL_SERVER_ERROR or "Erreur 500" not in response.text:
        msg = f"Expected 'Erreur 500' with status 500, got {response.status_code}"
        raise AssertionError(msg)


def test_submit_with_invalid_fields_keeps_the_form(employee_client, file_service) -> None:
    """Unreadable fields re-render the form with their names and what the user entered."""
    response = employee_client.post("/employee/bill/new", data={**BILL_FORM, "datepicker": ""})
    if response.status_code != HTTP_400_BAD_REQUEST:
        msg = f"Expected status {HTTP_400_BAD_REQUEST}, got {response.status_code}"
        raise AssertionError(msg)
    for text in (
        'data-testid="form-error">Champs invalides : datepicker<',
        'value="Déplacement professionnel"',
        "<option selected>Transports</option>",
        "Voyage pour conférence</textarea>",
    ):
        if text not in response.text:
            msg = f"Expected {text!r} in the re-rendered form"
            raise AssertionError(msg)
    file_service.save_receipt.assert_not_called()
