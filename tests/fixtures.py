"""Bill fixtures and store doubles shared by the tests."""

import datetime
from unittest.mock import AsyncMock, Mock

from billed.core.models import Bill

FIXTURE_BILLS = [
    {
        "id": "47qAXb6fIm2zOKkLzMro",
        "email": "a@a",
        "type": "Hôtel et logement",
        "name": "encore",
        "amount": 400,
        "date": "2004-04-04",
        "vat": 80,
        "pct": 20,
        "commentary": "séminaire billed",
        "file_url": "https://test.storage.tld/v0/b/billable-677b6.a…f-1.jpg",
        "file_name": "preview-facture-free-201801-pdf-1.jpg",
        "status": "pending",
    },
    {
        "id": "BeKy5Mo4jkmdfPGYpTxZ",
        "email": "a@a",
        "type": "Transports",
        "name": "test1",
        "amount": 100,
        "date": "2001-01-01",
        "vat": None,
        "pct": 20,
        "commentary": "plop",
        "file_url": "https://test.storage.tld/v0/b/billable-677b6.a…61.jpeg",
        "file_name": "1592770761.jpeg",
        "status": "refused",
    },
    {
        "id": "UIUZtnPQvnbFnB0ozvJh",
        "email": "a@a",
        "type": "Services en ligne",
        "name": "test3",
        "amount": 300,
        "date": "2003-03-03",
        "vat": 60,
        "pct": 20,
        "commentary": "",
        "file_url": "https://test.storage.tld/v0/b/billable-677b6.a…f-1.jpg",
        "file_name": "facture-client-php-exportee-dans-document-pdf-enregistre-sur-disque-dur.png",
        "status": "accepted",
    },
    {
        "id": "qcCK3SzECmaZAGRrHjaC",
        "email": "a@a",
        "type": "Restaurants et bars",
        "name": "test2",
        "amount": 200,
        "date": "2002-02-02",
        "vat": 40,
        "pct": 20,
        "commentary": "test2",
        "file_url": "https://test.storage.tld/v0/b/billable-677b6.a…f-1.jpg",
        "file_name": "preview-facture-free-201801-pdf-1.jpg",
        "status": "refused",
    },
]


def fixture_bills() -> list[Bill]:
    """Return fresh copies of the fixture bills, in storage order."""
    return [Bill.model_validate(data) for data in FIXTURE_BILLS]


def make_bill(bill_id: str, date: str, **overrides: object) -> Bill:
    """Build a minimal bill dated ``date``."""
    data = {
        "id": bill_id,
        "type": "Transports",
        "name": bill_id,
        "amount": 10,
        "date": datetime.date.fromisoformat(date),
    }
    data.update(overrides)
    return Bill.model_validate(data)


def mock_store(bills: list[Bill] | None = None, list_error: Exception | None = None) -> Mock:
    """Build a store whose ``bills()`` resource has async ``list``/``create``/``update`` mocks."""
    resource = Mock()
    resource.list = AsyncMock(side_effect=list_error, return_value=bills or [])
    resource.create = AsyncMock()
    resource.update = AsyncMock()
    store = Mock()
    store.bills = Mock(return_value=resource)
    return store


