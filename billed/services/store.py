"""Bill store: the persistence-facing collaborator consumed by the controllers.

``BillStoreClient`` is the interface the controllers depend on: ``store.bills()`` returns a resource with
asynchronous ``list``, ``create`` and ``update`` calls. ``SqlBillStore`` implements it with a SQLAlchemy
session for the bill rows and a ``FileService`` for the receipt images; the blocking DB and S3 calls run in
the threadpool so the event loop keeps serving other requests. Every backend failure is raised as
``StoreError`` so callers can show its message ("Erreur 404", "Erreur 500") as-is.
"""

from __future__ import annotations

import uuid
from typing import Protocol

from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from billed.core.db import BillRecord
from billed.core.errors import StoreError
from billed.core.models import Bill, BillPayload, BillStatus, CreatedBill
from billed.core.utils import get_logger, utcnow_iso
from billed.services.file_service import FileService

logger = get_logger("billed.store")


class BillsResource(Protocol):
    """Operations on the bills collection."""

    async def list(self) -> list[Bill]:
        """Return the bills visible to the caller, in storage order."""

    async def create(self, payload: BillPayload) -> CreatedBill:
        """Create a bill from a submission payload."""

    async def update(self, bill: Bill) -> Bill:
        """Replace the stored fields of an existing bill."""


class BillStoreClient(Protocol):
    """Entry point to the store, as consumed by the controllers."""

    def bills(self) -> BillsResource:
        """Return the bills resource."""


class SqlBillStore:
    """Bill store backed by SQLAlchemy rows and S3 receipts.

    ``owner_email`` scopes ``list`` to one user's bills; ``None`` lists every bill.
    """

    def __init__(self, session: Session, file_service: FileService, owner_email: str | None = None) -> None:
        """Initialize the store with a DB session, a receipt file service and an optional owner scope."""
        self.session = session
        self.file_service = file_service
        self.owner_email = owner_email

    def bills(self) -> "SqlBillsResource":
        """Return the bills resource."""
        return SqlBillsResource(self)


class SqlBillsResource:
    """Bills resource of a ``SqlBillStore``."""

    def __init__(self, store: SqlBillStore) -> None:
        """Bind the resource to its store."""
        self.store = store

    @property
    def session(self) -> Session:
        """The store's DB session."""
        return self.store.session

    async def list(self) -> list[Bill]:
        """Return the stored bills, optionally scoped to the store's owner."""
        return await run_in_threadpool(self._list)

    async def create(self, payload: BillPayload) -> CreatedBill:
        """Store the receipt (if any) and insert a pending bill."""
        return await run_in_threadpool(self._create, payload)

    async def update(self, bill: Bill) -> Bill:
        """Overwrite an existing bill's fields; unknown ids raise a 404 store error."""
        return await run_in_threadpool(self._update, bill)

    def _list(self) -> list[Bill]:
        stmt = select(BillRecord)
        if self.store.owner_email:
            stmt = stmt.where(BillRecord.email == self.store.owner_email)
        try:
            records = self.session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            logger.exception("Failed to list bills")
            raise StoreError.internal() from exc
        logger.info(f"Listed {len(records)} bills")
        return [record.to_bill() for record in records]

    def _create(self, payload: BillPayload) -> CreatedBill:
        bill_id = uuid.uuid4().hex
        key = None
        file_url = None
        if payload.file_name:
            try:
                key = self.store.file_service.save_receipt(
                    bill_id, payload.file_name, payload.file_data, payload.file_content_type
                )
            except (BotoCoreError, ClientError) as exc:
                logger.exception(f"Failed to store receipt {payload.file_name}")
                raise StoreError.internal() from exc
            file_url = self.store.file_service.url_for(key)
        record = BillRecord(
            id=bill_id,
            email=payload.email,
            type=str(payload.type),
            name=payload.name,
            amount=payload.amount,
            date=payload.date,
            vat=payload.vat,
            pct=payload.pct,
            commentary=payload.commentary,
            file_url=file_url,
            file_name=payload.file_name,
            status=str(BillStatus.PENDING),
            created_at=utcnow_iso(),
        )
        try:
            self.session.add(record)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception(f"Failed to insert bill {bill_id}")
            if key:
                self._discard_receipt(key)
            raise StoreError.internal() from exc
        logger.info(f"Created bill {bill_id} for {payload.email}")
        return CreatedBill(id=bill_id, file_url=file_url, file_name=payload.file_name, key=bill_id)

    def _discard_receipt(self, key: str) -> None:
        try:
            self.store.file_service.delete_file(key)
        except (BotoCoreError, ClientError):
            logger.exception(f"Orphaned receipt left in storage: {key}")
        else:
            logger.info(f"Deleted receipt of unsaved bill: {key}")

    def _update(self, bill: Bill) -> Bill:
        try:
            record = self.session.get(BillRecord, bill.id)
        except SQLAlchemyError as exc:
            logger.exception(f"Failed to load bill {bill.id}")
            raise StoreError.internal() from exc
        if record is None:
            logger.warning(f"Bill not found: {bill.id}")
            raise StoreError.not_found()
        for field in ("email", "name", "amount", "date", "vat", "pct", "commentary", "file_url", "file_name"):
            setattr(record, field, getattr(bill, field))
        record.type = str(bill.type)
        record.status = str(bill.status)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception(f"Failed to update bill {bill.id}")
            raise StoreError.internal() from exc
        logger.info(f"Updated bill {bill.id}")
        return record.to_bill()
