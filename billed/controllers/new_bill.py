"""NewBillController: receipt selection and new-bill submission.

The controller checks the receipt picked in the file input, keeps it until the form is submitted, then
builds the submission payload from the form fields and sends it to the bill store. A receipt that is not a
jpg, jpeg or png image is rejected on selection: the input is cleared and an inline message is shown.
"""

from pydantic import ValidationError

from billed.controllers.ui import FileInput, SubmitEvent, UploadedFile
from billed.core.errors import FileTypeError
from billed.core.formatting import parse_int
from billed.core.models import BillPayload, CreatedBill
from billed.core.navigation import Navigator, Route
from billed.core.session import UserSession
from billed.core.utils import get_logger
from billed.core.validators import is_accepted_image
from billed.services.store import BillStoreClient

logger = get_logger("billed.controllers.new_bill")

FILE_TYPE_MESSAGES = {
    "fr": "Ce type de fichier n'est pas autorisé (jpg, jpeg ou png uniquement)",
    "en": "This file type is not allowed (jpg, jpeg or png only)",
}
INVALID_FIELDS_MESSAGES = {
    "fr": "Champs invalides : {fields}",
    "en": "Invalid fields: {fields}",
}
FORM_FIELD_NAMES = {
    "type": "expense-type",
    "name": "expense-name",
    "amount": "amount",
    "date": "datepicker",
    "vat": "vat",
    "pct": "pct",
    "commentary": "commentary",
}
DEFAULT_PCT = 20


class NewBillController:
    """Drives the new-bill form."""

    form_data_key = "file"

    def __init__(
        self,
        store: BillStoreClient,
        navigator: Navigator,
        session: UserSession | None = None,
        locale: str = "fr",
    ) -> None:
        """Initialize the controller with its store, navigator, user session and message locale."""
        self.store = store
        self.navigator = navigator
        self.session = session
        self.locale = locale
        self.file: UploadedFile | None = None
        self.file_name: str | None = None
        self.error_message: str | None = None

    @property
    def file_type_message(self) -> str:
        """Localized message shown when a receipt is rejected."""
        return FILE_TYPE_MESSAGES.get(self.locale, FILE_TYPE_MESSAGES["fr"])

    def on_file_selected(self, file_input: FileInput) -> None:
        """Accept or reject the receipt currently held by ``file_input``."""
        if not file_input.files:
            self.file = None
            self.file_name = None
            return
        selected = file_input.files[0]
        try:
            self._check_file(selected)
        except FileTypeError as exc:
            logger.warning(str(exc))
            file_input.clear()
            self.file = None
            self.file_name = None
            self.error_message = self.file_type_message
            return
        self.file = selected
        self.file_name = selected.name
        self.error_message = None
        logger.info(f"Receipt accepted: {selected.name} ({selected.content_type})")

    def _check_file(self, selected: UploadedFile) -> None:
        if not is_accepted_image(selected.name):
            raise FileTypeError(selected.name)

    def invalid_fields_message(self, exc: ValidationError) -> str:
        """Localized message naming the form fields a rejected payload could not read."""
        names = []
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            name = FORM_FIELD_NAMES.get(field, field)
            if name not in names:
                names.append(name)
        template = INVALID_FIELDS_MESSAGES.get(self.locale, INVALID_FIELDS_MESSAGES["fr"])
        return template.format(fields=", ".join(names))

    def build_payload(self, event: SubmitEvent) -> BillPayload:
        """Assemble the submission payload from the form fields and the accepted receipt."""
        return BillPayload(
            email=self.session.email if self.session else None,
            type=event.get("expense-type"),
            name=event.get("expense-name"),
            amount=parse_int(event.get("amount"), 0),
            date=event.get("datepicker"),
            vat=parse_int(event.get("vat")),
            pct=parse_int(event.get("pct"), DEFAULT_PCT) or DEFAULT_PCT,
            commentary=event.get("commentary"),
            file_name=self.file_name,
            file_content_type=self.file.content_type if self.file else None,
            file_data=self.file.data if self.file else b"",
        )

    async def on_submit(self, event: SubmitEvent) -> CreatedBill:
        """Submit the form to the store, then go back to the bills list.

        Store failures are logged and re-raised; the caller renders them on the bills page.
        """
        event.prevent_default()
        payload = self.build_payload(event)
        logger.info(f"Submitting bill '{payload.name}' ({payload.type}) for {payload.email}")
        try:
            created = await self.store.bills().create(payload)
        except Exception:
            logger.exception("Bill submission failed")
            raise
        logger.info(f"Bill created: id={created.id}, file_url={created.file_url}")
        self.navigator.navigate(Route.BILLS)
        return created
