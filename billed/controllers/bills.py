"""BillsListController: fetch, order and present the connected user's bills."""

from dataclasses import dataclass, field
from enum import StrEnum
from html import escape

from billed.controllers.ui import IconElement, PreviewModal
from billed.core.models import Bill
from billed.core.navigation import Navigator, Route
from billed.core.utils import get_logger
from billed.services.store import BillStoreClient

logger = get_logger("billed.controllers.bills")

BILL_URL_ATTRIBUTE = "data-bill-url"


class PageState(StrEnum):
    """States of the bills page."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass
class BillsResult:
    """Outcome of a bills load: the ordered bills, or the error text to display."""

    state: PageState
    bills: list[Bill] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the load succeeded."""
        return self.state is PageState.LOADED


def sort_bills_antichrono(bills: list[Bill]) -> list[Bill]:
    """Order bills by expense date, most recent first; equal dates keep their fetch order."""
    return sorted(bills, key=lambda bill: bill.date, reverse=True)


class BillsListController:
    """Drives the bills list page."""

    def __init__(self, store: BillStoreClient, navigator: Navigator) -> None:
        """Initialize the controller with its store and navigator."""
        self.store = store
        self.navigator = navigator
        self.state = PageState.IDLE

    async def load_bills(self) -> BillsResult:
        """Fetch the bills and return them newest first, or the error message the store failed with."""
        self.state = PageState.LOADING
        try:
            bills = await self.store.bills().list()
        except Exception as exc:
            logger.exception("Failed to load bills")
            self.state = PageState.ERRORED
            return BillsResult(self.state, error=str(exc))
        ordered = sort_bills_antichrono(list(bills))
        self.state = PageState.LOADED
        logger.info(f"Loaded {len(ordered)} bills")
        return BillsResult(self.state, bills=ordered)

    def handle_click_new_bill(self) -> None:
        """Go to the new-bill form."""
        self.navigator.navigate(Route.NEW_BILL)

    def handle_click_icon_eye(self, icon: IconElement, modal: PreviewModal) -> None:
        """Show the receipt behind ``icon`` in the preview modal."""
        bill_url = icon.get_attribute(BILL_URL_ATTRIBUTE) or ""
        img_width = int(modal.width * 0.5)
        modal.body = (
            '<div style="text-align: center;" class="bill-proof-container">'
            f'<img width="{img_width}" src="{escape(bill_url)}" alt="Bill" /></div>'
        )
        modal.show()
