"""Controllers package: the page controllers driven by the UI binding layer."""

from .bills import BillsListController, BillsResult, PageState  # noqa: F401
from .new_bill import NewBillController  # noqa: F401
