"""Views package: server-side HTML renderers for the pages."""

from .bills_ui import bills_ui  # noqa: F401
from .new_bill_ui import new_bill_ui  # noqa: F401
from .pages import error_page, loading_page, login_page  # noqa: F401
