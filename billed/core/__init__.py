"""Core package: provides models, database helpers, settings, session state, and shared utilities."""

from .db import get_db  # noqa: F401
from .errors import FileTypeError, StoreError  # noqa: F401
from .models import Bill, BillPayload, BillStatus, CreatedBill, ExpenseType, User, UserType  # noqa: F401
from .navigation import Navigator, RedirectNavigator, Route  # noqa: F401
from .settings import Settings  # noqa: F401
from .validators import is_accepted_image  # noqa: F401
