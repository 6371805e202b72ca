"""Route table and navigator used by the controllers."""

from enum import StrEnum
from typing import Protocol


class Route(StrEnum):
    """Logical routes the controllers can navigate to, mapped to their URL paths."""

    LOGIN = "/"
    BILLS = "/employee/bills"
    NEW_BILL = "/employee/bill/new"


class Navigator(Protocol):
    """Anything able to replace the current view with the one behind a route."""

    def navigate(self, route: Route) -> None:
        """Show the view for ``route``."""


class RedirectNavigator:
    """Navigator for the HTTP layer: remembers the last requested route so the response can redirect to it."""

    def __init__(self) -> None:
        """Start with no pending navigation."""
        self.location: Route | None = None

    def navigate(self, route: Route) -> None:
        """Record ``route`` as the redirect target."""
        self.location = Route(route)
