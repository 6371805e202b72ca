"""UI binding seam: the objects the event-binding layer hands to the controllers.

They stand in for the page elements a handler touches (the receipt file input, the submitted form, an eye
icon and the preview modal), so the controllers stay free of any particular UI framework.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass
class UploadedFile:
    """A file picked in a file input."""

    name: str
    content_type: str = "application/octet-stream"
    data: bytes = field(default=b"", repr=False)


@dataclass
class FileInput:
    """A file input and the value it currently displays."""

    files: list[UploadedFile] = field(default_factory=list)
    value: str = ""

    @classmethod
    def holding(cls, *files: UploadedFile) -> "FileInput":
        """Build an input as a browser leaves it after a selection."""
        value = f"C:\\fakepath\\{files[0].name}" if files else ""
        return cls(files=list(files), value=value)

    def clear(self) -> None:
        """Detach every selected file."""
        self.files = []
        self.value = ""


@dataclass
class SubmitEvent:
    """A form submission: the raw field values keyed by field name."""

    fields: Mapping[str, str] = field(default_factory=dict)
    default_prevented: bool = False

    def prevent_default(self) -> None:
        """Stop the navigation the form would otherwise trigger."""
        self.default_prevented = True

    def get(self, name: str, default: str = "") -> str:
        """Return a field value, or ``default`` when absent."""
        value = self.fields.get(name)
        return default if value is None else value


@dataclass
class IconElement:
    """A clickable icon and its data attributes."""

    attributes: dict[str, str] = field(default_factory=dict)

    def get_attribute(self, name: str) -> str | None:
        """Return an attribute value, or ``None``."""
        return self.attributes.get(name)


@dataclass
class PreviewModal:
    """The modal surface used to preview a receipt."""

    width: int = 800
    body: str = ""
    shown: bool = False

    def show(self) -> None:
        """Display the modal."""
        self.shown = True
