"""Receipt file validation."""

ACCEPTED_IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png"})


def file_extension(filename: str) -> str:
    """Return the lower-cased text after the last dot, or an empty string when there is none."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def is_accepted_image(filename: str | None) -> bool:
    """Check whether a filename carries one of the accepted image extensions (jpg, jpeg, png)."""
    if not filename:
        return False
    return file_extension(filename) in ACCEPTED_IMAGE_EXTENSIONS
