"""Error types shared by the metadata readers."""

from __future__ import annotations

NO_VERSION_INFORMATION = "No Version Information Available"


class MetadataUnavailable(LookupError):
    """
    Raised when version metadata cannot be read.

    Covers a missing bundle file, a missing key, or a file that cannot be
    decoded. Callers of the version helper never see it: the helper replaces
    it with the placeholder text.
    """

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source

    def __str__(self) -> str:
        message = super().__str__()
        if self.source:
            return f"{message} ({self.source})"
        return message
