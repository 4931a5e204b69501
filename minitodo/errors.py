"""Exception hierarchy shared by storage, services and UI."""
from typing import Any, Dict, Optional


class MinitodoError(Exception):
    """Base class for all application errors."""
    pass


class ValidationError(MinitodoError):
    """Raised when a user request is rejected before any state change.

    Carries an i18n key (and format arguments) so the UI can show the
    message in the current language.
    """

    def __init__(self, message_key: str, params: Optional[Dict[str, Any]] = None) -> None:
        self.message_key = message_key
        self.params = params or {}
        super().__init__(message_key)


class StorageError(MinitodoError):
    """Custom exception for blob store writes."""
    pass
