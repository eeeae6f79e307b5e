import typing
from pathlib import Path

if typing.TYPE_CHECKING:
    from uuid import UUID


class MeditimerError(Exception):
    """Base exception for all meditimer errors."""


class TemplateNotFoundError(KeyError, MeditimerError):
    """Raised when a template id or name is not present in the store."""

    def __init__(self, key: "UUID | str") -> None:
        super().__init__(f"No timer template found for {key!r}")
        self.key = key

    def __str__(self) -> str:
        # KeyError quotes its argument, we want the plain message
        return str(self.args[0])


class DuplicateTemplateError(ValueError, MeditimerError):
    """Raised when adding a template whose id is already stored."""

    def __init__(self, template_id: "UUID") -> None:
        super().__init__(f"Timer template {template_id} already exists, use replace() to edit it")
        self.template_id = template_id


class TimerNotActiveError(KeyError, MeditimerError):
    """Raised when an operation requires a started timer that does not exist."""

    def __init__(self, template_id: "UUID") -> None:
        super().__init__(f"Timer {template_id} is not active")
        self.template_id = template_id

    def __str__(self) -> str:
        return str(self.args[0])


class StoreError(MeditimerError):
    """Raised when the key-value store cannot be used."""


class GatewayError(MeditimerError):
    """Base exception for audio and notification gateway failures.

    Gateway failures are never fatal, the engine wraps every gateway in a best-effort adapter.
    """


class SoundAssetNotFoundError(GatewayError, FileNotFoundError):
    """Raised when the asset file for a sound option does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Sound asset not found: {path}")
        self.path = path
