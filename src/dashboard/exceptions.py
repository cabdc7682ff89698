"""Errors raised by the API layer, the wallet integration and the view services.

Controllers and detail loaders catch these at the point of the asynchronous
call and turn them into state plus a notification. Nothing here reaches the
rendering layer as an uncaught exception.
"""

from collections.abc import Iterable


class DashboardError(Exception):
    """Base class for all dashboard exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(DashboardError):
    """Backend unreachable, or it answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ValidationError(DashboardError):
    """A create/update payload was rejected, or is missing required fields."""

    def __init__(self, message: str, fields: Iterable[str] = ()) -> None:
        self.fields = tuple(fields)
        super().__init__(message)


class NotFoundError(DashboardError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class UserRejectedError(DashboardError):
    """The wallet owner declined to sign."""

    def __init__(self, message: str = "User rejected the signature request") -> None:
        super().__init__(message)


class NoWalletError(DashboardError):
    """A signed action was attempted without a connected wallet."""

    def __init__(self, message: str = "Please connect your wallet first") -> None:
        super().__init__(message)
