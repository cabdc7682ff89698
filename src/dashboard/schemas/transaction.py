"""Blockchain transaction payloads."""

from typing import Final

from pydantic import Field

from dashboard.schemas.base import ApiModel

TRANSACTION_STATUSES: Final = ("confirmed", "pending")
TRANSACTION_TYPES: Final = ("consent_approval", "data_access")


class Transaction(ApiModel):
    id: str
    type: str
    status: str
    # "from" is a keyword, so both ends of the transfer get explicit aliases
    from_address: str | None = Field(default=None, alias="from")
    to_address: str | None = Field(default=None, alias="to")
    amount: float | None = None
    currency: str | None = None
    block_number: int | None = None
    blockchain_tx_hash: str | None = None
    timestamp: str | None = None


class TransactionListResponse(ApiModel):
    """Body of ``GET /transactions``."""

    transactions: list[Transaction] = Field(default_factory=list)
