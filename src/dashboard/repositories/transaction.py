"""Transaction data-access layer."""

from dashboard.http.session import ApiSession, decode
from dashboard.schemas.transaction import Transaction, TransactionListResponse


async def list_transactions(
    session: ApiSession, wallet_address: str | None = None, limit: int = 20
) -> list[Transaction]:
    """Return the most recent transactions, capped at ``limit``, optionally for one wallet."""
    body = await session.get(
        "/transactions", params={"walletAddress": wallet_address, "limit": limit}
    )
    return decode(TransactionListResponse, body).transactions
