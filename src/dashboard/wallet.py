"""Wallet signing seam.

The dashboard never holds keys. A ``Signer`` (browser wallet bridge, hardware
wallet, test double) turns a message into a signature or raises
``UserRejectedError``.
"""

from typing import Protocol

from dashboard.exceptions import NoWalletError


class Signer(Protocol):
    async def sign_message(self, message: str) -> str: ...


def consent_message(purpose: str, patient_code: str) -> str:
    """Text the wallet owner signs when granting a consent."""
    return f"I consent to: {purpose} for patient: {patient_code}"


def require_wallet(account: str | None, signer: Signer | None) -> tuple[str, Signer]:
    """Return the connected account and signer, or raise ``NoWalletError``."""
    if not account or signer is None:
        raise NoWalletError()
    return account, signer
