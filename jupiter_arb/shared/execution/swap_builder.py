"""
Swap Transaction Builder/Signer
===============================
Turns a Jupiter quote into a signed VersionedTransaction for the bot's
wallet:

    JupiterClient.swap_transaction() -> bincode bytes
        -> VersionedTransaction.from_bytes()
        -> VersionedTransaction(message, [keypair])

Failures raise BuildError and are not retried here.
"""

from solders.transaction import VersionedTransaction

from jupiter_arb.shared.execution.errors import BuildError
from jupiter_arb.shared.execution.execution_result import ErrorCode
from jupiter_arb.shared.execution.models import QuoteResponse
from jupiter_arb.shared.execution.wallet import Wallet
from jupiter_arb.shared.infrastructure.jupiter_client import JupiterClient


class SwapTransactionBuilder:
    def __init__(self, jupiter: JupiterClient, wallet: Wallet):
        self.jupiter = jupiter
        self.wallet = wallet

    @staticmethod
    def decode(raw_tx: bytes) -> VersionedTransaction:
        try:
            return VersionedTransaction.from_bytes(raw_tx)
        except Exception as e:
            raise BuildError(f"Undecodable swap transaction: {e}") from e

    def sign(self, tx: VersionedTransaction) -> VersionedTransaction:
        """Re-create the transaction signed by the wallet keypair."""
        message = tx.message
        required = message.header.num_required_signatures
        signers = list(message.account_keys[:required])
        if self.wallet.pubkey not in signers:
            raise BuildError(
                f"Wallet {self.wallet.get_public_key()} is not a required signer of the swap transaction",
                code=ErrorCode.SIGNING_FAILED,
            )
        if required != 1:
            # Jupiter swaps are single-signer; anything else cannot be completed here
            raise BuildError(
                f"Swap transaction requires {required} signers",
                code=ErrorCode.SIGNING_FAILED,
            )

        try:
            return VersionedTransaction(message, [self.wallet.keypair])
        except Exception as e:
            raise BuildError(f"Signing failed: {e}", code=ErrorCode.SIGNING_FAILED) from e

    async def build_and_sign(self, quote: QuoteResponse) -> VersionedTransaction:
        raw_tx = await self.jupiter.swap_transaction(quote, self.wallet.get_public_key())
        return self.sign(self.decode(raw_tx))
