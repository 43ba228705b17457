"""
Mock Builder / Submitter
========================
Record call order across both execution collaborators.
"""

from typing import Dict, List, Optional

from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import VersionedTransaction

from jupiter_arb.shared.execution.models import QuoteResponse


def make_swap_tx(payer: Pubkey, signer: Optional[Keypair] = None) -> VersionedTransaction:
    """
    Stand-in for a Jupiter swap transaction: a v0 message paid by `payer`.
    Unsigned (default signature) unless `signer` is given.
    """
    ix = transfer(TransferParams(from_pubkey=payer, to_pubkey=Pubkey.new_unique(), lamports=1_000))
    msg = MessageV0.try_compile(
        payer=payer,
        instructions=[ix],
        address_lookup_table_accounts=[],
        recent_blockhash=Hash.default(),
    )
    if signer is not None:
        return VersionedTransaction(msg, [signer])
    return VersionedTransaction.populate(msg, [Signature.default()])


class RecordingBuilder:
    """Fake SwapTransactionBuilder. `failures` maps input mint -> exception."""

    def __init__(self, events: list, failures: Dict[str, Exception] = None):
        self.events = events
        self.failures = failures or {}
        self.built: List[QuoteResponse] = []

    async def build_and_sign(self, quote: QuoteResponse):
        self.events.append(("build", quote.input_mint))
        if quote.input_mint in self.failures:
            raise self.failures[quote.input_mint]
        self.built.append(quote)
        return quote.input_mint  # opaque "transaction" for the submitter


class RecordingSubmitter:
    """Fake ExecutionSubmitter. `failures` maps the opaque tx -> exception."""

    def __init__(self, events: list, failures: Dict[str, Exception] = None):
        self.events = events
        self.failures = failures or {}
        self.submitted: List[str] = []

    async def submit_and_confirm(self, tx) -> str:
        self.events.append(("submit", tx))
        if tx in self.failures:
            raise self.failures[tx]
        self.submitted.append(tx)
        return f"SIG_{len(self.submitted)}_{tx[:4]}"
