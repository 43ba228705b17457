"""
Execution Submitter
===================
Broadcasts a signed VersionedTransaction to the Solana RPC endpoint and
waits for confirmation at the Confirmed commitment level.

Once confirmed the state change is irreversible; there is no rollback.
"""

import asyncio
import time

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.core import RPCException, UnconfirmedTxError
from solana.rpc.models import TxOpts
from solders.transaction import VersionedTransaction

from config.settings import Settings
from jupiter_arb.shared.execution.errors import SubmitError
from jupiter_arb.shared.execution.execution_result import ErrorCode
from jupiter_arb.shared.system.logging import Logger


class ExecutionSubmitter:
    def __init__(
        self,
        client: AsyncClient,
        commitment: Commitment = Confirmed,
        skip_preflight: bool = None,
        confirm_timeout_s: float = None,
    ):
        self.client = client
        self.commitment = commitment
        self.skip_preflight = Settings.SKIP_PREFLIGHT if skip_preflight is None else skip_preflight
        self.confirm_timeout_s = confirm_timeout_s or Settings.CONFIRM_TIMEOUT_S

    async def submit_and_confirm(self, tx: VersionedTransaction) -> str:
        """Send and confirm; returns the transaction signature as a string."""
        start = time.time()
        opts = TxOpts(skip_preflight=self.skip_preflight, preflight_commitment=self.commitment)

        try:
            resp = await self.client.send_raw_transaction(bytes(tx), opts=opts)
        except SolanaRpcException as e:
            raise SubmitError(f"Broadcast transport error: {e.error_msg}") from e
        except (RPCException, httpx.HTTPError, OSError) as e:
            raise SubmitError(f"Broadcast rejected: {e}") from e

        sig = resp.value
        Logger.info(f"[RPC] Tx sent: {sig}")

        try:
            confirm = await asyncio.wait_for(
                self.client.confirm_transaction(sig, commitment=self.commitment),
                timeout=self.confirm_timeout_s,
            )
        except SolanaRpcException as e:
            raise SubmitError(f"Confirmation transport error for {sig}: {e.error_msg}") from e
        except (asyncio.TimeoutError, UnconfirmedTxError) as e:
            raise SubmitError(
                f"Timed out waiting for confirmation of {sig}: {e}",
                code=ErrorCode.CONFIRMATION_TIMEOUT,
            ) from e
        except (RPCException, httpx.HTTPError, OSError) as e:
            raise SubmitError(f"Confirmation failed for {sig}: {e}") from e

        statuses = confirm.value or []
        status = statuses[0] if statuses else None
        if status is not None and status.err is not None:
            raise SubmitError(
                f"Transaction {sig} failed on-chain: {status.err}",
                code=ErrorCode.ONCHAIN_FAILURE,
            )

        Logger.debug(f"[RPC] Tx confirmed: {sig} ({(time.time() - start) * 1000:.0f}ms)")
        return str(sig)
