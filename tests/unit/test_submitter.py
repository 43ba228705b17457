"""
Execution Submitter Unit Tests
==============================
Broadcast + confirmation against a mock RPC client.
"""

import pytest
from solana.rpc.commitment import Confirmed
from solana.rpc.core import RPCException, UnconfirmedTxError

from jupiter_arb.shared.execution.errors import SubmitError
from jupiter_arb.shared.execution.execution_result import ErrorCode
from jupiter_arb.shared.execution.submitter import ExecutionSubmitter
from tests.mocks.mock_rpc import MockRpcClient, transport_error
from tests.mocks.mock_swap import make_swap_tx


@pytest.fixture
def signed_tx(keypair):
    return make_swap_tx(keypair.pubkey(), signer=keypair)


@pytest.fixture
def rpc():
    return MockRpcClient()


class TestSubmitAndConfirm:

    @pytest.mark.asyncio
    async def test_returns_signature(self, rpc, signed_tx):
        submitter = ExecutionSubmitter(rpc, skip_preflight=False, confirm_timeout_s=1.0)

        sig = await submitter.submit_and_confirm(signed_tx)

        assert sig == str(signed_tx.signatures[0])
        assert rpc.sent == [bytes(signed_tx)]
        assert rpc.confirmed[0][1] == Confirmed

    @pytest.mark.asyncio
    async def test_preflight_options(self, rpc, signed_tx):
        submitter = ExecutionSubmitter(rpc, skip_preflight=True, confirm_timeout_s=1.0)

        await submitter.submit_and_confirm(signed_tx)

        opts = rpc.sent_opts[0]
        assert opts.skip_preflight is True
        assert opts.preflight_commitment == Confirmed

    @pytest.mark.asyncio
    async def test_broadcast_rejected(self, rpc, signed_tx):
        rpc.send_error = RPCException("Transaction simulation failed: insufficient funds")
        submitter = ExecutionSubmitter(rpc, confirm_timeout_s=1.0)

        with pytest.raises(SubmitError, match="insufficient funds") as exc:
            await submitter.submit_and_confirm(signed_tx)
        assert exc.value.code == ErrorCode.SUBMIT_FAILED
        assert rpc.confirmed == []

    @pytest.mark.asyncio
    async def test_broadcast_transport_error(self, rpc, signed_tx):
        rpc.send_error = transport_error("SendRawTransaction")
        submitter = ExecutionSubmitter(rpc, confirm_timeout_s=1.0)

        with pytest.raises(SubmitError, match="SendRawTransaction") as exc:
            await submitter.submit_and_confirm(signed_tx)
        assert exc.value.code == ErrorCode.SUBMIT_FAILED
        assert rpc.confirmed == []

    @pytest.mark.asyncio
    async def test_confirmation_transport_error(self, rpc, signed_tx):
        rpc.confirm_error = transport_error("GetSignatureStatuses")
        submitter = ExecutionSubmitter(rpc, confirm_timeout_s=1.0)

        with pytest.raises(SubmitError, match="GetSignatureStatuses") as exc:
            await submitter.submit_and_confirm(signed_tx)
        assert exc.value.code == ErrorCode.SUBMIT_FAILED
        assert rpc.sent == [bytes(signed_tx)]

    @pytest.mark.asyncio
    async def test_confirmation_timeout(self, rpc, signed_tx):
        rpc.confirm_hangs = True
        submitter = ExecutionSubmitter(rpc, confirm_timeout_s=0.01)

        with pytest.raises(SubmitError) as exc:
            await submitter.submit_and_confirm(signed_tx)
        assert exc.value.code == ErrorCode.CONFIRMATION_TIMEOUT

    @pytest.mark.asyncio
    async def test_unconfirmed_is_timeout(self, rpc, signed_tx):
        rpc.confirm_error = UnconfirmedTxError("blockhash expired")
        submitter = ExecutionSubmitter(rpc, confirm_timeout_s=1.0)

        with pytest.raises(SubmitError) as exc:
            await submitter.submit_and_confirm(signed_tx)
        assert exc.value.code == ErrorCode.CONFIRMATION_TIMEOUT

    @pytest.mark.asyncio
    async def test_onchain_failure(self, rpc, signed_tx):
        rpc.onchain_err = {"InstructionError": [3, {"Custom": 6001}]}
        submitter = ExecutionSubmitter(rpc, confirm_timeout_s=1.0)

        with pytest.raises(SubmitError, match="failed on-chain") as exc:
            await submitter.submit_and_confirm(signed_tx)
        assert exc.value.code == ErrorCode.ONCHAIN_FAILURE
