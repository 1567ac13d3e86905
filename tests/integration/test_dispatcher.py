"""Integration tests for transaction dispatch through a wallet session."""
from __future__ import annotations

import asyncio

import pytest

from nmx_wallet.config import ChainConfig, FeeConfig
from nmx_wallet.dispatcher import FeePolicy, TransactionDispatcher
from nmx_wallet.errors import BroadcastError, NotConnectedError, SigningError
from nmx_wallet.messages import bank, staking
from nmx_wallet.models import Coin, Fee, TransactionRequest, TransactionResult


@pytest.fixture()
def send_msg(chain_config: ChainConfig):
    return bank.send(chain_config, "nmx1alice", "nmx1bob", "1.5")


async def _connected(session, query) -> None:
    await session.connect()
    # let the initial balance poll finish before counting refreshes
    await asyncio.sleep(0.01)
    query.get_balances.reset_mock()


class TestFeePolicy:
    def test_default_fee(self, chain_config: ChainConfig) -> None:
        fee = FeePolicy(chain_config).default_fee()
        assert fee == Fee(amount=(Coin("unmx", "5000"),), gas_limit=200000)

    def test_configured_fee(self, chain_config: ChainConfig) -> None:
        fee = FeePolicy(chain_config, FeeConfig(amount=7500, gas_limit=250000)).default_fee()
        assert fee.to_dict() == {
            "amount": [{"denom": "unmx", "amount": "7500"}],
            "gas": "250000",
        }

    def test_from_gas_price(self, chain_config: ChainConfig) -> None:
        fee = FeePolicy(chain_config).from_gas_price()
        assert fee == Fee(amount=(Coin("unmx", "5000"),), gas_limit=200000)

    def test_from_gas_price_rounds_up(self, chain_config: ChainConfig) -> None:
        fee = FeePolicy(chain_config).from_gas_price(123457)
        assert fee.amount == (Coin("unmx", "3087"),)
        assert fee.gas_limit == 123457


class TestDispatch:
    @pytest.mark.asyncio
    async def test_not_connected_makes_no_network_call(
        self, session, broadcaster, query, send_msg
    ) -> None:
        dispatcher = TransactionDispatcher(session)

        with pytest.raises(NotConnectedError):
            await dispatcher.send(send_msg)

        broadcaster.broadcast_tx.assert_not_awaited()
        query.get_account.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success_refreshes_balance_once(
        self, session, broadcaster, query, signer, account, send_msg
    ) -> None:
        async with session:
            await _connected(session, query)
            result = await TransactionDispatcher(session).send(send_msg, memo="hi")

            assert result.is_success
            assert result.transaction_hash == "ABCDEF"
            broadcaster.broadcast_tx.assert_awaited_once_with(b"signed-tx")
            assert query.get_balances.await_count == 1

            signer_address, sign_doc = signer.sign_calls[0]
            assert signer_address == account.address
            assert sign_doc["chain_id"] == "nomercychain-testnet-1"
            assert sign_doc["account_number"] == 7
            assert sign_doc["sequence"] == 3
            assert sign_doc["memo"] == "hi"
            assert sign_doc["fee"] == Fee(amount=(Coin("unmx", "5000"),), gas_limit=200000)
            assert list(sign_doc["messages"]) == [send_msg]

    @pytest.mark.asyncio
    async def test_execution_failure_is_returned(
        self, session, broadcaster, query, chain_config
    ) -> None:
        broadcaster.broadcast_tx.return_value = TransactionResult(
            code=5, transaction_hash="FF", raw_log="insufficient funds"
        )
        async with session:
            await _connected(session, query)
            msg = staking.delegate(chain_config, "nmx1alice", "nmxvaloper1x", 1000)
            result = await TransactionDispatcher(session).send(msg)

            assert result.code == 5
            assert "insufficient funds" in result.raw_log
            assert query.get_balances.await_count == 1

    @pytest.mark.asyncio
    async def test_broadcast_error_skips_refresh(
        self, session, broadcaster, query, send_msg
    ) -> None:
        broadcaster.broadcast_tx.side_effect = BroadcastError("RPC down")
        async with session:
            await _connected(session, query)

            with pytest.raises(BroadcastError):
                await TransactionDispatcher(session).send(send_msg)

            assert query.get_balances.await_count == 0
            assert session.is_connected

    @pytest.mark.asyncio
    async def test_signer_rejection(
        self, session, broadcaster, query, signer, send_msg
    ) -> None:
        signer.reject = True
        async with session:
            await _connected(session, query)

            with pytest.raises(SigningError):
                await TransactionDispatcher(session).send(send_msg)

            broadcaster.broadcast_tx.assert_not_awaited()
            assert query.get_balances.await_count == 0

    @pytest.mark.asyncio
    async def test_explicit_request_fee(
        self, session, query, signer, send_msg
    ) -> None:
        fee = Fee(amount=(Coin("unmx", "9000"),), gas_limit=300000)
        async with session:
            await _connected(session, query)
            await TransactionDispatcher(session).dispatch(
                TransactionRequest(messages=(send_msg,), fee=fee)
            )

            assert signer.sign_calls[0][1]["fee"] == fee

    @pytest.mark.asyncio
    async def test_multiple_messages_in_one_transaction(
        self, session, broadcaster, query, signer, chain_config
    ) -> None:
        msgs = [
            staking.delegate(chain_config, "nmx1alice", "nmxvaloper1a", 1),
            staking.delegate(chain_config, "nmx1alice", "nmxvaloper1b", 2),
        ]
        async with session:
            await _connected(session, query)
            await TransactionDispatcher(session).send(*msgs)

            assert list(signer.sign_calls[0][1]["messages"]) == msgs
            broadcaster.broadcast_tx.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_disconnect_during_dispatch_skips_refresh(
        self, session, broadcaster, query, success_result, send_msg
    ) -> None:
        async def broadcast_then_disconnect(_: bytes) -> TransactionResult:
            session.disconnect()
            return success_result

        broadcaster.broadcast_tx.side_effect = broadcast_then_disconnect
        await _connected(session, query)

        result = await TransactionDispatcher(session).send(send_msg)

        assert result.is_success
        assert query.get_balances.await_count == 0
        assert session.balance is None
