"""Transaction dispatch through a connected wallet session."""
from __future__ import annotations

import logging
from decimal import ROUND_CEILING, Decimal

from .config import ChainConfig, FeeConfig, parse_gas_price
from .errors import NotConnectedError
from .messages.types import Message
from .models import Coin, Connected, Fee, TransactionRequest, TransactionResult
from .session import WalletSession

logger = logging.getLogger(__name__)


class FeePolicy:
    """Decides the fee attached to transactions that do not bring their own."""

    def __init__(self, chain: ChainConfig, config: FeeConfig | None = None) -> None:
        self._chain = chain
        self._config = config or FeeConfig()

    def default_fee(self) -> Fee:
        """Flat fee from configuration (5000 base units, 200k gas by default)."""
        return Fee(
            amount=(Coin(self._chain.base_denom, str(self._config.amount)),),
            gas_limit=self._config.gas_limit,
        )

    def from_gas_price(self, gas_limit: int | None = None) -> Fee:
        """Fee of ``gas_limit`` × the chain's gas price, rounded up."""
        gas_limit = gas_limit or self._config.gas_limit
        price, denom = parse_gas_price(self._chain.gas_price)
        amount = (price * Decimal(gas_limit)).to_integral_value(rounding=ROUND_CEILING)
        return Fee(amount=(Coin(denom, str(int(amount))),), gas_limit=gas_limit)


class TransactionDispatcher:
    """Signs and broadcasts requests via the session's signing handle.

    Results with a non-zero code are returned, not raised; callers inspect
    ``raw_log``. Transport failures raise BroadcastError.
    """

    def __init__(self, session: WalletSession, fee_policy: FeePolicy | None = None) -> None:
        self._session = session
        self._fees = fee_policy or FeePolicy(session.chain)

    @property
    def fee_policy(self) -> FeePolicy:
        return self._fees

    async def dispatch(self, request: TransactionRequest) -> TransactionResult:
        state = self._session.state
        if not isinstance(state, Connected):
            raise NotConnectedError()

        account = state.account
        logger.info(
            "Dispatching %d message(s) from %s: %s",
            len(request.messages),
            account.address,
            ", ".join(m.type_url for m in request.messages),
        )

        # BroadcastError / SigningError propagate without a balance refresh
        result = await state.signing_handle.sign_and_broadcast(
            account.address, request.messages, request.fee, request.memo
        )

        if result.is_success:
            logger.info("Transaction %s succeeded", result.transaction_hash)
        else:
            logger.warning(
                "Transaction %s failed with code %d: %s",
                result.transaction_hash,
                result.code,
                result.raw_log,
            )

        if self._session.account == account:
            await self._session.balances.refresh_once(account)
        else:
            logger.debug("Session changed during dispatch, skipping balance refresh")
        return result

    async def send(
        self, *messages: Message, memo: str = "", fee: Fee | None = None
    ) -> TransactionResult:
        """Dispatch ``messages`` in one transaction with the default fee."""
        request = TransactionRequest(
            messages=tuple(messages),
            fee=fee or self._fees.default_fee(),
            memo=memo,
        )
        return await self.dispatch(request)
