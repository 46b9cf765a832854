"""
Web3-backed pool provider.

Reads Uniswap-V2-style factory and pair contracts with raw eth.call()
requests: calldata is built from the function selector plus ABI-encoded
arguments and responses are decoded with eth_abi.

Transport failures are translated into the SDK error taxonomy with
map_error() and re-raised. This provider does not retry.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector
from web3 import Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from ..core.constants import BPS_DENOMINATOR
from ..core.errors import CoralSwapError, map_error
from ..core.types import (
    CumulativePrices,
    FeeState,
    FlashLoanConfig,
    Reserves,
    TokenOrder,
)
from .base import PoolDataProvider

logger = logging.getLogger(__name__)


def _selector(signature: str) -> str:
    return "0x" + function_signature_to_4byte_selector(signature).hex()


class Web3PoolProvider(PoolDataProvider):
    """
    Provider reading pool state from chain.

    Token order is immutable per pool and cached after the first read;
    everything else is read fresh on every call.
    """

    def __init__(
        self,
        web3: Web3,
        factory_address: str,
        default_fee_bps: int = 30,
        block_identifier: Union[int, str] = "latest",
    ):
        """
        Initialize the provider.

        Args:
            web3: Web3 instance
            factory_address: Pair factory contract address
            default_fee_bps: Fee used for pairs without a getDynamicFee() view
            block_identifier: Block to read state at
        """
        super().__init__()
        if not 0 <= default_fee_bps < BPS_DENOMINATOR:
            raise CoralSwapError.validation(
                "default_fee_bps out of range", default_fee_bps=default_fee_bps
            )
        self.web3 = web3
        self.factory_address = Web3.to_checksum_address(factory_address)
        self.default_fee_bps = default_fee_bps
        self.block_identifier = block_identifier
        self._token_orders: Dict[str, TokenOrder] = {}
        self._static_fee_pools: set = set()

    def _eth_call(self, to: str, data: str) -> bytes:
        return self.web3.eth.call(
            {"to": Web3.to_checksum_address(to), "data": data},
            block_identifier=self.block_identifier,
        )

    async def _call(
        self,
        to: str,
        signature: str,
        output_types: List[str],
        arg_types: Sequence[str] = (),
        args: Sequence[Any] = (),
        allow_revert: bool = False,
    ) -> Tuple:
        """
        Call a view function and decode its outputs.

        Args:
            to: Contract address
            signature: Function signature, e.g. "getReserves()"
            output_types: ABI types of the return values
            arg_types: ABI types of the arguments
            args: Argument values
            allow_revert: Re-raise contract reverts untranslated

        Returns:
            Decoded return values
        """
        data = _selector(signature)
        if arg_types:
            data += encode(list(arg_types), list(args)).hex()
        try:
            raw = await asyncio.to_thread(self._eth_call, to, data)
            return decode(output_types, raw)
        except (ContractLogicError, BadFunctionCallOutput) as e:
            if allow_revert:
                raise
            self.logger.error(f"Call {signature} on {to} reverted: {e}")
            raise map_error(e) from e
        except Exception as e:
            self.logger.error(f"Call {signature} on {to} failed: {e}")
            raise map_error(e) from e

    async def resolve(self, token_in: str, token_out: str) -> Optional[str]:
        (pair,) = await self._call(
            self.factory_address,
            "getPair(address,address)",
            ["address"],
            ["address", "address"],
            [Web3.to_checksum_address(token_in), Web3.to_checksum_address(token_out)],
        )
        if int(pair, 16) == 0:
            return None
        return Web3.to_checksum_address(pair)

    async def get_reserves(self, pool_id: str) -> Reserves:
        reserve0, reserve1, timestamp = await self._call(
            pool_id, "getReserves()", ["uint112", "uint112", "uint32"]
        )
        return Reserves(reserve0, reserve1, timestamp)

    async def get_dynamic_fee(self, pool_id: str) -> int:
        """Fee from the pair's getDynamicFee() view, else the static default."""
        if pool_id in self._static_fee_pools:
            return self.default_fee_bps
        try:
            (fee_bps,) = await self._call(
                pool_id, "getDynamicFee()", ["uint32"], allow_revert=True
            )
        except (ContractLogicError, BadFunctionCallOutput) as e:
            self.logger.debug(
                f"Pool {pool_id} has no dynamic fee view ({e}); "
                f"using {self.default_fee_bps} bps"
            )
            self._static_fee_pools.add(pool_id)
            return self.default_fee_bps
        return fee_bps

    def _static_fee_state(self) -> FeeState:
        return FeeState(
            fee_current=self.default_fee_bps,
            baseline_fee=self.default_fee_bps,
            fee_min=self.default_fee_bps,
            fee_max=self.default_fee_bps,
        )

    async def get_fee_state(self, pool_id: str) -> FeeState:
        """Fee engine state from getFeeState(); a static pool reports its default fee."""
        if pool_id in self._static_fee_pools:
            return self._static_fee_state()
        try:
            (
                price_last,
                vol_accumulator,
                last_updated,
                fee_current,
                fee_min,
                fee_max,
                ema_alpha,
                fee_last_changed,
                ema_decay_rate,
                baseline_fee,
            ) = await self._call(
                pool_id,
                "getFeeState()",
                ["uint256", "uint256", "uint64", "uint32", "uint32",
                 "uint32", "uint32", "uint64", "uint32", "uint32"],
                allow_revert=True,
            )
        except (ContractLogicError, BadFunctionCallOutput) as e:
            self.logger.debug(f"Pool {pool_id} has no fee state view ({e})")
            return self._static_fee_state()
        return FeeState(
            fee_current=fee_current,
            baseline_fee=baseline_fee,
            fee_min=fee_min,
            fee_max=fee_max,
            vol_accumulator=vol_accumulator,
            price_last=price_last,
            ema_alpha=ema_alpha,
            ema_decay_rate=ema_decay_rate,
            fee_last_changed=fee_last_changed,
            last_updated=last_updated,
        )

    async def get_flash_loan_config(self, pool_id: str) -> FlashLoanConfig:
        fee_bps, locked, fee_floor = await self._call(
            pool_id, "getFlashLoanConfig()", ["uint32", "bool", "uint256"]
        )
        return FlashLoanConfig(flash_fee_bps=fee_bps, flash_fee_floor=fee_floor, locked=locked)

    async def get_token_order(self, pool_id: str) -> TokenOrder:
        cached = self._token_orders.get(pool_id)
        if cached is not None:
            return cached
        (token0,), (token1,) = await asyncio.gather(
            self._call(pool_id, "token0()", ["address"]),
            self._call(pool_id, "token1()", ["address"]),
        )
        order = TokenOrder(
            Web3.to_checksum_address(token0), Web3.to_checksum_address(token1)
        )
        self._token_orders[pool_id] = order
        return order

    async def get_cumulative_prices(self, pool_id: str) -> CumulativePrices:
        (price0,), (price1,), reserves = await asyncio.gather(
            self._call(pool_id, "price0CumulativeLast()", ["uint256"]),
            self._call(pool_id, "price1CumulativeLast()", ["uint256"]),
            self.get_reserves(pool_id),
        )
        return CumulativePrices(price0, price1, reserves.block_timestamp_last)

    async def get_lp_supply(self, pool_id: str) -> int:
        (supply,) = await self._call(pool_id, "totalSupply()", ["uint256"])
        return supply

    async def get_lp_balance(self, pool_id: str, owner: str) -> int:
        (balance,) = await self._call(
            pool_id,
            "balanceOf(address)",
            ["uint256"],
            ["address"],
            [Web3.to_checksum_address(owner)],
        )
        return balance
