"""Pydantic models for the HTTP API.

Amounts travel as uint256 decimal strings and addresses as 0x-prefixed hex,
matching the engine's raw 1e18-scaled integer convention.
"""

from pydantic import BaseModel, Field

from amm_engine.models.types import Address, Uint256


class AddLiquidityRequest(BaseModel):
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    amount_a_desired: Uint256 = Field(alias="amountADesired")
    amount_b_desired: Uint256 = Field(alias="amountBDesired")
    amount_a_min: Uint256 = Field(alias="amountAMin")
    amount_b_min: Uint256 = Field(alias="amountBMin")
    to: Address
    deadline: int = Field(ge=0, description="Unix time after which the call is rejected")

    model_config = {"populate_by_name": True}


class AddLiquidityResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")
    liquidity: Uint256

    model_config = {"populate_by_name": True}


class RemoveLiquidityRequest(BaseModel):
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    liquidity: Uint256
    amount_a_min: Uint256 = Field(alias="amountAMin")
    amount_b_min: Uint256 = Field(alias="amountBMin")
    to: Address
    deadline: int = Field(ge=0)

    model_config = {"populate_by_name": True}


class RemoveLiquidityResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class SwapRequest(BaseModel):
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out_min: Uint256 = Field(alias="amountOutMin")
    path: list[Address] = Field(description="[tokenIn, tokenOut]")
    to: Address
    deadline: int = Field(ge=0)

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    amounts: list[Uint256] = Field(description="[amountIn, amountOut]")


class PriceResponse(BaseModel):
    base: Address
    quote: Address
    price: Uint256 = Field(description="Quote units per base unit, scaled by 1e18")


class ReservesResponse(BaseModel):
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")

    model_config = {"populate_by_name": True}


class AmountOutResponse(BaseModel):
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class ShareBalanceResponse(BaseModel):
    holder: Address
    balance: Uint256
    total_supply: Uint256 = Field(alias="totalSupply")
    symbol: str

    model_config = {"populate_by_name": True}


class TokenAmountRequest(BaseModel):
    """Body of token approve/mint calls; the account is the X-Caller."""

    amount: Uint256


class TokenBalanceResponse(BaseModel):
    token: Address
    holder: Address
    balance: Uint256
    allowance: Uint256 = Field(description="Allowance granted to the engine custody")


class ErrorResponse(BaseModel):
    error: str
    detail: str
