"""API endpoints for the AMM engine."""

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, Query

from amm_engine.config import EngineConfig
from amm_engine.errors import InvalidAmount
from amm_engine.exchange import Exchange
from amm_engine.ledger.tokens import InMemoryTokenLedger
from amm_engine.models.api import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    AmountOutResponse,
    PriceResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    ReservesResponse,
    ShareBalanceResponse,
    SwapRequest,
    SwapResponse,
    TokenAmountRequest,
    TokenBalanceResponse,
)
from amm_engine.models.types import normalize_address, validate_uint256

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def get_default_exchange() -> Exchange:
    """Process-wide engine instance configured from the environment."""
    return Exchange(config=EngineConfig.from_env())


def get_exchange() -> Exchange:
    """Dependency provider for the engine instance.

    Override this in tests to inject a prepared engine:
        app.dependency_overrides[get_exchange] = lambda: exchange
    """
    return get_default_exchange()


def get_caller(x_caller: str = Header(alias="X-Caller")) -> str:
    """Authenticated identity of the invoker, taken from the X-Caller header."""
    return normalize_address(x_caller, validate=True)


def _parse_amount(name: str, raw: str) -> int:
    try:
        return int(validate_uint256(raw))
    except ValueError as err:
        raise InvalidAmount(f"{name}: {err}") from err


def _token_ledger(exchange: Exchange) -> InMemoryTokenLedger:
    vault = exchange.vault
    if not isinstance(vault, InMemoryTokenLedger):
        raise HTTPException(status_code=404, detail="Token ledger is external to this service")
    return vault


# Mutating endpoints are plain functions: FastAPI runs them in its threadpool
# and the engine guard serializes them.
@router.post("/liquidity/add", response_model=AddLiquidityResponse)
def add_liquidity(
    request: AddLiquidityRequest,
    caller: str = Depends(get_caller),
    exchange: Exchange = Depends(get_exchange),
) -> AddLiquidityResponse:
    """Deposit both tokens of a pair and mint LTK to ``to``."""
    amount_a, amount_b, liquidity = exchange.add_liquidity(
        caller,
        request.token_a,
        request.token_b,
        int(request.amount_a_desired),
        int(request.amount_b_desired),
        int(request.amount_a_min),
        int(request.amount_b_min),
        request.to,
        request.deadline,
    )
    return AddLiquidityResponse(amount_a=amount_a, amount_b=amount_b, liquidity=liquidity)


@router.post("/liquidity/remove", response_model=RemoveLiquidityResponse)
def remove_liquidity(
    request: RemoveLiquidityRequest,
    caller: str = Depends(get_caller),
    exchange: Exchange = Depends(get_exchange),
) -> RemoveLiquidityResponse:
    """Burn the caller's LTK and withdraw both tokens to ``to``."""
    amount_a, amount_b = exchange.remove_liquidity(
        caller,
        request.token_a,
        request.token_b,
        int(request.liquidity),
        int(request.amount_a_min),
        int(request.amount_b_min),
        request.to,
        request.deadline,
    )
    return RemoveLiquidityResponse(amount_a=amount_a, amount_b=amount_b)


@router.post("/swap", response_model=SwapResponse)
def swap(
    request: SwapRequest,
    caller: str = Depends(get_caller),
    exchange: Exchange = Depends(get_exchange),
) -> SwapResponse:
    """Swap an exact input amount along a two-token path."""
    amounts = exchange.swap_exact_tokens_for_tokens(
        caller,
        int(request.amount_in),
        int(request.amount_out_min),
        request.path,
        request.to,
        request.deadline,
    )
    return SwapResponse(amounts=amounts)


@router.get("/price/{base}/{quote}", response_model=PriceResponse)
async def get_price(
    base: str,
    quote: str,
    exchange: Exchange = Depends(get_exchange),
) -> PriceResponse:
    price = exchange.get_price(base, quote)
    return PriceResponse(base=base.lower(), quote=quote.lower(), price=price)


@router.get("/reserves/{token_a}/{token_b}", response_model=ReservesResponse)
async def get_reserves(
    token_a: str,
    token_b: str,
    exchange: Exchange = Depends(get_exchange),
) -> ReservesResponse:
    reserve_a, reserve_b = exchange.get_reserves(token_a, token_b)
    return ReservesResponse(
        token_a=token_a.lower(),
        token_b=token_b.lower(),
        reserve_a=reserve_a,
        reserve_b=reserve_b,
    )


@router.get("/amount-out", response_model=AmountOutResponse)
async def get_amount_out(
    amount_in: str = Query(alias="amountIn"),
    reserve_in: str = Query(alias="reserveIn"),
    reserve_out: str = Query(alias="reserveOut"),
    exchange: Exchange = Depends(get_exchange),
) -> AmountOutResponse:
    """Constant-product output for caller-supplied reserves."""
    amount_out = exchange.get_amount_out(
        _parse_amount("amountIn", amount_in),
        _parse_amount("reserveIn", reserve_in),
        _parse_amount("reserveOut", reserve_out),
    )
    return AmountOutResponse(amount_out=amount_out)


@router.get("/quote", response_model=AmountOutResponse)
async def quote_swap(
    amount_in: str = Query(alias="amountIn"),
    token_in: str = Query(alias="tokenIn"),
    token_out: str = Query(alias="tokenOut"),
    exchange: Exchange = Depends(get_exchange),
) -> AmountOutResponse:
    """Output a swap of ``amount_in`` would receive against current reserves."""
    amount_out = exchange.quote_exact_input(
        _parse_amount("amountIn", amount_in), [token_in, token_out]
    )
    return AmountOutResponse(amount_out=amount_out)


@router.get("/shares/{holder}", response_model=ShareBalanceResponse)
async def get_share_balance(
    holder: str,
    exchange: Exchange = Depends(get_exchange),
) -> ShareBalanceResponse:
    holder = normalize_address(holder, validate=True)
    return ShareBalanceResponse(
        holder=holder,
        balance=exchange.balance_of(holder),
        total_supply=exchange.total_supply,
        symbol=exchange.shares.symbol,
    )


@router.get("/tokens/{token}/{holder}", response_model=TokenBalanceResponse)
async def get_token_balance(
    token: str,
    holder: str,
    exchange: Exchange = Depends(get_exchange),
) -> TokenBalanceResponse:
    ledger = _token_ledger(exchange)
    token = normalize_address(token, validate=True)
    holder = normalize_address(holder, validate=True)
    return TokenBalanceResponse(
        token=token,
        holder=holder,
        balance=ledger.balance_of(token, holder),
        allowance=ledger.allowance(token, holder, exchange.custody),
    )


@router.post("/tokens/{token}/approve", response_model=TokenBalanceResponse)
async def approve_token(
    token: str,
    request: TokenAmountRequest,
    caller: str = Depends(get_caller),
    exchange: Exchange = Depends(get_exchange),
) -> TokenBalanceResponse:
    """Let the engine custody pull up to ``amount`` of ``token`` from the caller."""
    ledger = _token_ledger(exchange)
    ledger.approve(token, caller, exchange.custody, int(request.amount))
    return await get_token_balance(token, caller, exchange)


@router.post("/tokens/{token}/mint", response_model=TokenBalanceResponse)
async def mint_token(
    token: str,
    request: TokenAmountRequest,
    caller: str = Depends(get_caller),
    exchange: Exchange = Depends(get_exchange),
) -> TokenBalanceResponse:
    """Faucet: credit the caller with ``amount`` of ``token`` (local deployments only)."""
    if not exchange.config.faucet_enabled:
        raise HTTPException(status_code=403, detail="Faucet disabled")
    ledger = _token_ledger(exchange)
    ledger.mint(token, caller, int(request.amount))
    logger.info("faucet_mint", token=token, holder=caller, amount=request.amount)
    return await get_token_balance(token, caller, exchange)
