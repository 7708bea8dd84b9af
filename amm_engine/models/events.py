"""Notifications emitted by the engine after a mutating call fully succeeds.

Field order mirrors the on-chain events of a deployed pool contract, and
``encode_data()`` produces the ABI-encoded log payload an indexer would read
for that event.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar

from eth_abi import encode  # type: ignore[attr-defined]


def _address_bytes(address: str) -> bytes:
    return bytes.fromhex(address[2:])


@dataclass(frozen=True)
class EngineEvent:
    """Base class for engine notifications."""

    name: ClassVar[str] = ""
    abi_types: ClassVar[tuple[str, ...]] = ()

    def _abi_values(self) -> list[Any]:
        raise NotImplementedError

    def encode_data(self) -> bytes:
        """ABI-encode the event fields in declaration order."""
        return encode(list(self.abi_types), self._abi_values())

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view: amounts as decimal strings, plus the event name."""
        data: dict[str, Any] = {"name": self.name}
        for key, value in asdict(self).items():
            if isinstance(value, int):
                data[key] = str(value)
            elif isinstance(value, tuple):
                data[key] = [str(v) if isinstance(v, int) else v for v in value]
            else:
                data[key] = value
        return data


@dataclass(frozen=True)
class LiquidityAdded(EngineEvent):
    name: ClassVar[str] = "LiquidityAdded"
    abi_types: ClassVar[tuple[str, ...]] = (
        "address",
        "address",
        "address",
        "address",
        "uint256",
        "uint256",
        "uint256",
    )

    sender: str
    to: str
    token_a: str
    token_b: str
    amount_a: int
    amount_b: int
    liquidity: int

    def _abi_values(self) -> list[Any]:
        return [
            _address_bytes(self.sender),
            _address_bytes(self.to),
            _address_bytes(self.token_a),
            _address_bytes(self.token_b),
            self.amount_a,
            self.amount_b,
            self.liquidity,
        ]


@dataclass(frozen=True)
class LiquidityRemoved(EngineEvent):
    name: ClassVar[str] = "LiquidityRemoved"
    abi_types: ClassVar[tuple[str, ...]] = (
        "address",
        "address",
        "uint256",
        "address",
        "address",
        "uint256",
        "uint256",
    )

    sender: str
    to: str
    liquidity: int
    token_a: str
    token_b: str
    amount_a: int
    amount_b: int

    def _abi_values(self) -> list[Any]:
        return [
            _address_bytes(self.sender),
            _address_bytes(self.to),
            self.liquidity,
            _address_bytes(self.token_a),
            _address_bytes(self.token_b),
            self.amount_a,
            self.amount_b,
        ]


@dataclass(frozen=True)
class SwapExecuted(EngineEvent):
    """A completed exact-input swap; path and amounts are in caller order."""

    name: ClassVar[str] = "SwapExecuted"
    abi_types: ClassVar[tuple[str, ...]] = ("address", "address", "address[]", "uint256[]")

    sender: str
    to: str
    path: tuple[str, ...]
    amounts: tuple[int, ...]

    def _abi_values(self) -> list[Any]:
        return [
            _address_bytes(self.sender),
            _address_bytes(self.to),
            [_address_bytes(token) for token in self.path],
            list(self.amounts),
        ]


__all__ = ["EngineEvent", "LiquidityAdded", "LiquidityRemoved", "SwapExecuted"]
