"""Engine-wide constants.

All amounts and prices handled by the engine are raw integers scaled by 1e18.
"""

# Largest value representable by an on-chain uint256
UINT256_MAX = 2**256 - 1

# Fixed-point scale for prices returned by the oracle (18 decimals)
PRICE_SCALE = 10**18

# Liquidity share (LTK) metadata
SHARE_NAME = "Liquidity Token"
SHARE_SYMBOL = "LTK"
SHARE_DECIMALS = 18

# Address under which the engine holds custodied tokens in the token ledger.
# Callers approve this address before adding liquidity or swapping.
DEFAULT_CUSTODY_ADDRESS = "0x00000000000000000000000000000000000a3a3a"

# The zero address is never a valid recipient
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
