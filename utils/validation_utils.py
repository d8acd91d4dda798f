from eth_utils import is_hex_address
from yarl import URL

from utils.exceptions import ConfigError
from utils.formatter_utils import is_hex_prefixed

SUPPORTED_RPC_SCHEMES = ("http", "https")


def validate_block_range(range_start_incl: int, range_end_incl: int) -> None:
    """
    Validate a block range for processing.

    Args:
        range_start_incl: The inclusive start block number.
        range_end_incl: The inclusive end block number.

    Raises:
        ConfigError: If the block range is invalid.
    """
    validate_block_number(range_start_incl)
    validate_block_number(range_end_incl)

    if range_end_incl < range_start_incl:
        raise ConfigError(
            f"range_end ({range_end_incl}) must be greater than or equal to range_start ({range_start_incl})"
        )


def validate_block_number(block_number: int) -> None:
    """
    Validate a single block number.

    Args:
        block_number: The block number to validate, must be >= 0

    Raises:
        ConfigError: If the block number is invalid
    """
    if block_number < 0:
        raise ConfigError(f"Block number must be greater than or equal to 0, got {block_number}")


def validate_positive(name: str, value: int) -> None:
    if value < 1:
        raise ConfigError(f"{name} must be greater than or equal to 1, got {value}")


def validate_target_address(address: str) -> None:
    """Target must be a 0x-prefixed, 20-byte hex address (any letter casing)."""
    candidate = address.strip() if isinstance(address, str) else ""
    # is_hex_address also accepts unprefixed hex, which would never match a wire `to`
    if not is_hex_prefixed(candidate) or not is_hex_address(candidate):
        raise ConfigError(f"Invalid target contract address: {address!r}")


def validate_rpc_url(rpc_url: str) -> str:
    """
    Validate a JSON-RPC endpoint and return it stripped.

    Raises:
        ConfigError: If the URL is not an absolute http(s) URL with a host.
    """
    url = (rpc_url or "").strip()
    if not url:
        raise ConfigError("rpc_url must be a non-empty string.")
    try:
        parsed = URL(url)
    except (ValueError, TypeError) as e:
        raise ConfigError(f"Malformed RPC URL {url!r}: {e}")
    if parsed.scheme not in SUPPORTED_RPC_SCHEMES or not parsed.host:
        raise ConfigError(f"Malformed RPC URL {url!r}: expected an absolute http(s) URL.")
    return url
