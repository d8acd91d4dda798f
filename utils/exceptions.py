from typing import Optional


class ConfigError(ValueError):
    """Invalid arguments or client configuration. Aborts the run before any fetching begins."""


class RpcResponseError(ValueError):
    """The JSON-RPC response carried an error object or no usable result."""


class MalformedBlockError(ValueError):
    """The block (or receipt) payload does not have the expected shape."""


class MalformedNumericError(MalformedBlockError):
    """A numeric wire field is neither 0x-prefixed hex nor a decimal string."""

    def __init__(self, field_name: str, value: Optional[str]):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Invalid numeric value for {field_name}: {value!r}")


class BlockFetchError(Exception):
    """Fetching a single block failed. Isolated to that block."""

    def __init__(self, block_number: int, message: str):
        self.block_number = block_number
        self.message = message
        super().__init__(f"Error fetching block {block_number}: {message}")
