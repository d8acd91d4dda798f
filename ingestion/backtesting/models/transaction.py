from pydantic import BaseModel, ConfigDict


class EthTransaction(BaseModel):
    """A raw transaction as listed in an eth_getBlockByNumber response."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    hash: str
    from_address: str
    # None for contract creation
    to_address: str | None = None
    value: str
    input: str
    # Wire encoding, hex or decimal
    transaction_index: str
    gas_price: str
