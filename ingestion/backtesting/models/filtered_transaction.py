from pydantic import BaseModel, ConfigDict, Field


class FilteredTransaction(BaseModel):
    """
    Canonical output record for a transaction addressed to the target contract.

    Serialized field names (by alias) are fixed for downstream compatibility:
    hash, from, to, value, data, block_number, transaction_index, gas_price.
    block_number and transaction_index are always decimal strings.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    hash: str
    from_address: str = Field(alias="from")
    to_address: str = Field(alias="to")
    value: str
    data: str
    block_number: str
    transaction_index: str
    gas_price: str
