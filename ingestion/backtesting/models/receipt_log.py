from pydantic import BaseModel, ConfigDict


class EthReceiptLog(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    transaction_hash: str | None = None
    address: str | None = None
