from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ingestion.backtesting.models.transaction import EthTransaction


class EthBlock(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    number: int = Field(ge=0, description="Block number, must be >= 0")
    base_fee_per_gas: str | None = None
    transactions: List[EthTransaction] = Field(default_factory=list)
