from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ingestion.backtesting.models.filtered_transaction import FilteredTransaction


class FetchOutcome(BaseModel):
    """Result of fetching and filtering one block: either transactions or an error."""

    model_config = ConfigDict(frozen=True)

    block_number: int
    transactions: List[FilteredTransaction] = Field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class RangeResult(BaseModel):
    transactions: List[FilteredTransaction] = Field(default_factory=list)
    failed_blocks: List[FetchOutcome] = Field(default_factory=list)
    blocks_attempted: int = 0
    blocks_succeeded: int = 0
    transactions_found: int = 0
    elapsed_seconds: float = 0.0

    @property
    def blocks_failed(self) -> int:
        return self.blocks_attempted - self.blocks_succeeded

    @property
    def blocks_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.blocks_succeeded / self.elapsed_seconds

    @property
    def transactions_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.transactions_found / self.elapsed_seconds
