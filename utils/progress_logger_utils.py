# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Modified By: Cuong CT, 6/12/2025
# Change Description: Refactored for performance and readability, optimized for asyncio.

import time
from datetime import timedelta
from typing import Optional

from utils.logger_utils import get_logger


# Only the coordinating coroutine calls track(), so a plain integer is enough.
class ProgressLogger:
    def __init__(
        self,
        name: str = "work",
        logger=None,
        log_percentage_step: int = 10,
        log_item_step: int = 5000,
    ):
        self.name = name
        self.total_items: Optional[int] = None
        self.processed_items = 0

        self.start_time: Optional[float] = None
        self.log_percentage_step = log_percentage_step
        self.log_items_step = log_item_step
        self.logger = logger if logger is not None else get_logger("Progress Logger")

    def start(self, total_items: Optional[int] = None):
        self.total_items = total_items
        self.processed_items = 0
        self.start_time = time.monotonic()
        start_message = f"Started {self.name}."
        if self.total_items is not None:
            start_message += f" Items to process: {self.total_items}."
        self.logger.info(start_message)

    def track(self, item_count: int = 1):
        processed_items_before = self.processed_items
        self.processed_items += item_count

        track_message = None
        if not self.total_items:
            if (processed_items_before // self.log_items_step) != (self.processed_items // self.log_items_step):
                track_message = f"{self.processed_items} items processed."
        else:
            percentage = self.processed_items * 100 / self.total_items
            percentage_before = processed_items_before * 100 / self.total_items
            if int(percentage_before / self.log_percentage_step) != int(percentage / self.log_percentage_step):
                track_message = f"{self.processed_items} items processed. Progress is {int(percentage)}%."

        if track_message is not None:
            self.logger.info(track_message)

    def finish(self) -> Optional[float]:
        """Logs the summary line and returns the elapsed seconds (None if never started)."""
        elapsed = None
        finish_message = f"Finished {self.name}. Total items processed: {self.processed_items}."
        if self.start_time is not None:
            elapsed = time.monotonic() - self.start_time
            finish_message += f" Took {timedelta(seconds=elapsed)}."

        self.logger.info(finish_message)
        return elapsed
