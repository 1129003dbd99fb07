from __future__ import annotations

import random
from datetime import datetime
from typing import Optional

from ..core.constants import RECEIPT_PREFIX, RECEIPT_RANDOM_MAX, RECEIPT_RANDOM_MIN


class ReceiptNumberGenerator:
    """TRN-{year}{month}-{NNNN} from the issue date.

    The month is not zero padded. The 4-digit suffix is random, so two
    receipts in the same month can collide; it is a reference, not a key.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def next(self, issued_at: datetime) -> str:
        suffix = self._rng.randint(RECEIPT_RANDOM_MIN, RECEIPT_RANDOM_MAX)
        return f"{RECEIPT_PREFIX}-{issued_at.year}{issued_at.month}-{suffix}"
