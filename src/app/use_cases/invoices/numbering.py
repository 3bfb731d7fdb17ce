"""Invoice number generation

Collision-checked numbering on top of a server-side sequence.
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.invoice_number_sequence import InvoiceNumberSequence

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "INV"


class InvoiceNumberGenerator:
    """
    Produces a unique invoice number

    Business Rules:
    1. Candidate comes from the sequence, then is checked for uniqueness
    2. A taken candidate or a sequence/lookup error counts as a failed attempt
    3. After attempt n the generator waits backoff_ms * 2^n
    4. After max_attempts it falls back to {prefix}-{year}-{last 6 digits of
       epoch ms} and logs a degraded-mode warning

    The fallback is not collision-checked; the unique constraint on
    invoices.invoice_number is the last line of defence.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        sequence: InvoiceNumberSequence,
        max_attempts: int = 5,
        backoff_ms: int = 100,
        default_prefix: str = DEFAULT_PREFIX,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.invoice_repo = invoice_repo
        self.sequence = sequence
        self.max_attempts = max_attempts
        self.backoff_ms = backoff_ms
        self.default_prefix = default_prefix
        self.sleep = sleep
        self.clock = clock

    async def generate(self, prefix: Optional[str] = None) -> str:
        prefix = prefix or self.default_prefix
        year = self.clock().year
        attempts = 0

        while attempts < self.max_attempts:
            try:
                candidate = await self.sequence.next_number(prefix, year)
                if candidate and not await self.invoice_repo.exists_by_number(candidate):
                    return candidate
                logger.info(f"Invoice number {candidate} already taken, retrying")
            except Exception as e:
                logger.error(f"Error generating invoice number: {e}")

            attempts += 1
            if attempts < self.max_attempts:
                await self.sleep(self.backoff_ms * (2 ** attempts) / 1000)

        return self._fallback(prefix, year)

    def _fallback(self, prefix: str, year: int) -> str:
        epoch_ms = int(self.clock().timestamp() * 1000)
        number = f"{prefix}-{year}-{str(epoch_ms)[-6:]}"
        logger.warning(
            f"Invoice numbering degraded after {self.max_attempts} attempts, "
            f"using timestamp fallback {number}"
        )
        return number
