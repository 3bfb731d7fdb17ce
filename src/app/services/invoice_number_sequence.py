"""Invoice Number Sequence Interface"""

from abc import ABC, abstractmethod


class InvoiceNumberSequence(ABC):
    """
    Server-side counter producing candidate invoice numbers

    Candidates are not guaranteed unique; the caller verifies them.
    """

    @abstractmethod
    async def next_number(self, prefix: str, year: int) -> str:
        """
        Produce the next candidate number

        Args:
            prefix: Number prefix (e.g. INV)
            year: Calendar year embedded in the number

        Returns:
            Candidate in the form {prefix}-{year}-{sequence}
        """
        pass
