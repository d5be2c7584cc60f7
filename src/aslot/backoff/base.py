r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before the next
    attempt of a failed operation.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay for a given retry.

        Args:
            attempt: The retry number (0-indexed). attempt=0 is the wait
                between the first and second attempts, attempt=1 the wait
                between the second and third, etc.

        Returns:
            The delay in seconds before the next attempt.
        """
