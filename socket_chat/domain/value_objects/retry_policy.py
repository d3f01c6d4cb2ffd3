"""RetryPolicy value object.

Tracks consecutive failed attempts and computes the backoff delay.
"""

from dataclasses import dataclass

from ...const import DEFAULT_BACKOFF_BASE_MS, DEFAULT_MAX_RETRIES


@dataclass
class RetryPolicy:
    """Bounded linear backoff.

    The delay before the k-th retry is ``backoff_base_ms * k``: with the
    defaults that is 2s, 4s and 6s, after which no further automatic retry
    happens.

    Attributes:
        max_retries: Maximum number of automatic retries (positive)
        backoff_base_ms: Delay unit in milliseconds
        retry_count: Retries scheduled since the last successful connect

    Example:
        >>> policy = RetryPolicy(max_retries=3, backoff_base_ms=2000)
        >>> policy.register_retry()
        1
        >>> policy.delay_ms(policy.retry_count)
        2000
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_base_ms: int = DEFAULT_BACKOFF_BASE_MS
    retry_count: int = 0

    def __post_init__(self):
        """Validate policy bounds."""
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be positive, got {self.max_retries}")
        if self.backoff_base_ms < 0:
            raise ValueError(
                f"backoff_base_ms must not be negative, got {self.backoff_base_ms}"
            )

    @property
    def can_retry(self) -> bool:
        """Check if another automatic retry is allowed."""
        return self.retry_count < self.max_retries

    @property
    def is_exhausted(self) -> bool:
        """Check if all automatic retries have been used."""
        return not self.can_retry

    def delay_ms(self, attempt: int) -> int:
        """Get delay before the given retry attempt.

        Args:
            attempt: Retry number, starting at 1

        Returns:
            Delay in milliseconds

        Examples:
            >>> policy = RetryPolicy(backoff_base_ms=2000)
            >>> [policy.delay_ms(k) for k in (1, 2, 3)]
            [2000, 4000, 6000]
        """
        if attempt < 1:
            raise ValueError(f"attempt must start at 1, got {attempt}")
        return self.backoff_base_ms * attempt

    def register_retry(self) -> int:
        """Count one more scheduled retry.

        Returns:
            The new retry count

        Raises:
            RuntimeError: If retries are already exhausted
        """
        if not self.can_retry:
            raise RuntimeError(
                f"Retries exhausted ({self.retry_count}/{self.max_retries})"
            )
        self.retry_count += 1
        return self.retry_count

    def reset(self) -> None:
        """Reset after a successful connect or a manual disconnect."""
        self.retry_count = 0
