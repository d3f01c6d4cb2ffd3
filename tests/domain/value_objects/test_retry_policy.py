"""Tests for RetryPolicy value object."""

import pytest

from socket_chat.domain.value_objects import RetryPolicy


class TestRetryPolicyCreation:
    """Test RetryPolicy creation and validation."""

    def test_defaults(self):
        """Test default bounds."""
        policy = RetryPolicy()
        assert policy.max_retries == 3
        assert policy.backoff_base_ms == 2000
        assert policy.retry_count == 0

    def test_max_retries_must_be_positive(self):
        """Test zero retries is rejected."""
        with pytest.raises(ValueError, match="max_retries"):
            RetryPolicy(max_retries=0)

    def test_negative_backoff_rejected(self):
        """Test negative backoff is rejected."""
        with pytest.raises(ValueError, match="backoff_base_ms"):
            RetryPolicy(backoff_base_ms=-1)


class TestRetryPolicyBackoff:
    """Test delay computation."""

    def test_linear_delays(self):
        """Test delay grows linearly with the attempt number."""
        policy = RetryPolicy(max_retries=3, backoff_base_ms=2000)
        assert [policy.delay_ms(k) for k in (1, 2, 3)] == [2000, 4000, 6000]

    def test_zero_base(self):
        """Test zero base gives immediate retries."""
        assert RetryPolicy(backoff_base_ms=0).delay_ms(2) == 0

    def test_attempt_starts_at_one(self):
        """Test attempt 0 is invalid."""
        with pytest.raises(ValueError):
            RetryPolicy().delay_ms(0)


class TestRetryPolicyCounting:
    """Test retry counting."""

    def test_register_until_exhausted(self):
        """Test counting up to max_retries."""
        policy = RetryPolicy(max_retries=2)

        assert policy.can_retry
        assert policy.register_retry() == 1
        assert policy.register_retry() == 2
        assert policy.is_exhausted
        assert not policy.can_retry

    def test_register_when_exhausted_raises(self):
        """Test counting beyond the bound is an error."""
        policy = RetryPolicy(max_retries=1)
        policy.register_retry()

        with pytest.raises(RuntimeError, match="exhausted"):
            policy.register_retry()
        assert policy.retry_count == 1

    def test_reset(self):
        """Test reset clears the count."""
        policy = RetryPolicy(max_retries=1)
        policy.register_retry()
        policy.reset()

        assert policy.retry_count == 0
        assert policy.can_retry
