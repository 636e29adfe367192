"""Tests for retry with exponential backoff."""

from unittest.mock import Mock, patch

import pytest

from taboo.core.exceptions import RateLimitError, RetryError
from taboo.core.retry import calculate_delay, llm_retry, retry


class TestCalculateDelay:
    """Test backoff delays."""

    def test_exponential(self) -> None:
        assert calculate_delay(0, 1.0, 60.0, 2.0, jitter=False) == 1.0
        assert calculate_delay(3, 1.0, 60.0, 2.0, jitter=False) == 8.0

    def test_capped(self) -> None:
        assert calculate_delay(10, 1.0, 30.0, 2.0, jitter=False) == 30.0

    def test_jitter_bounds(self) -> None:
        for _ in range(20):
            delay = calculate_delay(1, 1.0, 60.0, 2.0, jitter=True)
            assert 2.0 <= delay <= 2.5


class TestRetryDecorator:
    """Test the retry decorator."""

    def test_success_first_try(self) -> None:
        func = Mock(return_value="ok", __name__="func")
        assert retry()(func)() == "ok"
        assert func.call_count == 1

    @patch("taboo.core.retry.time.sleep")
    def test_retries_then_succeeds(self, sleep: Mock) -> None:
        func = Mock(side_effect=[ConnectionError("x"), "ok"], __name__="func")
        on_retry = Mock()
        wrapped = retry(retryable_exceptions=(ConnectionError,), on_retry=on_retry)(func)

        assert wrapped() == "ok"
        assert func.call_count == 2
        on_retry.assert_called_once()
        assert on_retry.call_args.args[1] == 1
        sleep.assert_called_once()

    @patch("taboo.core.retry.time.sleep")
    def test_exhausted(self, sleep: Mock) -> None:
        error = TimeoutError("slow")
        func = Mock(side_effect=error, __name__="func")
        wrapped = retry(max_attempts=3, retryable_exceptions=(TimeoutError,))(func)

        with pytest.raises(RetryError) as exc_info:
            wrapped()

        assert exc_info.value.attempts == 3
        assert exc_info.value.last_exception is error
        assert sleep.call_count == 2

    def test_non_retryable_propagates(self) -> None:
        func = Mock(side_effect=ValueError("bad"), __name__="func")
        wrapped = retry(retryable_exceptions=(ConnectionError,))(func)
        with pytest.raises(ValueError):
            wrapped()
        assert func.call_count == 1

    @patch("taboo.core.retry.time.sleep")
    def test_retry_after_respected(self, sleep: Mock) -> None:
        func = Mock(
            side_effect=[RateLimitError("429", retry_after=5.0), "ok"], __name__="func"
        )
        wrapped = retry(jitter=False, retryable_exceptions=(RateLimitError,))(func)
        wrapped()
        sleep.assert_called_once_with(5.0)


class TestLLMRetry:
    """Test the preset used for Claude requests."""

    @patch("taboo.core.retry.time.sleep")
    def test_rate_limit_retried(self, sleep: Mock) -> None:
        func = Mock(side_effect=[RateLimitError("busy"), "cards"], __name__="func")
        assert llm_retry(func)() == "cards"

    def test_other_errors_not_retried(self) -> None:
        func = Mock(side_effect=KeyError("x"), __name__="func")
        with pytest.raises(KeyError):
            llm_retry(func)()
        assert func.call_count == 1
