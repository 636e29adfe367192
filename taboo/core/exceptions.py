"""
Centralized Exception Hierarchy for the Taboo game.

All custom exceptions inherit from TabooError so callers at the CLI
boundary can catch everything the game raises in one place.

Helpful Error Messages
----------------------
Each exception carries:
- error_code: Unique identifier for documentation lookup (e.g., "TB-DECK-001")
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue

Exception Hierarchy
-------------------
    TabooError (base)
    ├── ConfigurationError        # Invalid setup values or config file
    ├── ProviderError             # Deck could not be fetched ("deck unavailable")
    ├── InternalConsistencyError  # Session state machine invariant violated
    ├── LLMError
    │   ├── CredentialsError      # Missing/invalid API key
    │   └── RateLimitError        # API rate limits exceeded
    └── RetryError                # All retry attempts exhausted

Propagation Policy
------------------
ConfigurationError and ProviderError are recovered at the setup boundary:
the player sees the message and retries. InternalConsistencyError is never
caught by the game itself; it signals a logic defect.
"""

from typing import Any, List, Optional
import builtins
import re


def sanitize_message(message: str) -> str:
    """Sanitize an error message to avoid leaking API keys or tokens.

    Args:
        message: Original error message

    Returns:
        Sanitized message with sensitive info replaced
    """
    if not message:
        return message

    patterns = [
        (r"(sk-ant-|sk-|api_key[=:][\s]*)[a-zA-Z0-9_-]{20,}", r"\1<api-key>"),
        (r"(ANTHROPIC_API_KEY|API_KEY)[=:]\s*[^\s]+", r"\1=<hidden>"),
        (r"Bearer\s+[a-zA-Z0-9_.-]+", r"Bearer <token>"),
        (r"/(?:home|Users)/[^/\s\"']+", r"<user-home>"),
    ]

    result = message
    for pattern, replacement in patterns:
        result = re.sub(pattern, replacement, result)
    return result


def get_root_cause(exc: BaseException) -> BaseException:
    """Extract the root cause from a chain of exceptions.

    Follows __cause__ and __context__ to the original error.

    Args:
        exc: Exception to analyze

    Returns:
        Root cause exception (may be the same as input)
    """
    seen = set()
    current = exc

    while current is not None:
        if id(current) in seen:
            break
        seen.add(id(current))

        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__context__ is not None:
            current = current.__context__
        else:
            break

    return current


class TabooError(Exception):
    """
    Base exception for all Taboo game errors.

    Example
    -------
        try:
            form.start_session()
        except TabooError as e:
            logger.error(f"Could not start: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    error_code: str = "TB-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        """Initialize TabooError with helpful information.

        Args:
            message: Human-readable error message
            error_code: Unique identifier (e.g., "TB-CFG-001")
            why_it_happened: Explanation of root cause
            how_to_fix: List of actionable fix suggestions
        """
        super().__init__(sanitize_message(message))

        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)

    def get_root_cause(self) -> BaseException:
        """Get the root cause of this exception chain."""
        return get_root_cause(self)


# ============================================================================
# Setup / Configuration
# ============================================================================


class ConfigurationError(TabooError):
    """
    Raised when setup values or the configuration file are invalid.

    Attributes
    ----------
    field : str
        The setting that failed validation
    value : any
        The rejected value
    """

    error_code = "TB-CFG-001"
    why_it_happened = "A game setting is missing or outside its allowed range"
    how_to_fix = [
        "Enter a non-empty category",
        "Pick between 0 and 10 taboo words per card",
        "Use a positive word count, time limit and skip allowance",
        "Run 'taboo prefs reset' to restore the defaults",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


# ============================================================================
# Deck Provider
# ============================================================================


class ProviderError(TabooError):
    """
    Raised when a deck cannot be produced.

    Covers an unreachable or unauthenticated provider, an answer that is
    not parseable, and an answer whose word or taboo-word counts do not
    match the request. No partial deck is ever returned.
    """

    error_code = "TB-DECK-001"
    why_it_happened = (
        "The word-card provider did not return a complete, well-formed deck"
    )
    how_to_fix = [
        "Check that ANTHROPIC_API_KEY is set and valid",
        "Check your internet connection",
        "Try again; generated decks occasionally come back malformed",
        "Play offline with the built-in word bank: taboo play --mock",
    ]


# ============================================================================
# Session State Machine
# ============================================================================


class InternalConsistencyError(TabooError):
    """
    Raised when a session invariant is violated.

    Indicates a logic defect in the state machine (for example a review
    cursor pointing outside the skipped pool). Never swallowed.
    """

    error_code = "TB-INT-001"
    why_it_happened = "The game session reached a state that should be impossible"
    how_to_fix = [
        "Start a new game",
        "Report the issue with the output of --debug",
    ]


# ============================================================================
# LLM Exceptions
# ============================================================================


class LLMError(TabooError):
    """Base exception for LLM client errors."""

    error_code = "TB-LLM-000"
    why_it_happened = "The language model request failed"
    how_to_fix = [
        "Check your internet connection",
        "Verify the model name in taboo.yaml",
    ]


class CredentialsError(LLMError):
    """Raised when the API key is missing or rejected."""

    error_code = "TB-LLM-001"
    why_it_happened = "No usable Anthropic API key was found"
    how_to_fix = [
        "Set the key: export ANTHROPIC_API_KEY=sk-ant-...",
        "Or add llm.claude.api_key: ${ANTHROPIC_API_KEY} to taboo.yaml",
        "Or play offline with: taboo play --mock",
    ]


class RateLimitError(LLMError):
    """
    Raised when the API rate limit is exceeded.

    Attributes
    ----------
    retry_after : float
        Seconds to wait before retrying (if the API reported it)
    """

    error_code = "TB-LLM-002"
    why_it_happened = "Too many requests were sent to the language model API"
    how_to_fix = [
        "Wait a minute and try again",
        "Use a smaller word count",
    ]

    def __init__(
        self, message: str, retry_after: Optional[float] = None, **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class RetryError(TabooError):
    """
    Raised when all retry attempts are exhausted.

    Attributes
    ----------
    last_exception : Exception
        The exception from the final attempt
    attempts : int
        Number of attempts made
    """

    error_code = "TB-RETRY-001"
    why_it_happened = "The operation kept failing after several retries"
    how_to_fix = [
        "Wait a few minutes and try again",
        "Check the provider status page",
    ]

    def __init__(
        self,
        message: str,
        last_exception: Optional[BaseException] = None,
        attempts: int = 0,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.last_exception = last_exception
        self.attempts = attempts


# ============================================================================
# Error Info Lookup
# ============================================================================


STANDARD_ERROR_INFO: dict[type, dict[str, Any]] = {
    builtins.PermissionError: {
        "error_code": "TB-FILE-002",
        "why_it_happened": "The preferences or config file could not be accessed",
        "how_to_fix": [
            "Check permissions on ~/.taboo",
            "Point preferences.path in taboo.yaml at a writable location",
        ],
    },
    builtins.ConnectionError: {
        "error_code": "TB-CONN-001",
        "why_it_happened": "Could not establish a network connection",
        "how_to_fix": [
            "Check your internet connection",
            "Play offline with: taboo play --mock",
        ],
    },
    ModuleNotFoundError: {
        "error_code": "TB-DEP-001",
        "why_it_happened": "A required Python package is not installed",
        "how_to_fix": ["Reinstall the game: pip install -e ."],
    },
    ValueError: {
        "error_code": "TB-VAL-002",
        "why_it_happened": "An invalid value was provided",
        "how_to_fix": ["Check the error message for the expected value format"],
    },
    OSError: {
        "error_code": "TB-SYS-001",
        "why_it_happened": "A system-level error occurred",
        "how_to_fix": ["Check disk space and permissions"],
    },
}


def get_error_info(exc: BaseException) -> dict[str, Any]:
    """Get helpful error information for any exception.

    Args:
        exc: Exception to get info for

    Returns:
        Dict with error_code, why_it_happened, how_to_fix
    """
    if isinstance(exc, TabooError):
        return {
            "error_code": exc.error_code,
            "why_it_happened": exc.why_it_happened,
            "how_to_fix": exc.how_to_fix,
        }

    exc_type = type(exc)
    if exc_type in STANDARD_ERROR_INFO:
        return STANDARD_ERROR_INFO[exc_type]

    for parent_type, info in STANDARD_ERROR_INFO.items():
        if isinstance(exc, parent_type):
            return info

    return {
        "error_code": "TB-ERR-999",
        "why_it_happened": "An unexpected error occurred",
        "how_to_fix": [
            "Check the error message for details",
            "Run again with --debug for the full traceback",
        ],
    }
