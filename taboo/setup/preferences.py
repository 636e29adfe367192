"""
Persisted setup preferences.

The setup screen pre-fills every field with the values used last time.
They live in a small JSON file (default ~/.taboo/preferences.json):

    {
      "category": "general",
      "difficulty": "medium",
      "time_limit_seconds": null,
      "word_count": 20,
      "taboo_word_count": 5,
      "skip_budget": null,
      "use_mock_data": false
    }

Every change is written immediately. Writes go to a temp file that is
then renamed over the real one, under a FileLock so two games started
at once cannot interleave writes. A missing file yields the defaults; a
corrupt file is logged and also yields the defaults. A single bad value
falls back to its default while the others are kept.
"""

import json
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from filelock import FileLock, Timeout as FileLockTimeout

from taboo.core.config.game import VALID_DIFFICULTIES
from taboo.core.exceptions import ConfigurationError
from taboo.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PREFERENCES_PATH = Path("~/.taboo/preferences.json")
MAX_WORD_COUNT = 50
MAX_TABOO_WORDS = 10


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class SetupValues:
    """
    Last-used values of every setup field.

    The category may be blank here; it is required only when a game
    starts.
    """

    category: str = "general"
    difficulty: str = "medium"
    time_limit_seconds: Optional[int] = None
    word_count: int = 20
    taboo_word_count: int = 5
    skip_budget: Optional[int] = None
    use_mock_data: bool = False

    def __post_init__(self) -> None:
        for name in FIELD_NAMES:
            _validate_field(name, getattr(self, name))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SetupValues":
        """
        Build values from stored data, keeping each valid entry.

        Unknown keys are ignored; invalid values fall back to defaults.
        """
        kept: Dict[str, Any] = {}
        for name in FIELD_NAMES:
            if name not in data:
                continue
            try:
                _validate_field(name, data[name])
            except ConfigurationError as e:
                logger.warning("Ignoring stored preference", key=name, error=str(e))
                continue
            kept[name] = data[name]
        return cls(**kept)


def _validate_field(name: str, value: Any) -> None:
    """
    Validate one setup value.

    Rule #1: Dictionary dispatch eliminates nesting

    Raises:
        ConfigurationError: If the value has the wrong type or range
    """
    check, message = _VALIDATORS[name]
    if not check(value):
        raise ConfigurationError(message, field=name, value=value)


_VALIDATORS = {
    "category": (
        lambda v: isinstance(v, str),
        "Category must be text",
    ),
    "difficulty": (
        lambda v: v in VALID_DIFFICULTIES,
        f"Difficulty must be one of {', '.join(VALID_DIFFICULTIES)}",
    ),
    "time_limit_seconds": (
        lambda v: v is None or (_is_int(v) and v > 0),
        "Time limit must be a positive number of seconds or unlimited",
    ),
    "word_count": (
        lambda v: _is_int(v) and 1 <= v <= MAX_WORD_COUNT,
        f"Word count must be between 1 and {MAX_WORD_COUNT}",
    ),
    "taboo_word_count": (
        lambda v: _is_int(v) and 0 <= v <= MAX_TABOO_WORDS,
        f"Taboo words per card must be between 0 and {MAX_TABOO_WORDS}",
    ),
    "skip_budget": (
        lambda v: v is None or (_is_int(v) and v >= 0),
        "Skip allowance must be zero or more, or unlimited",
    ),
    "use_mock_data": (
        lambda v: isinstance(v, bool),
        "Mock data toggle must be true or false",
    ),
}

FIELD_NAMES = tuple(f.name for f in fields(SetupValues))


class PreferencesStore:
    """
    Reads and writes SetupValues to a JSON file.

    Usage:
        store = PreferencesStore(Path("~/.taboo/preferences.json"))
        store.values.word_count        # 20 on first run
        store.update(word_count=10)    # written immediately
        store.reset()                  # back to defaults
    """

    def __init__(
        self, path: Optional[Path] = None, lock_timeout: float = 10.0
    ) -> None:
        self.path = Path(path or DEFAULT_PREFERENCES_PATH).expanduser()
        self.lock_timeout = lock_timeout
        self._values = self._load()

    @property
    def values(self) -> SetupValues:
        return self._values

    @property
    def _lock_file(self) -> Path:
        return self.path.with_suffix(".json.lock")

    def update(self, **changes: Any) -> SetupValues:
        """
        Change one or more values and persist them.

        Raises:
            ConfigurationError: If a key is unknown or a value is invalid;
                nothing is written in that case
        """
        unknown = set(changes) - set(FIELD_NAMES)
        if unknown:
            name = sorted(unknown)[0]
            raise ConfigurationError(f"Unknown preference: {name}", field=name)

        new_values = replace(self._values, **changes)
        if new_values != self._values:
            self._save(new_values)
        self._values = new_values
        return new_values

    def reset(self) -> SetupValues:
        """Restore and persist the defaults."""
        self._values = SetupValues()
        self._save(self._values)
        logger.info("Preferences reset", path=str(self.path))
        return self._values

    def _load(self) -> SetupValues:
        """Read the file, falling back to defaults when missing or corrupt."""
        if not self.path.exists():
            return SetupValues()

        def _read() -> Any:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)

        try:
            try:
                with FileLock(self._lock_file, timeout=self.lock_timeout):
                    data = _read()
            except FileLockTimeout:
                logger.warning(
                    "Could not acquire preferences lock, reading anyway",
                    path=str(self.path),
                )
                data = _read()
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(
                "Could not read preferences, using defaults",
                path=str(self.path),
                error=str(e),
            )
            return SetupValues()

        if not isinstance(data, dict):
            logger.warning(
                "Preferences file is not a JSON object, using defaults",
                path=str(self.path),
            )
            return SetupValues()
        return SetupValues.from_dict(data)

    def _save(self, values: SetupValues) -> None:
        """Write values with an atomic rename under the file lock."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.path.with_suffix(".json.tmp")

        def _write_atomic() -> None:
            """Write to temp file then atomic rename."""
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(values.to_dict(), f, indent=2)
            try:
                temp_file.replace(self.path)
            except OSError:
                # Windows fallback: remove then rename
                if self.path.exists():
                    os.remove(self.path)
                temp_file.rename(self.path)

        try:
            with FileLock(self._lock_file, timeout=self.lock_timeout):
                _write_atomic()
        except FileLockTimeout:
            logger.warning(
                f"Could not acquire lock for {self.path} after {self.lock_timeout}s"
            )
            _write_atomic()

        logger.debug("Preferences saved", path=str(self.path))
