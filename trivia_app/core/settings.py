"""Player preferences and game tuning, persisted through QSettings."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import logging

from PySide6.QtCore import QSettings

from trivia_app.constants.game_constants import (
    ANY_CATEGORY,
    BASE_QUESTION_DURATION_MS,
    DEFAULT_LANGUAGE,
    DEFAULT_QUESTION_LIMIT,
    DEFAULT_USERNAME,
    DEFAULT_VOLUME,
    SETTLE_DELAY_MS,
    STREAK_BONUS_MS,
    TIMER_TICK_INTERVAL_MS,
)

logger = logging.getLogger(__name__)

_KEY_USERNAME = "player/username"
_KEY_CATEGORIES = "game/categories"
_KEY_LANGUAGE = "game/language"
_KEY_VOLUME = "audio/volume"


class SettingsError(ValueError):
    """Raised when a settings value is out of range."""


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Configuration for a game session and its presentation."""

    username: str = DEFAULT_USERNAME
    categories: frozenset[str] = field(default_factory=lambda: frozenset({ANY_CATEGORY}))
    language: str = DEFAULT_LANGUAGE
    volume: int = DEFAULT_VOLUME
    base_duration_ms: int = BASE_QUESTION_DURATION_MS
    tick_interval_ms: int = TIMER_TICK_INTERVAL_MS
    settle_delay_ms: int = SETTLE_DELAY_MS
    streak_bonus_ms: int = STREAK_BONUS_MS
    question_limit: int = DEFAULT_QUESTION_LIMIT

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", frozenset(self.categories))
        for name in ("base_duration_ms", "tick_interval_ms", "question_limit"):
            if getattr(self, name) <= 0:
                raise SettingsError(f"{name} must be positive.")
        for name in ("settle_delay_ms", "streak_bonus_ms"):
            if getattr(self, name) < 0:
                raise SettingsError(f"{name} must not be negative.")
        if not 0 <= self.volume <= 100:
            raise SettingsError("Volume must be between 0 and 100.")
        if not self.categories:
            raise SettingsError("At least one category must be selected.")
        if not self.language.strip():
            raise SettingsError("Language must not be empty.")

    def normalized_volume(self) -> float:
        """Volume as a 0.0..1.0 float for audio playback."""
        return max(0.0, min(1.0, self.volume / 100))

    def with_updates(self, **changes: object) -> "GameSettings":
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise SettingsError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return replace(self, **changes)


def load_settings(store: QSettings, base: GameSettings | None = None) -> GameSettings:
    """Read persisted preferences on top of ``base`` (defaults when omitted)."""
    settings = base or GameSettings()

    username = str(store.value(_KEY_USERNAME, settings.username) or "").strip()
    language = str(store.value(_KEY_LANGUAGE, settings.language) or "").strip()
    raw_categories = store.value(_KEY_CATEGORIES, ",".join(sorted(settings.categories)))
    categories = _parse_categories(raw_categories)
    volume = _parse_volume(store.value(_KEY_VOLUME, settings.volume), settings.volume)

    changes: dict[str, object] = {}
    if username:
        changes["username"] = username
    if language:
        changes["language"] = language
    else:
        logger.warning("Stored language is empty; using %s", settings.language)
    if categories:
        changes["categories"] = categories
    else:
        logger.warning("Stored categories are empty; using %s", sorted(settings.categories))
    changes["volume"] = volume
    return settings.with_updates(**changes)


def save_settings(store: QSettings, settings: GameSettings) -> None:
    store.setValue(_KEY_USERNAME, settings.username)
    store.setValue(_KEY_CATEGORIES, ",".join(sorted(settings.categories)))
    store.setValue(_KEY_LANGUAGE, settings.language)
    store.setValue(_KEY_VOLUME, settings.volume)
    store.sync()


def _parse_categories(raw: object) -> frozenset[str]:
    # QSettings may hand back a list for comma-separated values on some backends.
    if isinstance(raw, (list, tuple)):
        items = [str(item) for item in raw]
    else:
        items = str(raw or "").split(",")
    return frozenset(item.strip() for item in items if item.strip())


def _parse_volume(raw: object, fallback: int) -> int:
    try:
        volume = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning("Stored volume %r is not a number; using %d", raw, fallback)
        return fallback
    if not 0 <= volume <= 100:
        logger.warning("Stored volume %d is out of range; using %d", volume, fallback)
        return fallback
    return volume
