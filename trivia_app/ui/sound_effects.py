"""Audio cues for the game window."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, QUrl
from PySide6.QtMultimedia import QSoundEffect

from trivia_app.constants.game_constants import (
    CORRECT_SOUND_PATH,
    TICKING_SOUND_PATH,
    WRONG_SOUND_PATH,
)

logger = logging.getLogger(__name__)


def _resolve_sound_path(path_setting: str | None) -> Path | None:
    if not path_setting:
        return None
    sound_path = Path(path_setting)
    if not sound_path.is_absolute():
        # trivia_app/ui/sound_effects.py -> parents[2] is the project root
        project_root = Path(__file__).resolve().parents[2]
        sound_path = project_root / sound_path
    if not sound_path.exists():
        logger.debug("Sound file %s not found; cue disabled", sound_path)
        return None
    return sound_path


class SoundBoard(QObject):
    """Ticking, correct and wrong answer cues.

    Missing sound files simply disable the matching cue, and playback errors
    are logged, so audio can never interfere with the game.
    """

    def __init__(self, volume: float = 0.5, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._ticking = self._create_effect(TICKING_SOUND_PATH, loop=True)
        self._correct = self._create_effect(CORRECT_SOUND_PATH)
        self._wrong = self._create_effect(WRONG_SOUND_PATH)
        self.set_volume(volume)

    def _create_effect(self, path_setting: str | None, loop: bool = False) -> QSoundEffect | None:
        sound_path = _resolve_sound_path(path_setting)
        if sound_path is None:
            return None
        effect = QSoundEffect(self)
        effect.setSource(QUrl.fromLocalFile(str(sound_path)))
        if loop:
            loop_value = getattr(QSoundEffect, "Infinite", -1)
            if hasattr(loop_value, "value"):
                loop_value = loop_value.value
            effect.setLoopCount(int(loop_value))
        return effect

    def _effects(self) -> list[QSoundEffect]:
        return [e for e in (self._ticking, self._correct, self._wrong) if e is not None]

    def set_volume(self, volume: float) -> None:
        for effect in self._effects():
            effect.setVolume(volume)

    def start_ticking(self) -> None:
        if self._ticking is not None and not self._ticking.isPlaying():
            self._play(self._ticking)

    def stop_ticking(self) -> None:
        if self._ticking is not None and self._ticking.isPlaying():
            self._ticking.stop()

    def play_verdict(self, is_correct: bool) -> None:
        self.stop_ticking()
        effect = self._correct if is_correct else self._wrong
        if effect is not None:
            self._play(effect)

    def stop_all(self) -> None:
        for effect in self._effects():
            effect.stop()

    @staticmethod
    def _play(effect: QSoundEffect) -> None:
        try:
            effect.play()
        except Exception:  # noqa: BLE001 - audio is best effort
            logger.exception("Sound playback failed for %s", effect.source().toString())
