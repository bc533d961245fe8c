"""Game rules and defaults shared across UI and core layers."""

BASE_QUESTION_DURATION_MS: int = 10000
TIMER_TICK_INTERVAL_MS: int = 10
SETTLE_DELAY_MS: int = 1500
STREAK_BONUS_MS: int = 2000

# Remaining time is expressed on a 0..PROGRESS_SCALE integer scale, which is
# also the range of the countdown progress bar.
PROGRESS_SCALE: int = 1000
BASE_CORRECT_POINTS: int = 10
PROGRESS_POINTS_DIVISOR: int = 10

DEFAULT_QUESTION_LIMIT: int = 10
DEFAULT_LANGUAGE: str = "en"
ANY_CATEGORY: str = "any"
DEFAULT_VOLUME: int = 50
DEFAULT_USERNAME: str = "Guest"

TICKING_SOUND_PATH: str | None = "trivia_app/data/sounds/tic_tac.wav"
CORRECT_SOUND_PATH: str | None = "trivia_app/data/sounds/correct_answer.wav"
WRONG_SOUND_PATH: str | None = "trivia_app/data/sounds/wrong_answer.wav"
