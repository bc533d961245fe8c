"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "Trivia Rush"
SETTINGS_BUTTON: str = "Settings"
PLAY_AGAIN_BUTTON: str = "Play Again"
TIME_REMAINING_TEMPLATE: str = "{seconds}s remaining"
SCORE_TEMPLATE: str = "Score: {score}"
QUESTION_COUNTER_TEMPLATE: str = "Question {number} of {total}"

NO_QUESTIONS_TITLE: str = "No questions"
NO_QUESTIONS_MESSAGE: str = "No questions are available for the selected categories and language."
GAME_OVER_TITLE: str = "Game over"
GAME_OVER_TEMPLATE: str = "You scored {score} points."

AVAILABLE_LANGUAGES: tuple[str, ...] = ("en", "es")
AVAILABLE_CATEGORIES: tuple[str, ...] = (
    "any",
    "general_knowledge",
    "science",
    "history",
    "geography",
    "music",
)

FLASH_DURATION_MS: int = 500
