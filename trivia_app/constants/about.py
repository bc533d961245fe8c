"""Static metadata describing Trivia Rush."""

APP_NAME = "Trivia Rush"
APP_ORGANIZATION = "TriviaRush"
APP_VERSION = "0.1"
