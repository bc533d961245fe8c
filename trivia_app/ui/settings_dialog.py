"""Settings dialog for configuring player preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

from trivia_app.constants.game_constants import ANY_CATEGORY
from trivia_app.constants.ui_constants import AVAILABLE_CATEGORIES, AVAILABLE_LANGUAGES
from trivia_app.core.settings import GameSettings


class SettingsDialog(QDialog):
    """Dialog for editing the player name, question selection and volume."""

    def __init__(self, settings: GameSettings, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(400)

        self._settings = settings
        self.category_checkboxes: dict[str, QCheckBox] = {}

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Player group
        player_group = QGroupBox("Player")
        player_layout = QVBoxLayout()
        player_group.setLayout(player_layout)

        name_row = QHBoxLayout()
        name_row.addWidget(QLabel("Name:"))
        self.username_edit = QLineEdit(self._settings.username)
        name_row.addWidget(self.username_edit)
        player_layout.addLayout(name_row)

        volume_row = QHBoxLayout()
        volume_label = QLabel("Volume:")
        volume_label.setToolTip("Volume of the countdown and answer sounds")
        self.volume_spinbox = QSpinBox()
        self.volume_spinbox.setRange(0, 100)
        self.volume_spinbox.setValue(self._settings.volume)
        self.volume_spinbox.setSuffix(" %")
        volume_row.addWidget(volume_label)
        volume_row.addStretch()
        volume_row.addWidget(self.volume_spinbox)
        player_layout.addLayout(volume_row)

        layout.addWidget(player_group)

        # Questions group
        questions_group = QGroupBox("Questions")
        questions_layout = QVBoxLayout()
        questions_group.setLayout(questions_layout)

        language_row = QHBoxLayout()
        language_row.addWidget(QLabel("Language:"))
        self.language_combo = QComboBox()
        self.language_combo.addItems(list(AVAILABLE_LANGUAGES))
        if self._settings.language in AVAILABLE_LANGUAGES:
            self.language_combo.setCurrentText(self._settings.language)
        language_row.addStretch()
        language_row.addWidget(self.language_combo)
        questions_layout.addLayout(language_row)

        for category in AVAILABLE_CATEGORIES:
            checkbox = QCheckBox(category.replace("_", " ").capitalize())
            checkbox.setChecked(category in self._settings.categories)
            questions_layout.addWidget(checkbox)
            self.category_checkboxes[category] = checkbox

        layout.addWidget(questions_group)

        # Buttons
        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def get_selected_categories(self) -> frozenset[str]:
        """Checked categories, or "any" when nothing is checked."""
        selected = frozenset(
            category for category, checkbox in self.category_checkboxes.items() if checkbox.isChecked()
        )
        return selected or frozenset({ANY_CATEGORY})

    def get_settings(self) -> GameSettings:
        """Build the settings chosen in the dialog."""
        username = self.username_edit.text().strip() or self._settings.username
        return self._settings.with_updates(
            username=username,
            volume=self.volume_spinbox.value(),
            language=self.language_combo.currentText(),
            categories=self.get_selected_categories(),
        )
