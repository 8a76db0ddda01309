import sys
from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from bb.common.logger import log
from bb.core import config
from bb.core.controller import SessionController
from bb.ui.theme import build_stylesheet
from bb.ui.display import phase_text, session_text
from bb.ui.widgets import BreathingCircle, build_stepper_row


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# The single breathing screen. Everything shown here is read off the latest SessionState snapshot, and every button
# just forwards a command to the controller.
class MainWindow(QMainWindow):

    def __init__(self, controller=None):
        super().__init__()
        self.setWindowTitle("Box Breathing")

        # -- Controller, seeded from saved settings --
        self.controller = controller or SessionController(config.load_config(), parent=self)
        self.controller.state_changed.connect(self._render)
        self.controller.phase_changed.connect(self._on_phase_changed)
        self.controller.session_completed.connect(self._on_session_completed)
        self.controller.config_changed.connect(config.save_config)

        # -- Build UI --
        central = QWidget()
        self.setCentralWidget(central)
        lay = QVBoxLayout(central)
        lay.setContentsMargins(24, 24, 24, 24)
        lay.setSpacing(12)

        title = QLabel("Box Breathing")
        title.setFont(QFont(self.font().family(), 20, QFont.Bold))
        title.setAlignment(Qt.AlignCenter)
        lay.addWidget(title)
        subtitle = QLabel("Find your calm")
        subtitle.setObjectName("secondary")
        subtitle.setAlignment(Qt.AlignCenter)
        lay.addWidget(subtitle)

        self._circle = BreathingCircle(self.controller.state)
        lay.addWidget(self._circle, 1)

        self._instruction = QLabel("")
        self._instruction.setFont(QFont(self.font().family(), 18))
        self._instruction.setAlignment(Qt.AlignCenter)
        lay.addWidget(self._instruction)

        session_row, self._session_w = build_stepper_row(
            "session length",
            self.controller.decrease_session_length,
            self.controller.increase_session_length,
        )
        lay.addWidget(session_row)
        phase_row, self._phase_w = build_stepper_row(
            "phase duration",
            self.controller.decrease_phase_duration,
            self.controller.increase_phase_duration,
        )
        lay.addWidget(phase_row)

        self._start_stop = QPushButton("")
        self._start_stop.setObjectName("startStop")
        self._start_stop.clicked.connect(lambda _=False: self.controller.toggle())
        lay.addWidget(self._start_stop)

        self._reset = QPushButton("Reset")
        self._reset.clicked.connect(lambda _=False: self.controller.reset())
        lay.addWidget(self._reset)

        self.setStyleSheet(build_stylesheet())
        self.resize(420, 720)
        self._render(self.controller.state)

    # ------------------------------------------------------------------ #
    #  Rendering                                                           #
    # ------------------------------------------------------------------ #

    def _render(self, state):
        self._circle.set_state(state)
        self._instruction.setText(state.instruction)

        self._session_w["label"].setText(session_text(state))
        self._session_w["down"].setEnabled(self.controller.can_decrease_session_length)
        self._session_w["up"].setEnabled(self.controller.can_increase_session_length)
        self._phase_w["label"].setText(phase_text(state))
        self._phase_w["down"].setEnabled(self.controller.can_decrease_phase_duration)
        self._phase_w["up"].setEnabled(self.controller.can_increase_phase_duration)

        # Only repolish when the button actually flips, this runs ~60 times a second
        active = "true" if state.is_active else "false"
        if self._start_stop.property("active") != active:
            self._start_stop.setProperty("active", active)
            self._start_stop.style().unpolish(self._start_stop)
            self._start_stop.style().polish(self._start_stop)
        self._start_stop.setText("Stop" if state.is_active else "Start Breathing")
        self._reset.setVisible(self.controller.can_reset)

    # Desktop stand-in for the haptic tick on each new phase.
    def _on_phase_changed(self, phase):
        self._circle.pulse()

    def _on_session_completed(self, state):
        self._instruction.setText(f"Session complete · {state.cycle_count} cycles")

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def closeEvent(self, event):
        self.controller.shutdown()
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    log.info("Main window shown")
    sys.exit(app.exec())
