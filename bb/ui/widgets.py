"""Widgets for the breathing screen — the animated circle and the setting rows.

The circle is painted straight from SessionState snapshots; it keeps no
timing of its own beyond the short pulse played when a phase begins.
"""

from PySide6.QtCore import Qt, QPointF, QRectF, QVariantAnimation
from PySide6.QtGui import QColor, QFont, QPainter, QPen, QRadialGradient
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QSizePolicy, QWidget

from bb.core.phase import Phase
from bb.ui.display import center_text, circle_scale
from bb.ui.theme import THEME, phase_colors


class BreathingCircle(QWidget):

    def __init__(self, state, parent=None):
        super().__init__(parent)
        self._state = state
        self._pulse = 0.0
        self.setMinimumSize(240, 240)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        self._pulse_anim = QVariantAnimation(self)
        self._pulse_anim.setStartValue(1.0)
        self._pulse_anim.setEndValue(0.0)
        self._pulse_anim.setDuration(250)
        self._pulse_anim.valueChanged.connect(self._on_pulse_value)

    def set_state(self, state):
        self._state = state
        self.update()

    # Brief glow around the ring when a new phase starts.
    def pulse(self):
        self._pulse_anim.stop()
        self._pulse_anim.start()

    def _on_pulse_value(self, value):
        self._pulse = float(value)
        self.update()

    def paintEvent(self, event):
        state = self._state
        start_color, end_color = phase_colors(state.phase)
        side = min(self.width(), self.height())
        center = QPointF(self.width() / 2, self.height() / 2)
        stroke = 8.0
        ring_radius = (side * 0.8 - stroke) / 2

        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing)

        # Inner breathing circle
        radius = side * 0.75 / 2 * circle_scale(state)
        gradient = QRadialGradient(center, max(radius, 1.0))
        inner = QColor(start_color)
        inner.setAlphaF(0.3)
        outer = QColor(end_color)
        outer.setAlphaF(0.1)
        gradient.setColorAt(0.0, inner)
        gradient.setColorAt(1.0, outer)
        p.setPen(Qt.NoPen)
        p.setBrush(gradient)
        p.drawEllipse(center, radius, radius)

        # Background ring, plus the pulse glow
        ring_rect = QRectF(center.x() - ring_radius, center.y() - ring_radius, ring_radius * 2, ring_radius * 2)
        p.setBrush(Qt.NoBrush)
        p.setPen(QPen(QColor(THEME["border"]), stroke))
        p.drawEllipse(ring_rect)
        if self._pulse > 0:
            glow = QColor(start_color)
            glow.setAlphaF(0.5 * self._pulse)
            p.setPen(QPen(glow, stroke * (1 + 2 * self._pulse)))
            p.drawEllipse(ring_rect)

        # Progress arc, clockwise from 12 o'clock. Qt angles are in 1/16th degrees.
        if state.progress > 0:
            p.setPen(QPen(QColor(start_color), stroke, Qt.SolidLine, Qt.RoundCap))
            p.drawArc(ring_rect, 90 * 16, int(-360 * 16 * state.progress))

        # Countdown and caption
        number, caption = center_text(state)
        number_color = QColor(start_color) if state.phase is not Phase.IDLE else QColor(THEME["accent"])
        p.setPen(number_color)
        p.setFont(QFont(self.font().family(), max(12, int(side * 0.14)), QFont.Bold))
        p.drawText(QRectF(0, center.y() - side * 0.15, self.width(), side * 0.2), Qt.AlignCenter, number)
        if caption:
            p.setPen(QColor(THEME["text_secondary"]))
            p.setFont(QFont(self.font().family(), max(8, int(side * 0.045))))
            p.drawText(QRectF(0, center.y() + side * 0.06, self.width(), side * 0.08), Qt.AlignCenter, caption)
        p.end()


def build_stepper_row(subject, on_decrease, on_increase):
    """Build a ``▾  <label>  ▴`` row for one adjustable session setting.

    Returns (container, widget_dict).
    """
    rc = QWidget()
    lay = QHBoxLayout(rc)
    lay.setContentsMargins(0, 0, 0, 0)
    lay.setSpacing(12)
    lay.addStretch(1)

    down_btn = QPushButton("▾")
    down_btn.setToolTip(f"Decrease {subject}")
    down_btn.setFixedWidth(40)
    down_btn.clicked.connect(lambda _=False: on_decrease())
    lay.addWidget(down_btn)

    value_lbl = QLabel("")
    value_lbl.setObjectName("secondary")
    value_lbl.setAlignment(Qt.AlignCenter)
    value_lbl.setMinimumWidth(140)
    lay.addWidget(value_lbl)

    up_btn = QPushButton("▴")
    up_btn.setToolTip(f"Increase {subject}")
    up_btn.setFixedWidth(40)
    up_btn.clicked.connect(lambda _=False: on_increase())
    lay.addWidget(up_btn)

    lay.addStretch(1)
    widget_dict = {"down": down_btn, "label": value_lbl, "up": up_btn, "container": rc}
    return rc, widget_dict
