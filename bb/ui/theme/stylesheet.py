from .colors import THEME


def build_stylesheet(theme=None):
    """Qt stylesheet for the main window and its buttons."""
    t = theme or THEME
    return f"""
        QMainWindow, QWidget {{
            background-color: {t["background"]};
            color: {t["text"]};
        }}
        QLabel#secondary {{
            color: {t["text_secondary"]};
        }}
        QPushButton {{
            background-color: {t["surface_variant"]};
            color: {t["text"]};
            border: 1px solid {t["border"]};
            border-radius: 8px;
            padding: 6px 12px;
        }}
        QPushButton:disabled {{
            color: {t["border"]};
        }}
        QPushButton#startStop {{
            background-color: {t["accent"]};
            color: {t["on_accent"]};
            border: none;
            border-radius: 12px;
            font-weight: bold;
            padding: 14px;
        }}
        QPushButton#startStop:pressed {{
            background-color: {t["accent_pressed"]};
        }}
        QPushButton#startStop[active="true"] {{
            background-color: {t["stop"]};
            color: {t["on_stop"]};
        }}
    """
