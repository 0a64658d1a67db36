# smartfill/gui.py
# SmartFill demo window: email autofill dropdown + password strength meter

import sys
import typing
from functools import partial

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QLabel, QLineEdit,
    QGroupBox, QListWidget, QProgressBar
)

from smartfill.autofill import SmartAutofill, StrengthMeter
from smartfill.config import load_config
from smartfill.storage import JsonFileStore
from smartfill.suggestions import SuggestionStore

CFG = load_config()
DEFAULT_DEBOUNCE_MS = int(CFG.get("debounce_ms", 150))

BAR_COLORS = {
    "gray": "#e5e7eb",
    "red": "#ef4444",
    "yellow": "#eab308",
    "blue": "#3b82f6",
    "green": "#22c55e",
}


class QtScheduler:
    """call_later() on the Qt event loop, one single-shot QTimer per call."""

    class _Handle:
        def __init__(self, timer: QTimer):
            self.timer = timer

        def cancel(self):
            if self.timer.isActive():
                self.timer.stop()
                self.timer.deleteLater()

    def __init__(self, parent=None):
        self.parent = parent

    def call_later(self, delay_ms, fn):
        timer = QTimer(self.parent)
        timer.setSingleShot(True)
        timer.timeout.connect(fn)
        timer.timeout.connect(timer.deleteLater)
        timer.start(int(delay_ms))
        return QtScheduler._Handle(timer)


# ---------------- UI building helpers ----------------

def make_email_group():
    box = QGroupBox("Email")
    layout = QVBoxLayout()
    box.setLayout(layout)

    input_email = QLineEdit()
    input_email.setPlaceholderText("you@example.com")
    list_suggestions = QListWidget()
    list_suggestions.setMaximumHeight(90)
    list_suggestions.hide()

    layout.addWidget(input_email)
    layout.addWidget(list_suggestions)

    return {
        "widget": box,
        "input_email": input_email,
        "list_suggestions": list_suggestions,
    }


def make_password_group():
    box = QGroupBox("Password")
    layout = QVBoxLayout()
    box.setLayout(layout)

    input_pw = QLineEdit()
    input_pw.setEchoMode(QLineEdit.Password)
    bar = QProgressBar()
    bar.setRange(0, 100)
    bar.setTextVisible(False)
    lbl_label = QLabel("")
    lbl_feedback = QLabel("")
    lbl_feedback.setWordWrap(True)

    layout.addWidget(input_pw)
    layout.addWidget(bar)
    layout.addWidget(lbl_label)
    layout.addWidget(lbl_feedback)

    return {
        "widget": box,
        "input_pw": input_pw,
        "bar": bar,
        "lbl_label": lbl_label,
        "lbl_feedback": lbl_feedback,
    }


class SmartFillGUI(QWidget):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("SmartFill — Autofill & Strength")
        self.setMinimumSize(480, 360)

        self.cfg = load_config()
        store = JsonFileStore(self.cfg.get("store_path"))
        self.suggestions = SuggestionStore(store, namespace=self.cfg.get("namespace") or "smartfill")

        main = QVBoxLayout()
        self.setLayout(main)

        emailg = make_email_group()
        pwg = make_password_group()
        main.addWidget(emailg["widget"])
        main.addWidget(pwg["widget"])

        self.autofill = SmartAutofill(
            "email",
            self.suggestions,
            QtScheduler(self),
            on_suggestions=partial(self.on_suggestions, emailg),
            delay_ms=int(self.cfg.get("debounce_ms", DEFAULT_DEBOUNCE_MS)),
        )
        self.meter = StrengthMeter()

        emailg["input_email"].textEdited.connect(self.autofill.on_input)
        emailg["list_suggestions"].itemClicked.connect(partial(self.on_suggestion_clicked, emailg))
        emailg["input_email"].returnPressed.connect(partial(self.on_email_submitted, emailg))
        pwg["input_pw"].textChanged.connect(partial(self.on_password_changed, pwg))

        self.emailg = emailg
        self.pwg = pwg

    # ----------------- Autofill -----------------
    def on_suggestions(self, emailg, items: typing.List[dict]):
        lst = emailg["list_suggestions"]
        lst.clear()
        for s in items:
            lst.addItem(f"{s['value']}    {round(s['confidence'] * 100)}%")
            lst.item(lst.count() - 1).setData(Qt.UserRole, s["value"])
        lst.setVisible(bool(items))

    def on_suggestion_clicked(self, emailg, item):
        value = self.autofill.choose(item.data(Qt.UserRole))
        emailg["input_email"].setText(value)
        emailg["list_suggestions"].hide()

    def on_email_submitted(self, emailg):
        # a value typed in full and submitted counts as accepted too
        text = emailg["input_email"].text().strip()
        if text:
            self.autofill.choose(text)
        emailg["list_suggestions"].hide()

    # ----------------- Strength meter -----------------
    def on_password_changed(self, pwg, text: str):
        result = self.meter.update(text)
        pwg["bar"].setValue(self.meter.percent)
        pwg["bar"].setStyleSheet(
            f"QProgressBar::chunk {{ background-color: {BAR_COLORS[self.meter.color]}; }}"
        )
        pwg["lbl_label"].setText(result["label"])
        pwg["lbl_feedback"].setText("\n".join("• " + f for f in result["feedback"]))


def main():
    app = QApplication(sys.argv)
    gui = SmartFillGUI()
    gui.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
