# UI.py
""""PySide6 user interface for the Postfix Calculator.

Structure
---------
- Calculator UI: main window with display and button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Handle user input and maintain undo/redo
- Dispatch the expression to MathEngine in a worker thread
- Keep the previous answer (_) between evaluations and cache it on disk
- Render results and show MathEngine errors as dialogs
- Clipboard integration and optional auto-evaluate after paste

Responsibilities (Settings)
---------------------------
- Load current settings and descriptions via config_manager
- Validate user input through config_manager.Configuration
- Save and apply theme changes immediately


Threading Note
--------------
Evaluation is executed off the UI thread in Worker(QObject), so the UI can still handle events.
Results (or errors) are emitted via a Qt signal and handled back in the UI.
"""""

import logging
import sys
import threading

from PySide6 import QtWidgets
from PySide6.QtCore import Qt, QObject, Signal
from pynput.keyboard import Controller
import pyperclip

from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import MathEngine as MathEngine  # Imports MathEngine.py as a module

logger = logging.getLogger(__name__)

SETTINGS_KEY = '⚙'
CLIPBOARD_KEY = '📋'
PASTE_KEY = '📑'
UNDO_KEY = '↶'
REDO_KEY = '↷'
ENTER_KEY = '⏎'

# Operators pressed right after a result continue from the previous answer
CONTINUE_OPERATORS = ['+', '-', '*', '/', '^']


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for the "shift to copy" setting.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


class Worker(QObject):
    """""

    Runs in a separate thread, hands the problem to MathEngine.py and emits a Signal
    with the result (or the error) back to the Calculator UI.

    """""

    job_finished = Signal(object, str)

    def __init__(self, problem, prev_ans, configuration):
        super().__init__()
        self.data = problem
        self.prev_ans = prev_ans
        self.configuration = configuration

    def run_Calc(self):

        try:
            result = MathEngine.calculate(self.data, self.prev_ans, self.configuration)
            self.job_finished.emit(result, self.data)

        except E.MathError as e:
            # Known, handled error (e.g. "Mismatched parentheses!") or a help request
            self.job_finished.emit(e, self.data)

        except Exception as e:
            # Unexpected crash: report it like any other error instead of killing the thread silently
            logger.exception("Unexpected error while evaluating %r", self.data)
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=self.data
            )
            self.job_finished.emit(critical_error, self.data)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Boolean settings become checkboxes, integer settings input fields.
    Values are validated by building a Configuration before anything is written.

    """""

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 240)

        main_layout = QtWidgets.QVBoxLayout(self)

        self.setting_value_list = config_manager.load_configuration().to_settings()
        self.setting_description_list = config_manager.load_setting_description("all")

        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            else:
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                label = QtWidgets.QLabel(description + ":")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))
                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        new_settings = dict(self.setting_value_list)

        for key_value, widget in self.widgets.items():
            if isinstance(widget, QtWidgets.QCheckBox):
                new_settings[key_value] = widget.isChecked()

            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()
                if new_value_str == "":
                    continue  # blank keeps the old value
                try:
                    new_settings[key_value] = int(new_value_str)
                except ValueError:
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n"
                                                   f"'{new_value_str}' is not a whole number.")
                    return

        try:
            config_manager.Configuration.from_settings(new_settings)
        except E.ConfigurationError as e:
            QtWidgets.QMessageBox.critical(self, "Invalid Input:", E.handler(e))
            return

        if config_manager.save_setting(new_settings) != {}:
            self.setting_value_list = new_settings
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           "Settings could not be saved (error in config_manager).")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"]:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorPrototype(QtWidgets.QWidget):
    shift_is_held = False

    def __init__(self, configuration=None, overrides=None):
        super().__init__()

        # --- 1. Load Settings ---
        # Command line overrides stay in force across settings reloads
        self.overrides = overrides or {}
        self.configuration = configuration or config_manager.load_configuration(self.overrides)

        # --- 2. Instance State Variables ---
        self.prev_ans = config_manager.load_previous_answer()
        self.thread_active = False
        self.received_result = False
        self.display_text = "0"
        self.undo = ["0"]
        self.redo = []

        # --- 3. Window Setup ---
        self.button_objects = {}
        self.setWindowTitle("Postfix Calculator")
        self.setMinimumSize(400, 540)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Display Setup ---
        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(32)
        self.display.setFont(font)
        self.display.setSizePolicy(expanding_policy)
        main_v_layout.addWidget(self.display, 1)

        # --- 5. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 3)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        # (text, row, column)
        self.buttons = [
            (SETTINGS_KEY, 0, 0), (CLIPBOARD_KEY, 0, 1), (REDO_KEY, 0, 2), (UNDO_KEY, 0, 3), ('<', 0, 4),
            ('π', 1, 0), ('e', 1, 1), ('_', 1, 2), ('√(', 1, 3), ('/', 1, 4),
            ('sin(', 2, 0), ('(', 2, 1), (')', 2, 2), ('^', 2, 3), ('*', 2, 4),
            ('cos(', 3, 0), ('7', 3, 1), ('8', 3, 2), ('9', 3, 3), ('-', 3, 4),
            ('tan(', 4, 0), ('4', 4, 1), ('5', 4, 2), ('6', 4, 3), ('+', 4, 4),
            ('ln(', 5, 0), ('1', 5, 1), ('2', 5, 2), ('3', 5, 3), ('log(', 5, 4),
            ('C', 6, 0), (',', 6, 1), ('0', 6, 2), ('.', 6, 3), (ENTER_KEY, 6, 4)
        ]

        for text, row, col in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)

            if text == SETTINGS_KEY:
                button.clicked.connect(self.open_settings)
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            button_grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.update_darkmode()

    # --- Window/Key Event Handlers ---
    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = True
            self.update_button_labels()
        elif event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press(ENTER_KEY)
        elif event.key() == Qt.Key.Key_Backspace:
            self.handle_button_press('<')
        elif event.text() and event.text() in "0123456789.+-*/^(),_":
            self.handle_button_press(event.text())
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = False
            self.update_button_labels()
        super().keyReleaseEvent(event)

    def update_button_labels(self):
        # Shift held switches the clipboard button to paste
        clipboard_button = self.button_objects.get(CLIPBOARD_KEY)
        if clipboard_button and self.configuration.shift_to_copy:
            clipboard_button.setText(PASTE_KEY if self.shift_is_held else CLIPBOARD_KEY)

    def handle_button_press(self, value):
        if value == '<':
            self.display_text = self.display_text[:-1] or "0"

        elif value == 'C':
            self.display_text = "0"

        elif value == UNDO_KEY:
            if len(self.undo) > 1:
                self.redo.append(self.undo.pop())
                self.display_text = self.undo[-1]

        elif value == REDO_KEY:
            if self.redo:
                self.undo.append(self.redo.pop())
                self.display_text = self.undo[-1]

        elif value == CLIPBOARD_KEY:
            if self.configuration.shift_to_copy and (self.shift_is_held or is_shift_pressed()):
                self.paste_from_clipboard()
            else:
                pyperclip.copy(self.display.text())
            return

        elif value == ENTER_KEY:
            self.start_calculation()
            return

        else:
            if self.received_result:
                # A new digit starts over, an operator continues from the answer
                self.display_text = "_" if value in CONTINUE_OPERATORS else "0"
            if self.display_text == "0":
                self.display_text = ""
            self.display_text += value

        self.received_result = False
        if value not in (UNDO_KEY, REDO_KEY):
            self.undo.append(self.display_text)
            self.redo.clear()

        self.display.setText(self.display_text)

    def paste_from_clipboard(self):
        clipboard_text = pyperclip.paste().strip()
        if not clipboard_text:
            return
        if self.display_text == "0" or self.received_result:
            self.display_text = clipboard_text
        else:
            self.display_text += clipboard_text
        self.received_result = False
        self.undo.append(self.display_text)
        self.redo.clear()
        self.display.setText(self.display_text)

        if self.configuration.after_paste_enter:
            self.start_calculation()

    def start_calculation(self):
        if self.thread_active:
            logger.warning("A calculation is already running")
            return

        self.thread_active = True
        self.update_return_button()
        self.display.setText("...")
        QtWidgets.QApplication.processEvents()

        worker_instance = Worker(self.display_text, self.prev_ans, self.configuration)
        worker_instance.job_finished.connect(self.Calc_result)
        self.worker_instance = worker_instance  # keep a reference until the signal arrives
        my_thread = threading.Thread(target=worker_instance.run_Calc)
        my_thread.start()

    def Calc_result(self, result, equation):
        self.thread_active = False
        self.update_return_button()

        if isinstance(result, E.HelpRequested):
            QtWidgets.QMessageBox.information(self, "Help", E.handler(result))
            self.display.setText(self.display_text)
            return

        if isinstance(result, E.MathError):
            error_box = QtWidgets.QMessageBox(self)
            error_box.setIcon(QtWidgets.QMessageBox.Critical)
            error_box.setWindowTitle("Calculation error")
            error_box.setText(f"Error {result.code}: {E.handler(result)}")
            error_box.setInformativeText(f"Equation: {result.equation}")
            error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
            error_box.setStyleSheet(self.get_message_box_stylesheet())
            error_box.exec()
            self.display.setText(equation)
            return

        # --- Success: the result becomes the previous answer ---
        self.prev_ans = result
        config_manager.save_previous_answer(result)
        self.received_result = True

        # Plain digits without separators, so the display can be evaluated again
        self.display_text = MathEngine.radix_fmt(result, self.configuration.base, self.configuration.fix)
        self.display.setText(self.display_text)

        if self.display_text != self.undo[-1]:
            self.undo.append(self.display_text)
            self.redo.clear()

    def update_return_button(self):
        return_button = self.button_objects.get(ENTER_KEY)
        if not return_button:
            return

        if self.thread_active:
            return_button.setStyleSheet("background-color: #FF0000; color: white; font-weight: bold;")
            return_button.setText("X")
        else:
            return_button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")
            return_button.setText(ENTER_KEY)

    def update_darkmode(self):
        for text, button in self.button_objects.items():
            if text == ENTER_KEY:
                continue
            if self.configuration.darkmode:
                button.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            else:
                button.setStyleSheet("font-weight: normal;")
        self.update_return_button()

        if self.configuration.darkmode:
            self.setStyleSheet("background-color: #121212;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
        else:
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()

        # Reload settings after the dialog closes so changes apply immediately
        try:
            self.configuration = config_manager.load_configuration(self.overrides)
        except E.ConfigurationError as e:
            QtWidgets.QMessageBox.critical(self, "Configuration error", E.handler(e))
        self.update_darkmode()

    def get_message_box_stylesheet(self):
        if self.configuration.darkmode:
            return """
                QMessageBox { background-color: #121212; color: white; }
                QLabel { color: white; }
                QPushButton { background-color: #2e2e2e; color: white; border: 1px solid #444444; padding: 5px 15px; }
                QPushButton:hover { background-color: #444444; }
            """
        return ""


def main(configuration=None, overrides=None):
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorPrototype(configuration, overrides)
    window.show()
    return app.exec()
