import random

from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QKeyEvent

from app.themes import THEMES
from services.practice import Phase, TypingPracticeController
from services.surface import TextStyle
from ui.keyboard_scene import KeyboardScene
from ui.main_window import KeyboardView, MainWindow
from app.config import AppConfig


def test_text_stays_centered_on_anchor(qtbot):
    scene = KeyboardScene()
    text = scene.add_text(640, 170, "Correct: 0", TextStyle(20, "#ffffff"))
    text.set_text("Correct: 10 | Incorrect: 2 | Accuracy: 83.3%")
    rect = text.item.sceneBoundingRect()
    assert abs(rect.center().x() - 640) < 1
    assert abs(rect.center().y() - 170) < 1
    assert text.text().startswith("Correct: 10")


def test_flash_reports_completion(qtbot):
    scene = KeyboardScene()
    key = scene.add_key(100, 100, 60, 60, "A", "#2c2c54", "#4a4a8a", TextStyle(24, "#ffffff", True))
    done = []
    scene.flash(key, lambda: done.append(True))
    qtbot.waitUntil(lambda: done == [True], timeout=2000)
    assert key.scale() == 1.0


def test_stopped_flash_never_reports(qtbot):
    scene = KeyboardScene()
    key = scene.add_key(100, 100, 60, 60, "A", "#2c2c54", "#4a4a8a", TextStyle(24, "#ffffff", True))
    done = []
    scene.pulse(key)
    scene.flash(key, lambda: done.append(True))
    scene.stop_animations(key)
    qtbot.wait(400)
    assert done == []
    assert scene.tweens.running(key) == 0
    assert scene.tweens.running(key.background) == 0
    assert key.background.opacity() == 1.0


def test_pulse_runs_until_stopped(qtbot):
    scene = KeyboardScene()
    key = scene.add_key(100, 100, 60, 60, "A", "#2c2c54", "#4a4a8a", TextStyle(24, "#ffffff", True))
    scene.pulse(key)
    qtbot.wait(50)
    assert scene.tweens.running(key.background) == 1
    scene.stop_pulse(key)
    assert scene.tweens.running(key.background) == 0


def test_controller_loop_on_real_scene(qtbot):
    scene = KeyboardScene()
    controller = TypingPracticeController(scene, rng=random.Random(11), theme=THEMES[0])
    controller.initialize()
    target = controller.target_key
    assert controller.keys[target].handle.background.fill() == THEMES[0].highlight

    controller.handle_keystroke(" " if target == "SPACE" else target.lower())
    assert controller.phase is Phase.FLASHING_SUCCESS
    qtbot.waitUntil(lambda: controller.phase is Phase.WAITING, timeout=2000)
    assert controller.state.correct_count == 1
    assert controller.active_key == controller.target_key


def _press(key, text="", modifiers=Qt.NoModifier):
    return QKeyEvent(QEvent.KeyPress, key, modifiers, text)


def test_key_identifiers():
    assert KeyboardView._key_identifier(_press(Qt.Key_Space, " ")) == " "
    assert KeyboardView._key_identifier(_press(Qt.Key_A, "a")) == "a"
    assert KeyboardView._key_identifier(_press(Qt.Key_A, "a", Qt.ControlModifier)) is None
    assert KeyboardView._key_identifier(_press(Qt.Key_Escape, "\x1b")) not in (None, "\x1b")


def test_main_window_wires_keys_to_controller(qtbot):
    win = MainWindow(AppConfig(seed=3))
    qtbot.addWidget(win)
    controller = win.controller
    assert win.windowTitle() == "Typi - Typing Tutor"
    target = controller.target_key
    wrong = "Q" if target != "Q" else "W"
    win.view.keyPressed.emit(wrong.lower())
    assert controller.state.incorrect_count == 1
    assert controller.target_key == target

    win._apply_theme(1)
    assert controller.theme is THEMES[1]


def _report():
    from app.layout import KeyboardLayout
    from app.state import PracticeState

    state = PracticeState()
    state.mark_key("S", False)
    state.mark_key("S", False)
    state.mark_key("A", True)
    state.mark_key("D", False)
    state.mark_key("D", True)
    return state.key_report(KeyboardLayout([["A", "S", "D"], ["Z", "X"]]))


def test_weak_key_rows_in_keyboard_or_weakest_order():
    from ui.weakkeys_dialog import visible_reports

    reports = _report()
    assert [r.label for r in visible_reports(reports, None, True, False)] == ["A", "S", "D", "Z", "X"]
    assert [r.label for r in visible_reports(reports, None, False, False)] == ["A", "S", "D"]
    assert [r.label for r in visible_reports(reports, 1, True, False)] == ["Z", "X"]
    assert [r.label for r in visible_reports(reports, None, True, True)] == ["S", "D", "A", "Z", "X"]


def test_weak_keys_dialog_filters(qtbot):
    from ui.weakkeys_dialog import UNTRIED, WeakKeysDialog

    dlg = WeakKeysDialog(_report())
    qtbot.addWidget(dlg)
    assert dlg.table.rowCount() == 5
    assert dlg.table.item(3, 0).text() == "Z"
    assert dlg.table.item(3, 4).text() == UNTRIED

    dlg.show_untried.setChecked(False)
    assert [r.label for r in dlg.shown] == ["A", "S", "D"]

    dlg.order_pick.setCurrentIndex(1)
    assert dlg.table.item(0, 0).text() == "S"
    assert dlg.table.item(0, 4).text() == "100%"

    dlg.row_pick.setCurrentIndex(2)
    assert dlg.shown == []


def test_custom_themes_get_their_own_menu_section(qtbot):
    from app import themes

    saved = list(themes.THEMES)
    themes.THEMES.append(themes.Theme(**dict(vars(themes.THEMES[0]), name="Mine")))
    try:
        win = MainWindow(AppConfig(seed=1))
        qtbot.addWidget(win)
        actions = win.theme_menu.actions()
        assert [a.text() for a in actions if not a.isSeparator()][-1] == "Mine"
        section = actions[themes.BUILTIN_COUNT]
        assert section.isSeparator()
        assert section.text() == "Custom"
    finally:
        themes.THEMES[:] = saved
