from xbchat.statewidget import ClickState, StateWidget


def make_widget() -> StateWidget:
    widget = StateWidget()
    widget.set_state("n", "nh", "np", "s", "sh", "sp")
    return widget


def test_set_state_shows_normal():
    widget = make_widget()
    assert widget.state == "n"
    assert widget.cur_state is ClickState.NORMAL


def test_press_selects_and_shows_selected_press():
    widget = make_widget()
    widget.press()
    assert widget.cur_state is ClickState.SELECTED
    assert widget.state == "sp"


def test_press_when_selected_changes_nothing():
    widget = make_widget()
    widget.set_selected(True)
    widget.press()
    assert widget.state == "s"
    assert widget.cur_state is ClickState.SELECTED


def test_release_emits_clicked_and_shows_hover():
    widget = make_widget()
    clicks = []
    widget.clicked.connect(lambda: clicks.append(True))
    widget.release()
    assert widget.state == "nh"
    widget.press()
    widget.release()
    assert widget.state == "sh"
    assert len(clicks) == 2


def test_enter_and_leave_follow_selection():
    widget = make_widget()
    widget.enter()
    assert widget.state == "nh"
    widget.leave()
    assert widget.state == "n"
    widget.set_selected(True)
    widget.enter()
    assert widget.state == "sh"
    widget.leave()
    assert widget.state == "s"


def test_clear_state_and_set_selected_false():
    widget = make_widget()
    widget.press()
    widget.clear_state()
    assert widget.cur_state is ClickState.NORMAL
    assert widget.state == "n"
    widget.set_selected(True)
    widget.set_selected(False)
    assert widget.cur_state is ClickState.NORMAL
    assert widget.state == "n"


def test_state_changed_signal_reports_each_state():
    widget = StateWidget()
    seen = []
    widget.state_changed.connect(seen.append)
    widget.set_state("a", "b", "c", "d", "e", "f")
    widget.enter()
    widget.press()
    assert seen == ["a", "b", "f"]


def test_red_point_hidden_until_shown():
    widget = StateWidget()
    assert widget.red_point_visible is False
    widget.show_red_point(True)
    assert widget.red_point_visible is True