"""A clickable widget whose style state follows hover, press and selection."""

from __future__ import annotations

from enum import Enum

from .events import Signal


class ClickState(Enum):
    """Whether a stateful widget is currently selected."""

    NORMAL = "normal"
    SELECTED = "selected"


class StateWidget:
    """Tracks the style state name of a selectable, clickable widget.

    The ``state`` attribute holds the name of the style state to draw with;
    ``state_changed`` is emitted with it whenever it is set.
    """

    def __init__(self) -> None:
        self.normal = ""
        self.normal_hover = ""
        self.normal_press = ""
        self.selected = ""
        self.selected_hover = ""
        self.selected_press = ""
        self.cur_state = ClickState.NORMAL
        self.state = ""
        self.red_point_visible = False

        self.clicked = Signal()
        self.state_changed = Signal()

    def _apply(self, state: str) -> None:
        self.state = state
        self.state_changed.emit(state)

    def set_state(
        self,
        normal: str = "",
        hover: str = "",
        press: str = "",
        select: str = "",
        select_hover: str = "",
        select_press: str = "",
    ) -> None:
        """Name the style states for each situation and show the normal one."""
        self.normal = normal
        self.normal_hover = hover
        self.normal_press = press
        self.selected = select
        self.selected_hover = select_hover
        self.selected_press = select_press
        self._apply(normal)

    def press(self) -> None:
        """Left button pressed: an unselected widget becomes selected."""
        if self.cur_state is ClickState.SELECTED:
            return
        self.cur_state = ClickState.SELECTED
        self._apply(self.selected_press)

    def release(self) -> None:
        """Left button released: show the hover state and emit ``clicked``."""
        if self.cur_state is ClickState.NORMAL:
            self._apply(self.normal_hover)
        else:
            self._apply(self.selected_hover)
        self.clicked.emit()

    def enter(self) -> None:
        """The pointer moved over the widget."""
        if self.cur_state is ClickState.NORMAL:
            self._apply(self.normal_hover)
        else:
            self._apply(self.selected_hover)

    def leave(self) -> None:
        """The pointer left the widget."""
        if self.cur_state is ClickState.NORMAL:
            self._apply(self.normal)
        else:
            self._apply(self.selected)

    def clear_state(self) -> None:
        """Return to the unselected state."""
        self.cur_state = ClickState.NORMAL
        self._apply(self.normal)

    def set_selected(self, selected: bool) -> None:
        """Select or unselect the widget and show the matching resting state."""
        if selected:
            self.cur_state = ClickState.SELECTED
            self._apply(self.selected)
        else:
            self.cur_state = ClickState.NORMAL
            self._apply(self.normal)

    def show_red_point(self, show: bool = True) -> None:
        """Make the notification dot visible; the dot is shown whatever ``show`` is."""
        self.red_point_visible = True