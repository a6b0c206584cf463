"""The search list: looking users up by id and showing what was found."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any

from .events import Signal
from .listitems import ListItem, ListItemType
from .models import SearchInfo
from .protocol import ReqId
from .tcpclient import TcpManager
from .usermgr import UserManager

log = logging.getLogger(__name__)


class FindResult(Enum):
    """Which result dialog a search opened."""

    FAILED = "failed"
    SUCCESS = "success"


class SearchList:
    """Rows of the search list and the outcome of the last search.

    ``find_dialog`` names the result dialog currently open, and ``found``
    the user it shows when the search succeeded.
    """

    def __init__(self, users: UserManager | None = None, tcp: Any = None) -> None:
        self._users = users if users is not None else UserManager.instance()
        self._tcp = tcp if tcp is not None else TcpManager.instance()
        self._search_edit: Any = None
        self.send_pending = False
        self.find_dialog: FindResult | None = None
        self.found: SearchInfo | None = None

        self.jump_chat_item = Signal()
        self.dialog_shown = Signal()
        self.pending_changed = Signal()

        placeholder = ListItem(ListItemType.INVALID_ITEM)
        placeholder.object_name = "invalid_item"
        placeholder.size_hint = (250, 10)
        self.items: list[ListItem] = [placeholder, ListItem(ListItemType.ADD_USER_TIP_ITEM)]

        self._tcp.user_search.connect(self.on_user_search)

    def set_search_edit(self, edit: Any) -> None:
        """Use ``edit`` (anything with a ``text`` attribute) as the search box."""
        self._search_edit = edit

    def _wait_pending(self, pending: bool) -> None:
        self.send_pending = pending
        self.pending_changed.emit(pending)

    def item_clicked(self, index: int) -> None:
        """React to a click on the row at ``index``."""
        item = self.items[index]
        if item.item_type is ListItemType.INVALID_ITEM:
            return
        if item.item_type is ListItemType.ADD_USER_TIP_ITEM:
            if self.send_pending or self._search_edit is None:
                return
            self._wait_pending(True)
            body = json.dumps({"uid": self._search_edit.text},
                              ensure_ascii=False, separators=(",", ":"))
            self._tcp.send_data.emit(ReqId.SEARCH_USER_REQ, body.encode("utf-8"))
            return
        self.close_find_dialog()

    def on_user_search(self, info: SearchInfo | None) -> None:
        """Show the result of a search; ``None`` means no such user."""
        self._wait_pending(False)
        if info is None:
            self.find_dialog = FindResult.FAILED
            self.found = None
        else:
            if info.uid == self._users.uid:
                return
            if self._users.is_friend(info.uid):
                self.jump_chat_item.emit(info)
                return
            self.find_dialog = FindResult.SUCCESS
            self.found = info
        self.dialog_shown.emit(self.find_dialog, self.found)

    def close_find_dialog(self) -> None:
        """Close the result dialog, if one is open."""
        if self.find_dialog is not None:
            self.find_dialog = None
            self.found = None