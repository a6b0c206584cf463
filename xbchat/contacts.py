"""The contact list and the page showing one friend's profile."""

from __future__ import annotations

import logging
import random
from typing import Any, Sequence

from .events import Signal
from .listitems import ContactUserItem, GroupTipItem, ListItem, ListItemType
from .models import AuthInfo, AuthRsp, UserInfo
from .tcpclient import TcpManager
from .usermgr import UserManager

log = logging.getLogger(__name__)

NEW_FRIEND_TEXT = "新的朋友"
NEW_FRIEND_ICON = ":/res/add_friend.png"
CONTACTS_TIP = "联系人"


class ContactUserList:
    """Rows of the contact list: a heading, the "new friends" entry, then contacts.

    ``items`` holds the rows in display order and ``current_index`` the selected row.
    """

    def __init__(
        self,
        users: UserManager | None = None,
        tcp: Any = None,
        default_icons: Sequence[str] = (),
    ) -> None:
        self._users = users if users is not None else UserManager.instance()
        tcp = tcp if tcp is not None else TcpManager.instance()
        self._default_icons = tuple(default_icons)
        self.items: list[ListItem] = []
        self.current_index = -1
        self.load_pending = False

        self.loading_contact_user = Signal()
        self.switch_apply_friend_page = Signal()
        self.switch_friend_info_page = Signal()

        self._add_friend_item = ContactUserItem()
        self._group_item = GroupTipItem()
        self._populate()

        tcp.add_auth_friend.connect(self.add_auth_friend)
        tcp.auth_rsp.connect(self.auth_response)

    def _populate(self) -> None:
        self.items.append(GroupTipItem())

        add_item = self._add_friend_item
        add_item.object_name = "new_friend_item"
        add_item.set_user(0, NEW_FRIEND_TEXT, NEW_FRIEND_ICON)
        add_item.item_type = ListItemType.APPLY_FRIEND_ITEM
        self.items.append(add_item)
        self.current_index = len(self.items) - 1

        self._group_item.set_group_tip(CONTACTS_TIP)
        self.items.append(self._group_item)

        for friend in self._users.contact_list_page():
            item = ContactUserItem()
            item.set_user(friend.uid, friend.name, friend.icon)
            self.items.append(item)
        self._users.update_contact_loaded_count()

    @property
    def add_friend_item(self) -> ContactUserItem:
        """The "new friends" entry."""
        return self._add_friend_item

    def show_red_point(self, show: bool = True) -> None:
        """Show or hide the notification dot on the "new friends" entry."""
        self._add_friend_item.show_red_point(show)

    def item_clicked(self, index: int) -> None:
        """React to a click on the row at ``index``."""
        item = self.items[index]
        item_type = item.item_type
        if item_type in (ListItemType.INVALID_ITEM, ListItemType.GROUP_TIP_ITEM):
            log.debug("invalid item clicked")
            return
        self.current_index = index
        if item_type is ListItemType.APPLY_FRIEND_ITEM:
            self.switch_apply_friend_page.emit()
            return
        if item_type is ListItemType.CONTACT_USER_ITEM and isinstance(item, ContactUserItem):
            self.switch_friend_info_page.emit(item.info)

    def _insert_after_group(self, item: ContactUserItem) -> None:
        index = self.items.index(self._group_item)
        self.items.insert(index + 1, item)
        if self.current_index > index:
            self.current_index += 1

    def add_auth_friend(self, auth_info: AuthInfo) -> None:
        """A peer accepted our request: list them first among the contacts."""
        if self._users.is_friend(auth_info.uid):
            return
        item = ContactUserItem()
        item.set_info(auth_info)
        self._insert_after_group(item)

    def auth_response(self, auth_rsp: AuthRsp) -> None:
        """We accepted a peer's request: list them first among the contacts."""
        if self._users.is_friend(auth_rsp.uid):
            return
        icon = random.choice(self._default_icons) if self._default_icons else auth_rsp.icon
        item = ContactUserItem()
        item.set_user(auth_rsp.uid, auth_rsp.name, icon)
        self._insert_after_group(item)

    def scroll_to_bottom(self) -> bool:
        """The list was scrolled to its end; ask for more contacts if any remain.

        Returns True when a load was requested. Further requests are refused
        until ``load_pending`` is cleared.
        """
        if self._users.is_chat_loaded():
            return False
        if self.load_pending:
            return False
        self.load_pending = True
        log.debug("load more contact user")
        self.loading_contact_user.emit()
        return True


class FriendInfoPage:
    """The profile page of one friend."""

    def __init__(self) -> None:
        self.user_info: UserInfo | None = None
        self.name = ""
        self.nick = ""
        self.bak = ""
        self.icon = ""
        self.jump_chat_item = Signal()

    def set_info(self, user_info: UserInfo) -> None:
        """Show ``user_info``; the remark line shows the nick."""
        self.user_info = user_info
        self.icon = user_info.icon
        self.name = user_info.name
        self.nick = user_info.nick
        self.bak = user_info.nick

    def msg_chat_clicked(self) -> None:
        """Open a chat with the friend shown."""
        self.jump_chat_item.emit(self.user_info)