"""Entries shown in the contact and search lists."""

from __future__ import annotations

from enum import Enum, auto

from .models import AuthLike, UserInfo


class ListItemType(Enum):
    """What kind of entry a list row holds."""

    CHAT_USER_ITEM = auto()
    CONTACT_USER_ITEM = auto()
    SEARCH_USER_ITEM = auto()
    ADD_USER_TIP_ITEM = auto()
    INVALID_ITEM = auto()
    GROUP_TIP_ITEM = auto()
    LINE_ITEM = auto()
    APPLY_FRIEND_ITEM = auto()


class ListItem:
    """A list row with a type and a preferred size."""

    size_hint: tuple[int, int] = (0, 0)

    def __init__(self, item_type: ListItemType = ListItemType.INVALID_ITEM) -> None:
        self.item_type = item_type
        self.object_name = ""


class GroupTipItem(ListItem):
    """A heading row separating groups of entries."""

    size_hint = (250, 25)

    def __init__(self) -> None:
        super().__init__(ListItemType.GROUP_TIP_ITEM)
        self.tip = ""

    def set_group_tip(self, text: str) -> None:
        self.tip = text


class ContactUserItem(ListItem):
    """A row showing one contact's name and icon."""

    size_hint = (250, 70)

    def __init__(self) -> None:
        super().__init__(ListItemType.CONTACT_USER_ITEM)
        self.info: UserInfo | None = None
        self.red_point_visible = False

    @property
    def name(self) -> str:
        return self.info.name if self.info is not None else ""

    @property
    def icon(self) -> str:
        return self.info.icon if self.info is not None else ""

    def set_info(self, info: AuthLike) -> None:
        """Show a contact made through an accepted friend request."""
        self.info = UserInfo.from_auth(info)

    def set_user(self, uid: int, name: str, icon: str) -> None:
        """Show a contact known only by id, name and icon."""
        self.info = UserInfo.brief(uid, name, icon)

    def show_red_point(self, show: bool = False) -> None:
        self.red_point_visible = show