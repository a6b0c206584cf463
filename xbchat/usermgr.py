"""Process-wide store for the logged-in user, friends and friend requests."""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterable

from .models import (
    ApplyInfo,
    AuthLike,
    FriendInfo,
    TextChatData,
    UserInfo,
    json_int,
    json_str,
)

log = logging.getLogger(__name__)

CHAT_COUNT_PER_PAGE = 13


class UserManager:
    """Holds the session user, friend list and request list, with paging."""

    _instance: "UserManager | None" = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self.user_info: UserInfo | None = None
        self.token = ""
        self._apply_list: list[ApplyInfo] = []
        self._friend_list: list[FriendInfo] = []
        self._friend_map: dict[int, FriendInfo] = {}
        self._chat_loaded = 0
        self._contact_loaded = 0

    @classmethod
    def instance(cls) -> "UserManager":
        """Return the shared manager, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def set_user_info(self, user_info: UserInfo) -> None:
        self.user_info = user_info

    def set_token(self, token: str) -> None:
        self.token = token

    def _current_user(self) -> UserInfo:
        if self.user_info is None:
            raise RuntimeError("no user is logged in")
        return self.user_info

    @property
    def uid(self) -> int:
        return self._current_user().uid

    @property
    def name(self) -> str:
        return self._current_user().name

    @property
    def icon(self) -> str:
        return self._current_user().icon

    def append_apply_list(self, array: Iterable[Any]) -> None:
        """Add friend requests from a JSON array of objects."""
        for value in array:
            self._apply_list.append(
                ApplyInfo(
                    uid=json_int(value, "uid"),
                    name=json_str(value, "name"),
                    desc=json_str(value, "desc"),
                    icon=json_str(value, "icon"),
                    nick=json_str(value, "nick"),
                    sex=json_int(value, "sex"),
                    status=json_int(value, "status"),
                )
            )

    def append_friend_list(self, array: Iterable[Any]) -> None:
        """Add friends from a JSON array of objects."""
        for value in array:
            info = FriendInfo(
                uid=json_int(value, "uid"),
                name=json_str(value, "name"),
                nick=json_str(value, "nick"),
                icon=json_str(value, "icon"),
                sex=json_int(value, "sex"),
                desc=json_str(value, "desc"),
                back=json_str(value, "back"),
            )
            self._friend_list.append(info)
            self._friend_map[info.uid] = info

    @property
    def apply_list(self) -> list[ApplyInfo]:
        return list(self._apply_list)

    def add_apply(self, apply: ApplyInfo) -> None:
        self._apply_list.append(apply)

    def already_applied(self, uid: int) -> bool:
        return any(apply.uid == uid for apply in self._apply_list)

    def _page(self, begin: int) -> list[FriendInfo]:
        return self._friend_list[begin:begin + CHAT_COUNT_PER_PAGE]

    def _advance(self, begin: int) -> int:
        if begin >= len(self._friend_list):
            return begin
        return min(begin + CHAT_COUNT_PER_PAGE, len(self._friend_list))

    def chat_list_page(self) -> list[FriendInfo]:
        """The next page of friends for the chat list."""
        return self._page(self._chat_loaded)

    def is_chat_loaded(self) -> bool:
        return self._chat_loaded >= len(self._friend_list)

    def update_chat_loaded_count(self) -> None:
        self._chat_loaded = self._advance(self._chat_loaded)

    def contact_list_page(self) -> list[FriendInfo]:
        """The next page of friends for the contact list."""
        return self._page(self._contact_loaded)

    def update_contact_loaded_count(self) -> None:
        self._contact_loaded = self._advance(self._contact_loaded)

    def is_contact_loaded(self) -> bool:
        return self._contact_loaded >= len(self._friend_list)

    def is_friend(self, uid: int) -> bool:
        return uid in self._friend_map

    def add_friend(self, auth: AuthLike) -> None:
        """Record a friend made through an accepted request."""
        info = FriendInfo.from_auth(auth)
        self._friend_map[info.uid] = info

    def get_friend(self, uid: int) -> FriendInfo | None:
        return self._friend_map.get(uid)

    def append_friend_chat_msgs(self, friend_id: int, msgs: Iterable[TextChatData]) -> None:
        """Add messages to a friend's history; unknown friends are ignored."""
        friend = self._friend_map.get(friend_id)
        if friend is None:
            log.warning("append friend uid %s not found", friend_id)
            return
        friend.append_chat_msgs(msgs)