"""Data records describing users, friends, applications and chat messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Union


def json_str(obj: Any, key: str) -> str:
    """Return ``obj[key]`` if it is a string, otherwise an empty string."""
    if isinstance(obj, Mapping):
        value = obj.get(key)
        if isinstance(value, str):
            return value
    return ""


def json_int(obj: Any, key: str) -> int:
    """Return ``obj[key]`` as an integer, or 0 if it is not a whole number."""
    if isinstance(obj, Mapping):
        value = obj.get(key)
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
    return 0


@dataclass
class SearchInfo:
    """Result of looking a user up by id."""

    uid: int
    name: str
    nick: str
    desc: str
    sex: int
    icon: str


@dataclass
class AddFriendApply:
    """A friend request pushed to us by the server."""

    from_uid: int
    name: str
    desc: str
    icon: str
    nick: str
    sex: int


@dataclass
class ApplyInfo:
    """An entry in the list of friend requests."""

    uid: int
    name: str
    desc: str
    icon: str
    nick: str
    sex: int
    status: int = 0

    @classmethod
    def from_add_friend_apply(cls, apply: AddFriendApply) -> "ApplyInfo":
        """Build a pending (status 0) entry from a pushed friend request."""
        return cls(
            uid=apply.from_uid,
            name=apply.name,
            desc=apply.desc,
            icon=apply.icon,
            nick=apply.nick,
            sex=apply.sex,
            status=0,
        )

    def set_icon(self, icon: str) -> None:
        self.icon = icon


@dataclass
class AuthInfo:
    """Notification that a peer accepted our friend request."""

    uid: int
    name: str
    nick: str
    icon: str
    sex: int


@dataclass
class AuthRsp:
    """Server reply after we accepted a peer's friend request."""

    uid: int
    name: str
    nick: str
    icon: str
    sex: int


AuthLike = Union[AuthInfo, AuthRsp]


@dataclass
class TextChatData:
    """One text message."""

    msg_id: str
    msg_content: str
    from_uid: int
    to_uid: int


@dataclass
class TextChatMsg:
    """A batch of text messages between two users."""

    from_uid: int
    to_uid: int
    chat_msgs: list[TextChatData] = field(default_factory=list)

    @classmethod
    def from_json(cls, from_uid: int, to_uid: int, array: Iterable[Any]) -> "TextChatMsg":
        """Build a batch from a JSON array of ``{"msgid", "content"}`` objects."""
        msgs = [
            TextChatData(
                msg_id=json_str(entry, "msgid"),
                msg_content=json_str(entry, "content"),
                from_uid=from_uid,
                to_uid=to_uid,
            )
            for entry in array
        ]
        return cls(from_uid=from_uid, to_uid=to_uid, chat_msgs=msgs)


@dataclass
class FriendInfo:
    """A friend of the logged-in user, with the chat history kept for them."""

    uid: int
    name: str
    nick: str
    icon: str
    sex: int
    desc: str = ""
    back: str = ""
    last_msg: str = ""
    chat_msgs: list[TextChatData] = field(default_factory=list)

    @classmethod
    def from_auth(cls, auth: AuthLike) -> "FriendInfo":
        """Build a friend record from an accepted friend request."""
        return cls(uid=auth.uid, name=auth.name, nick=auth.nick, icon=auth.icon, sex=auth.sex)

    def append_chat_msgs(self, msgs: Iterable[TextChatData]) -> None:
        self.chat_msgs.extend(msgs)


@dataclass
class UserInfo:
    """Profile of a user as shown in lists and pages."""

    uid: int
    name: str
    nick: str
    icon: str
    sex: int
    last_msg: str = ""
    chat_msgs: list[TextChatData] = field(default_factory=list)

    @classmethod
    def brief(cls, uid: int, name: str, icon: str) -> "UserInfo":
        """A profile known only by id, name and icon; the nick is the name."""
        return cls(uid=uid, name=name, nick=name, icon=icon, sex=0)

    @classmethod
    def from_auth(cls, auth: AuthLike) -> "UserInfo":
        return cls(uid=auth.uid, name=auth.name, nick=auth.nick, icon=auth.icon, sex=auth.sex)

    @classmethod
    def from_search(cls, info: SearchInfo) -> "UserInfo":
        return cls(uid=info.uid, name=info.name, nick=info.nick, icon=info.icon, sex=info.sex)

    @classmethod
    def from_friend(cls, friend: FriendInfo) -> "UserInfo":
        """Profile of a friend, carrying a copy of their chat history."""
        return cls(
            uid=friend.uid,
            name=friend.name,
            nick=friend.nick,
            icon=friend.icon,
            sex=friend.sex,
            chat_msgs=list(friend.chat_msgs),
        )