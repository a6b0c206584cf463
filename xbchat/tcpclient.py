"""Long-lived connection to the chat server and dispatch of its messages."""

from __future__ import annotations

import json
import logging
import socket
import threading
from dataclasses import dataclass
from typing import Any, Callable

from .events import Signal
from .models import (
    AddFriendApply,
    AuthInfo,
    AuthRsp,
    SearchInfo,
    TextChatMsg,
    UserInfo,
    json_int,
    json_str,
)
from .protocol import ErrorCode, FrameDecoder, Payload, ReqId, encode_frame
from .usermgr import UserManager

log = logging.getLogger(__name__)

CONNECT_TIMEOUT = 10.0
RECV_SIZE = 4096

Connector = Callable[[tuple[str, int]], socket.socket]


def _default_connector(address: tuple[str, int]) -> socket.socket:
    return socket.create_connection(address, timeout=CONNECT_TIMEOUT)


@dataclass
class ServerInfo:
    """Where and how to reach the chat server after logging in."""

    uid: int
    host: str
    port: str
    token: str


def _parse_object(payload: bytes) -> dict[str, Any] | None:
    """Decode a JSON body; None if it is not JSON, empty if it is not an object."""
    try:
        doc = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
    return doc if isinstance(doc, dict) else {}


def _json_list(obj: dict[str, Any], key: str) -> list[Any]:
    value = obj.get(key)
    return value if isinstance(value, list) else []


class TcpManager:
    """Connects to the chat server, frames outgoing data and handles replies."""

    _instance: "TcpManager | None" = None
    _instance_lock = threading.Lock()

    def __init__(
        self,
        user_manager: UserManager | None = None,
        connector: Connector = _default_connector,
    ) -> None:
        self._user_manager = user_manager
        self._connector = connector
        self._socket: socket.socket | None = None
        self._reader: threading.Thread | None = None
        self._decoder = FrameDecoder()
        self._send_lock = threading.Lock()
        self.host = ""
        self.port = 0

        self.con_success = Signal()
        self.send_data = Signal()
        self.switch_chat_dialog = Signal()
        self.load_apply_list = Signal()
        self.login_failed = Signal()
        self.user_search = Signal()
        self.friend_apply = Signal()
        self.add_auth_friend = Signal()
        self.auth_rsp = Signal()
        self.text_chat_msg = Signal()

        self.send_data.connect(self.send)

        self._handlers: dict[int, Callable[[bytes], None]] = {
            ReqId.CHAT_LOGIN_RSP: self._on_login_rsp,
            ReqId.SEARCH_USER_RSP: self._on_search_user_rsp,
            ReqId.NOTIFY_ADD_FRIEND_REQ: self._on_notify_add_friend,
            ReqId.NOTIFY_AUTH_FRIEND_REQ: self._on_notify_auth_friend,
            ReqId.ADD_FRIEND_RSP: self._on_add_friend_rsp,
            ReqId.AUTH_FRIEND_RSP: self._on_auth_friend_rsp,
            ReqId.TEXT_CHAT_MSG_RSP: self._on_text_chat_rsp,
            ReqId.NOTIFY_TEXT_CHAT_MSG_REQ: self._on_notify_text_chat,
        }

    @classmethod
    def instance(cls) -> "TcpManager":
        """Return the shared manager, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @property
    def users(self) -> UserManager:
        return self._user_manager if self._user_manager is not None else UserManager.instance()

    @property
    def connected(self) -> bool:
        return self._socket is not None

    # connection -----------------------------------------------------------

    def connect(self, server_info: ServerInfo) -> bool:
        """Open the connection and start reading; emits ``con_success`` either way."""
        self.host = server_info.host
        try:
            self.port = int(server_info.port)
        except (TypeError, ValueError):
            self.port = 0
        log.debug("connecting to %s:%s", self.host, self.port)
        try:
            sock = self._connector((self.host, self.port))
        except OSError as exc:
            log.warning("connection to %s:%s failed: %s", self.host, self.port, exc)
            self.con_success.emit(False)
            return False
        sock.settimeout(None)
        self._socket = sock
        self._decoder = FrameDecoder()
        self._reader = threading.Thread(target=self._read_loop, args=(sock,), daemon=True)
        self._reader.start()
        self.con_success.emit(True)
        return True

    def _read_loop(self, sock: socket.socket) -> None:
        while True:
            try:
                data = sock.recv(RECV_SIZE)
            except OSError as exc:
                if self._socket is sock:
                    log.warning("socket error: %s", exc)
                break
            if not data:
                log.info("disconnected from server")
                break
            self.feed(data)
        if self._socket is sock:
            self._socket = None

    def close(self) -> None:
        """Close the connection, if any, and wait for the reader to stop."""
        sock, self._socket = self._socket, None
        reader, self._reader = self._reader, None
        if sock is not None:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()
        if reader is not None and reader is not threading.current_thread():
            reader.join(timeout=CONNECT_TIMEOUT)

    def send(self, req_id: int, payload: Payload) -> None:
        """Send one framed message; raises ConnectionError when not connected."""
        frame = encode_frame(req_id, payload)
        sock = self._socket
        if sock is None:
            raise ConnectionError("not connected to the chat server")
        with self._send_lock:
            sock.sendall(frame)

    # incoming -------------------------------------------------------------

    def feed(self, data: bytes) -> None:
        """Handle raw bytes read from the connection."""
        for frame in self._decoder.feed(data):
            self.handle_message(frame.req_id, frame.payload)

    def handle_message(self, req_id: int, payload: bytes) -> bool:
        """Dispatch one message to its handler; False if the id is unknown."""
        handler = self._handlers.get(req_id)
        if handler is None:
            log.warning("no handler for id [%s]", req_id)
            return False
        handler(payload)
        return True

    def _checked(self, payload: bytes, what: str) -> tuple[dict[str, Any] | None, int]:
        """Parse a reply; return it and its error code (ERR_JSON if it has none)."""
        obj = _parse_object(payload)
        if obj is None:
            log.warning("%s: body is not JSON", what)
            return None, ErrorCode.ERR_JSON
        if "error" not in obj:
            log.warning("%s failed: no error field", what)
            return obj, ErrorCode.ERR_JSON
        err = json_int(obj, "error")
        if err != ErrorCode.SUCCESS:
            log.warning("%s failed, err is %s", what, err)
        return obj, err

    def _on_login_rsp(self, payload: bytes) -> None:
        obj, err = self._checked(payload, "chat login")
        if obj is None:
            return
        if err != ErrorCode.SUCCESS:
            self.login_failed.emit(err)
            return
        users = self.users
        users.set_user_info(
            UserInfo(
                uid=json_int(obj, "uid"),
                name=json_str(obj, "name"),
                nick=json_str(obj, "nick"),
                icon=json_str(obj, "icon"),
                sex=json_int(obj, "sex"),
            )
        )
        users.set_token(json_str(obj, "token"))
        if "apply_list" in obj:
            users.append_apply_list(_json_list(obj, "apply_list"))
        if "friend_list" in obj:
            users.append_friend_list(_json_list(obj, "friend_list"))
        self.switch_chat_dialog.emit()

    def _on_search_user_rsp(self, payload: bytes) -> None:
        obj, err = self._checked(payload, "search user")
        if obj is None:
            return
        if err != ErrorCode.SUCCESS:
            self.user_search.emit(None)
            return
        self.user_search.emit(
            SearchInfo(
                uid=json_int(obj, "uid"),
                name=json_str(obj, "name"),
                nick=json_str(obj, "nick"),
                desc=json_str(obj, "desc"),
                sex=json_int(obj, "sex"),
                icon=json_str(obj, "icon"),
            )
        )

    def _on_notify_add_friend(self, payload: bytes) -> None:
        obj, err = self._checked(payload, "add friend notify")
        if obj is None:
            return
        if err != ErrorCode.SUCCESS:
            self.user_search.emit(None)
            return
        self.friend_apply.emit(
            AddFriendApply(
                from_uid=json_int(obj, "applyuid"),
                name=json_str(obj, "name"),
                desc=json_str(obj, "desc"),
                icon=json_str(obj, "icon"),
                nick=json_str(obj, "nick"),
                sex=json_int(obj, "sex"),
            )
        )

    def _on_notify_auth_friend(self, payload: bytes) -> None:
        obj, err = self._checked(payload, "auth friend notify")
        if obj is None or err != ErrorCode.SUCCESS:
            return
        self.add_auth_friend.emit(
            AuthInfo(
                uid=json_int(obj, "fromuid"),
                name=json_str(obj, "name"),
                nick=json_str(obj, "nick"),
                icon=json_str(obj, "icon"),
                sex=json_int(obj, "sex"),
            )
        )

    def _on_add_friend_rsp(self, payload: bytes) -> None:
        obj, err = self._checked(payload, "add friend")
        if obj is not None and err == ErrorCode.SUCCESS:
            log.info("add friend success")

    def _on_auth_friend_rsp(self, payload: bytes) -> None:
        obj, err = self._checked(payload, "auth friend")
        if obj is None or err != ErrorCode.SUCCESS:
            return
        self.auth_rsp.emit(
            AuthRsp(
                uid=json_int(obj, "uid"),
                name=json_str(obj, "name"),
                nick=json_str(obj, "nick"),
                icon=json_str(obj, "icon"),
                sex=json_int(obj, "sex"),
            )
        )

    def _on_text_chat_rsp(self, payload: bytes) -> None:
        obj, err = self._checked(payload, "text chat")
        if obj is not None and err == ErrorCode.SUCCESS:
            log.info("text chat reply received")

    def _on_notify_text_chat(self, payload: bytes) -> None:
        obj, err = self._checked(payload, "text chat notify")
        if obj is None or err != ErrorCode.SUCCESS:
            return
        self.text_chat_msg.emit(
            TextChatMsg.from_json(
                json_int(obj, "fromuid"),
                json_int(obj, "touid"),
                _json_list(obj, "text_array"),
            )
        )