"""Wire format of the chat server connection: request ids, error codes and framing."""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import NamedTuple, Union

_HEADER = struct.Struct(">HH")
HEADER_SIZE = _HEADER.size
MAX_FIELD = 0xFFFF


class ReqId(IntEnum):
    """Identifiers of requests and responses exchanged with the servers."""

    GET_VARIFY_CODE = 1001
    REG_USER = 1002
    RESET_PWD = 1003
    LOGIN_USER = 1004
    CHAT_LOGIN = 1005
    CHAT_LOGIN_RSP = 1006
    SEARCH_USER_REQ = 1007
    SEARCH_USER_RSP = 1008
    ADD_FRIEND_REQ = 1009
    ADD_FRIEND_RSP = 1010
    NOTIFY_ADD_FRIEND_REQ = 1011
    AUTH_FRIEND_REQ = 1013
    AUTH_FRIEND_RSP = 1014
    NOTIFY_AUTH_FRIEND_REQ = 1015
    TEXT_CHAT_MSG_REQ = 1017
    TEXT_CHAT_MSG_RSP = 1018
    NOTIFY_TEXT_CHAT_MSG_REQ = 1019


class ErrorCode(IntEnum):
    """Error codes carried in the ``error`` field of server replies."""

    SUCCESS = 0
    ERR_JSON = 1
    ERR_NETWORK = 2


class Frame(NamedTuple):
    """One decoded message: its request id and its body."""

    req_id: int
    payload: bytes


Payload = Union[bytes, bytearray, str]


def _as_bytes(payload: Payload) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return bytes(payload)


def encode_frame(req_id: int, payload: Payload) -> bytes:
    """Frame ``payload`` as a big-endian 16-bit id, 16-bit length, then the body."""
    body = _as_bytes(payload)
    if not 0 <= int(req_id) <= MAX_FIELD:
        raise ValueError(f"request id {int(req_id)} does not fit in 16 bits")
    if len(body) > MAX_FIELD:
        raise ValueError(f"payload of {len(body)} bytes is longer than {MAX_FIELD}")
    return _HEADER.pack(int(req_id), len(body)) + body


class FrameDecoder:
    """Reassembles frames from a stream of bytes that may arrive in pieces."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet part of a complete frame."""
        return len(self._buffer)

    def feed(self, data: bytes) -> list[Frame]:
        """Add ``data`` and return every frame that is now complete, in order."""
        self._buffer.extend(data)
        frames: list[Frame] = []
        while len(self._buffer) >= HEADER_SIZE:
            req_id, length = _HEADER.unpack_from(self._buffer)
            end = HEADER_SIZE + length
            if len(self._buffer) < end:
                break
            frames.append(Frame(req_id, bytes(self._buffer[HEADER_SIZE:end])))
            del self._buffer[:end]
        return frames