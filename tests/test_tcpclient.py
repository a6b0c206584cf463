import json
import socket
import threading

import pytest

from xbchat.models import AddFriendApply, AuthInfo, AuthRsp, SearchInfo, TextChatMsg
from xbchat.protocol import ErrorCode, FrameDecoder, ReqId, encode_frame
from xbchat.tcpclient import ServerInfo, TcpManager
from xbchat.usermgr import UserManager


def body(obj):
    return json.dumps(obj).encode("utf-8")


@pytest.fixture
def users():
    return UserManager()


@pytest.fixture
def manager(users):
    mgr = TcpManager(user_manager=users)
    yield mgr
    mgr.close()


def test_login_success_updates_user_manager(manager, users):
    switched = []
    manager.switch_chat_dialog.connect(lambda: switched.append(True))
    reply = {
        "error": 0,
        "uid": 7,
        "name": "alice",
        "nick": "Al",
        "icon": "head.png",
        "sex": 1,
        "token": "token",
        "apply_list": [{"uid": 9, "name": "bob", "status": 1}],
        "friend_list": [{"uid": 11, "name": "carol"}, {"uid": 12, "name": "dave"}],
    }
    assert manager.handle_message(ReqId.CHAT_LOGIN_RSP, body(reply)) is True
    assert switched == [True]
    assert users.uid == 7
    assert users.name == "alice"
    assert users.token == "token"
    assert [a.name for a in users.apply_list] == ["bob"]
    assert users.is_friend(11) and users.is_friend(12)


def test_login_error_emits_failure(manager, users):
    failures = []
    manager.login_failed.connect(failures.append)
    manager.handle_message(ReqId.CHAT_LOGIN_RSP, body({"error": ErrorCode.ERR_NETWORK}))
    assert failures == [ErrorCode.ERR_NETWORK]
    assert users.user_info is None


def test_login_without_error_field_is_json_error(manager):
    failures = []
    manager.login_failed.connect(failures.append)
    manager.handle_message(ReqId.CHAT_LOGIN_RSP, body({"uid": 3}))
    assert failures == [ErrorCode.ERR_JSON]


def test_login_invalid_json_is_ignored(manager):
    failures = []
    manager.login_failed.connect(failures.append)
    manager.switch_chat_dialog.connect(lambda: failures.append("switch"))
    manager.handle_message(ReqId.CHAT_LOGIN_RSP, b"not json")
    assert failures == []


def test_search_user_success(manager):
    results = []
    manager.user_search.connect(results.append)
    reply = {"error": 0, "uid": 5, "name": "eve", "nick": "E", "desc": "hi", "sex": 0, "icon": "i"}
    manager.handle_message(ReqId.SEARCH_USER_RSP, body(reply))
    assert results == [SearchInfo(uid=5, name="eve", nick="E", desc="hi", sex=0, icon="i")]


def test_search_user_failure_emits_none(manager):
    results = []
    manager.user_search.connect(results.append)
    manager.handle_message(ReqId.SEARCH_USER_RSP, body({"error": ErrorCode.ERR_JSON}))
    manager.handle_message(ReqId.SEARCH_USER_RSP, body({}))
    assert results == [None, None]


def test_notify_add_friend(manager):
    applies = []
    manager.friend_apply.connect(applies.append)
    reply = {"error": 0, "applyuid": 21, "name": "fred", "desc": "d", "icon": "x", "nick": "F", "sex": 1}
    manager.handle_message(ReqId.NOTIFY_ADD_FRIEND_REQ, body(reply))
    assert applies == [AddFriendApply(from_uid=21, name="fred", desc="d", icon="x", nick="F", sex=1)]


def test_notify_auth_friend(manager):
    auths = []
    manager.add_auth_friend.connect(auths.append)
    reply = {"error": 0, "fromuid": 31, "name": "gina", "nick": "G", "icon": "y", "sex": 0}
    manager.handle_message(ReqId.NOTIFY_AUTH_FRIEND_REQ, body(reply))
    assert auths == [AuthInfo(uid=31, name="gina", nick="G", icon="y", sex=0)]


def test_auth_friend_rsp(manager):
    rsps = []
    manager.auth_rsp.connect(rsps.append)
    reply = {"error": 0, "uid": 41, "name": "hal", "nick": "H", "icon": "z", "sex": 1}
    manager.handle_message(ReqId.AUTH_FRIEND_RSP, body(reply))
    manager.handle_message(ReqId.AUTH_FRIEND_RSP, body({"error": ErrorCode.ERR_NETWORK}))
    assert rsps == [AuthRsp(uid=41, name="hal", nick="H", icon="z", sex=1)]


def test_notify_text_chat(manager):
    msgs = []
    manager.text_chat_msg.connect(msgs.append)
    reply = {
        "error": 0,
        "fromuid": 1,
        "touid": 2,
        "text_array": [{"msgid": "a", "content": "hello"}, {"msgid": "b", "content": "bye"}],
    }
    manager.handle_message(ReqId.NOTIFY_TEXT_CHAT_MSG_REQ, body(reply))
    assert len(msgs) == 1
    msg = msgs[0]
    assert isinstance(msg, TextChatMsg)
    assert (msg.from_uid, msg.to_uid) == (1, 2)
    assert [m.msg_content for m in msg.chat_msgs] == ["hello", "bye"]


def test_unknown_id_not_handled(manager):
    assert manager.handle_message(ReqId.CHAT_LOGIN, b"{}") is False


def test_feed_dispatches_split_frames(manager):
    results = []
    manager.user_search.connect(results.append)
    data = encode_frame(ReqId.SEARCH_USER_RSP, body({"error": 1}))
    manager.feed(data[:5])
    assert results == []
    manager.feed(data[5:])
    assert results == [None]


def test_send_without_connection_raises(manager):
    with pytest.raises(ConnectionError):
        manager.send(ReqId.CHAT_LOGIN, b"{}")


def test_connect_failure_emits_false(users):
    def refuse(address):
        raise ConnectionRefusedError("refused")

    mgr = TcpManager(user_manager=users, connector=refuse)
    outcomes = []
    mgr.con_success.connect(outcomes.append)
    assert mgr.connect(ServerInfo(uid=1, host="localhost", port="8090", token="token")) is False
    assert outcomes == [False]
    assert mgr.connected is False


def test_connect_send_and_receive(users):
    local, peer = socket.socketpair()
    addresses = []

    def connector(address):
        addresses.append(address)
        return local

    mgr = TcpManager(user_manager=users, connector=connector)
    outcomes = []
    mgr.con_success.connect(outcomes.append)
    got = threading.Event()
    results = []

    def on_search(info):
        results.append(info)
        got.set()

    mgr.user_search.connect(on_search)
    try:
        assert mgr.connect(ServerInfo(uid=1, host="localhost", port="8090", token="token"))
        assert outcomes == [True]
        assert addresses == [("localhost", 8090)]

        mgr.send_data.emit(ReqId.CHAT_LOGIN, b'{"uid":1}')
        peer.settimeout(5)
        received = FrameDecoder()
        frames = []
        while not frames:
            frames = received.feed(peer.recv(4096))
        assert frames[0].req_id == ReqId.CHAT_LOGIN
        assert frames[0].payload == b'{"uid":1}'

        peer.sendall(encode_frame(ReqId.SEARCH_USER_RSP, body({"error": 1})))
        assert got.wait(5)
        assert results == [None]
    finally:
        mgr.close()
        peer.close()
    assert mgr.connected is False


def test_instance_is_shared():
    first = TcpManager.instance()
    failures = []
    first.login_failed.connect(failures.append)
    try:
        TcpManager.instance().handle_message(
            ReqId.CHAT_LOGIN_RSP, body({"error": ErrorCode.ERR_NETWORK})
        )
    finally:
        first.login_failed.disconnect(failures.append)
    assert failures == [ErrorCode.ERR_NETWORK]