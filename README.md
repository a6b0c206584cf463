# xbchat

The client-side core of a small instant-messaging application, free of any
GUI toolkit. It holds:

- **User data** (`xbchat.models`): search results, friend applications,
  authorisation notices, friends, the logged-in user and text chat messages,
  all as dataclasses.
- **User state** (`xbchat.usermgr.UserManager`): the logged-in user, the
  friend list and friend map, pending applications, and paged loading (13
  friends a page) of the chat and contact lists.
- **The chat-server wire format** (`xbchat.protocol`): every message is a
  big-endian 16-bit request id, a big-endian 16-bit body length, then a JSON
  body. `encode_frame` builds a frame and `FrameDecoder` splits incoming
  bytes back into messages.
- **The TCP session** (`xbchat.tcpclient.TcpManager`): connects to the chat
  server named by a `ServerInfo`, sends frames, and turns each reply into a
  notification on one of its signals.
- **Input checks** (`xbchat.validators`): e-mail and password checks, and
  `TipErrors`, which keeps one message per kind of form error and reports
  the one to show.
- **Password masking** (`xbchat.obfuscate.xor_string`).
- **Widget state** without a toolkit: a selectable state widget
  (`xbchat.statewidget`), a countdown button (`xbchat.countdown`), a text
  field limited to a number of UTF-8 bytes (`xbchat.textlimit`), list rows
  (`xbchat.listitems`), the contact list and friend page (`xbchat.contacts`)
  and the user search list (`xbchat.search`).

Notifications travel through `xbchat.events.Signal`, a plain callback list:

```python
from xbchat.events import Signal

changed = Signal()
changed.connect(print)
changed.emit("hello")      # prints "hello"
changed.disconnect(print)  # ValueError if it was not connected
```

## Checking input

```python
from xbchat.validators import TipErr, TipErrors, is_valid_email, is_valid_password

is_valid_email("alice@example.com")        # True
password = "password"
is_valid_password(password, False)         # 6 to 15 letters, digits or !@#$%^&*
is_valid_password(password, True)          # the same, and "." is allowed too

errors = TipErrors()
errors.add(TipErr.TIP_PWD_ERR, "bad password")
errors.add(TipErr.TIP_EMAIL_ERR, "bad e-mail")
errors.current()                           # "bad e-mail": lowest kind first
errors.remove(TipErr.TIP_EMAIL_ERR)
```

`xor_string` XORs every UTF-16 code unit of a text with its length modulo
255; applying it twice gives the text back.

## Talking to the chat server

```python
from xbchat.protocol import ReqId, FrameDecoder, encode_frame

frame = encode_frame(ReqId.SEARCH_USER_REQ, b'{"uid":"1001"}')

decoder = FrameDecoder()
for message in decoder.feed(frame):
    print(message.req_id, message.payload)
```

`encode_frame` raises `ValueError` when the id or the body length does not
fit in 16 bits. `FrameDecoder.feed` keeps incomplete data until the rest
arrives.

`TcpManager.instance()` returns the one shared session.
`connect(server_info)` opens the connection, starts a reader thread and
emits `con_success` with `True` or `False`; `send(req_id, payload)` raises
`ConnectionError` when not connected; `close()` ends the session. Bytes read
go through `feed`, and each complete message is handed to `handle_message`,
which returns `False` for ids it has no handler for. Replies are turned into
emits on `switch_chat_dialog` (after a successful chat login, which also
fills in `UserManager`), `login_failed`, `user_search` (a `SearchInfo`, or
`None`), `friend_apply`, `add_auth_friend`, `auth_rsp` and `text_chat_msg`.

## Friends and paging

```python
from xbchat.usermgr import UserManager

users = UserManager.instance()
users.append_friend_list([
    {"uid": 1001, "name": "alice", "nick": "Alice", "icon": "", "sex": 0,
     "desc": "", "back": ""},
])
users.is_friend(1001)            # True
page = users.contact_list_page()
users.update_contact_loaded_count()
users.is_contact_loaded()        # True once every friend has been paged in
```

`uid`, `name` and `icon` read the logged-in user and raise `RuntimeError`
while nobody is logged in.

## What this package does not do

It has no HTTP client for the gate server, so registering, logging in,
requesting a verification code and resetting a password are not carried
out here; only the input checks for those forms are provided. It draws no
windows and has no command to start: the widget classes only keep state and
emit signals for a user interface to follow.

## Tests

The test suite uses pytest and lives in `tests/`.