"""Input checks shared by the login, register and reset forms."""

from __future__ import annotations

import re
from enum import IntEnum

_EMAIL = re.compile(r"(\w+)(\.|_)?(\w*)@(\w+)(\.(\w+))+", re.ASCII)
_PLAIN_CHARSET = re.compile(r"[a-zA-Z0-9!@#$%^&*]{6,15}")
_DOTTED_CHARSET = re.compile(r"[a-zA-Z0-9!@#$%^&*.]{6,15}")


class TipErr(IntEnum):
    """Kinds of form error; lower values are shown first."""

    TIP_SUCCESS = 0
    TIP_EMAIL_ERR = 1
    TIP_PWD_ERR = 2
    TIP_CONFIRM_ERR = 3
    TIP_PWD_CONFIRM = 4
    TIP_VARIFY_ERR = 5
    TIP_USER_ERR = 6


class TipErrors:
    """The outstanding form errors, one message per kind."""

    def __init__(self) -> None:
        self._errors: dict[TipErr, str] = {}

    def add(self, tip: TipErr, message: str) -> None:
        """Record or replace the message for ``tip``."""
        self._errors[tip] = message

    def remove(self, tip: TipErr) -> None:
        """Forget the message for ``tip``, if there is one."""
        self._errors.pop(tip, None)

    def current(self) -> str | None:
        """The message of the lowest outstanding kind, or None when all is well."""
        if not self._errors:
            return None
        return self._errors[min(self._errors)]

    def __len__(self) -> int:
        return len(self._errors)


def is_valid_email(email: str) -> bool:
    """True if ``email`` contains something shaped like an e-mail address."""
    return _EMAIL.search(email) is not None


def is_valid_password(password: str, allow_dot: bool = False) -> bool:
    """True if ``password`` is 6 to 15 letters, digits or ``!@#$%^&*`` (and ``.`` if allowed)."""
    pattern = _DOTTED_CHARSET if allow_dot else _PLAIN_CHARSET
    return pattern.fullmatch(password) is not None