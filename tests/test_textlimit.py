from xbchat.textlimit import LimitedEdit, truncate_utf8


def test_no_limit_keeps_text():
    assert truncate_utf8("hello world", 0) == "hello world"
    assert truncate_utf8("hello world", -1) == "hello world"


def test_short_text_unchanged():
    assert truncate_utf8("abc", 10) == "abc"


def test_ascii_cut():
    text = "hello"
    assert truncate_utf8(text, 3) == text[:3]


def test_multibyte_whole_character_kept():
    text = "你好"
    assert truncate_utf8(text, 3) == text[0]


def test_split_character_becomes_replacement():
    assert truncate_utf8("a中", 2) == "a\ufffd"


def test_ascii_result_fits_limit():
    for limit in range(1, 8):
        assert len(truncate_utf8("abcdefghij", limit).encode("utf-8")) == limit


def test_edit_limits_text():
    edit = LimitedEdit()
    edit.set_max_length(4)
    edit.set_text("abcdefg")
    assert edit.text == "abcd"


def test_edit_emits_each_change():
    edit = LimitedEdit(max_len=2)
    seen = []
    edit.text_changed.connect(seen.append)
    edit.set_text("xyz")
    assert seen == ["xyz", "xy"]


def test_edit_same_text_emits_nothing():
    edit = LimitedEdit()
    edit.set_text("same")
    seen = []
    edit.text_changed.connect(seen.append)
    edit.set_text("same")
    assert seen == []


def test_edit_unlimited_by_default():
    edit = LimitedEdit()
    long_text = "z" * 500
    edit.set_text(long_text)
    assert edit.text == long_text


def test_focus_out_emits():
    edit = LimitedEdit()
    hits = []
    edit.focus_lost.connect(lambda: hits.append(1))
    edit.focus_out()
    assert hits == [1]