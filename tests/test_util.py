import pytest

from diskprobe.util import (
    check_err,
    check_falsy,
    check_truthy,
    contains,
    contains_ignored_case,
    fatal,
    hash_string,
    is_match_regex,
    match_ignored_case,
    remove_string,
    state_status,
    str_to_int32,
    string_to_int32,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1", True),
        ("Yes", True),
        ("Ok", True),
        ("True", True),
        ("0", False),
        ("No", False),
        ("False", False),
        ("", False),
    ],
)
def test_check_truthy(value, expected):
    assert check_truthy(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1", False),
        ("Yes", False),
        ("Ok", False),
        ("True", False),
        ("0", True),
        ("No", True),
        ("False", True),
        ("", True),
    ],
)
def test_check_falsy(value, expected):
    assert check_falsy(value) is expected


@pytest.mark.parametrize("value, expected", [("6", 6), ("18", 18), ("32", 32)])
def test_string_to_int32(value, expected):
    assert string_to_int32(value) == expected


@pytest.mark.parametrize("value", ["", "test"])
def test_string_to_int32_rejects_bad_input(value):
    with pytest.raises(ValueError):
        string_to_int32(value)


def test_string_to_int32_empty_message():
    with pytest.raises(ValueError, match="Nil value to convert"):
        string_to_int32("")


def test_string_to_int32_rejects_out_of_range():
    with pytest.raises(ValueError):
        string_to_int32(str(2**31))


@pytest.mark.parametrize("value, expected", [("6", 6), ("18", 18), ("32", 32)])
def test_str_to_int32(value, expected):
    assert str_to_int32(value) == expected


@pytest.mark.parametrize("value", ["", "test"])
def test_str_to_int32_swallows_errors(value):
    assert str_to_int32(value) is None


@pytest.mark.parametrize("text", ["This is one string", "This is one string"])
def test_hash_string(text):
    assert hash_string(text) == "6192a12ec601c65b8375743eb66167ab"


def test_check_err_calls_handler_with_message():
    received = []
    check_err(RuntimeError("This is a test string"), received.append)
    check_err(None, received.append)
    assert received == ["This is a test string"]


def test_fatal_prints_and_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        fatal("something broke")
    assert excinfo.value.code == 1
    assert capsys.readouterr().err == "something broke\n"


@pytest.mark.parametrize("state, status", [(True, "enable"), (False, "disable")])
def test_state_status(state, status):
    assert state_status(state) == status


@pytest.mark.parametrize("name, expected", [("Key0", False), ("Key3", True)])
def test_contains(name, expected):
    assert contains(["Key1", "Key3"], name) is expected


@pytest.mark.parametrize("name, expected", [("keY0", False), ("KEy3", True)])
def test_contains_ignored_case(name, expected):
    assert contains_ignored_case(["Key1", "Key3"], name) is expected


@pytest.mark.parametrize(
    "path, expected",
    [("/dev/loop0", True), ("/dev/sr0", True), ("/dev/sdb", False)],
)
def test_match_ignored_case(path, expected):
    assert match_ignored_case(["loop", "/dev/sr0"], path) is expected


SLICE1 = ["val1", "val2", "val3"]
SLICE2 = ["val1", "val2", "val3", "val1"]
SLICE3 = ["val1", "val2", "val1", "val3"]
SLICE4 = ["val2", "val1", "val1", "val3"]


@pytest.mark.parametrize(
    "items, value, expected",
    [
        (SLICE1, "val1", ["val2", "val3"]),
        (SLICE1, "val3", ["val1", "val2"]),
        (SLICE1, "val2", ["val1", "val3"]),
        (SLICE2, "val1", ["val2", "val3"]),
        (SLICE3, "val1", ["val2", "val3"]),
        (SLICE4, "val1", ["val2", "val3"]),
    ],
)
def test_remove_string(items, value, expected):
    assert remove_string(items, value) == expected


def test_remove_string_leaves_input_untouched():
    items = list(SLICE2)
    remove_string(items, "val1")
    assert items == SLICE2


@pytest.mark.parametrize(
    "text, expected",
    [("/dev/sda", True), ("/dev/sda1", True), ("/dev/sdaa", False)],
)
def test_is_match_regex(text, expected):
    assert is_match_regex("/dev/sda(([0-9]*|p[0-9]+))$", text) is expected