import pytest

from auxiliary import (
    convert_to_bytes,
    format_bytes,
    format_du_size,
    format_path_for_display,
    parse_selection,
    parse_size_token,
)


@pytest.mark.parametrize(
    "size, unit, expected",
    [
        (2.5, "G", int(2.5 * 2**30)),
        (100, "K", 102400),
        (1, "XB", 0),
        (1.2, "G", int(1.2 * 1024**3)),
        (500, "M", 500 * 1024**2),
        (2, "T", 2 * 1024**4),
        (512, "B", 512),
        (3, "gb", 3 * 1024**3),
        (3, "GB", 3 * 1024**3),
        (1.5, "kb", 1536),
        (7, "", 0),
        (7, "Q", 0),
    ],
)
def test_convert_to_bytes(size: float, unit: str, expected: int) -> None:
    assert convert_to_bytes(size, unit) == expected


def test_convert_to_bytes_truncates() -> None:
    assert convert_to_bytes(1.9999, "B") == 1


@pytest.mark.parametrize(
    "token, expected",
    [
        ("1.2G", (1.2, "G")),
        ("500M", (500.0, "M")),
        ("0", (0.0, "")),
        ("4.0K", (4.0, "K")),
        (".5T", (0.5, "T")),
        ("12GB", (12.0, "GB")),
    ],
)
def test_parse_size_token(token: str, expected: tuple) -> None:
    assert parse_size_token(token) == expected


@pytest.mark.parametrize("token", ["", "G", "error", "-", "abc1"])
def test_parse_size_token_rejects_non_numbers(token: str) -> None:
    with pytest.raises(ValueError):
        parse_size_token(token)


@pytest.mark.parametrize(
    "size_bytes, expected",
    [
        (0, "0"),
        (512, "512B"),
        (1024, "1.0K"),
        (12 * 1024, "12K"),
        (500 * 1024**2, "500M"),
        (int(1.2 * 1024**3), "1.2G"),
        (3 * 1024**4, "3.0T"),
    ],
)
def test_format_du_size(size_bytes: int, expected: str) -> None:
    assert format_du_size(size_bytes) == expected


def test_format_du_size_parses_back() -> None:
    size, unit = parse_size_token(format_du_size(500 * 1024**2))
    assert convert_to_bytes(size, unit) == 500 * 1024**2


def test_format_bytes() -> None:
    assert format_bytes(789) == "789 B"
    assert format_bytes(2048) == "2.0 KiB"
    assert format_bytes(3 * 1024**3) == "3.0 GiB"


def test_format_path_for_display() -> None:
    assert format_path_for_display("/home/me/code/node_modules", "/home/me") == "~/code/node_modules"


@pytest.mark.parametrize(
    "spec, count, expected",
    [
        ("1,3-5", 6, [0, 2, 3, 4]),
        ("all", 6, [0, 1, 2, 3, 4, 5]),
        (" ALL ", 3, [0, 1, 2]),
        ("0", 6, []),
        ("7", 6, []),
        ("2-1", 6, []),
        ("1,1-2", 6, [0, 0, 1]),
        ("3,1", 6, [2, 0]),
        ("5-9", 6, [4, 5]),
        ("0-2", 6, [0, 1]),
        ("1, 2 , 3", 6, [0, 1, 2]),
        (" 2 - 3 ", 6, [1, 2]),
        ("x,2", 6, [1]),
        ("1-2-3,4", 6, [3]),
        ("a-3", 6, []),
        ("-3", 6, []),
        ("", 6, []),
        ("1,all", 2, [0, 1]),
        ("1_0", 20, []),
        ("+3", 6, []),
        ("1-+3", 6, []),
        ("\u0663", 6, []),
        ("1_0-12", 20, []),
        ("0x2", 6, []),
        ("all", 0, []),
        ("1", 0, []),
    ],
)
def test_parse_selection(spec: str, count: int, expected: list) -> None:
    assert parse_selection(spec, count) == expected
