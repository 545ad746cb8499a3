import pytest

from pgpkit.normalize_lines import LineBreak, iter_normalized, normalize

INPUT = "This is a string \n with \r some \n\r\n random newlines\r\r\n\n"


def test_normalized_lf():
    assert normalize(INPUT, LineBreak.LF) == (
        b"This is a string \n with \n some \n\n random newlines\n\n\n"
    )


def test_normalized_cr():
    assert normalize(INPUT, LineBreak.CR) == (
        b"This is a string \r with \r some \r\r random newlines\r\r\r"
    )


def test_normalized_crlf():
    assert normalize(INPUT, LineBreak.CRLF) == (
        b"This is a string \r\n with \r\n some \r\n\r\n random newlines\r\n\r\n\r\n"
    )


@pytest.mark.parametrize("style", list(LineBreak))
def test_iterator_matches_bytes(style):
    assert bytes(iter_normalized(INPUT.encode(), style)) == normalize(INPUT, style)


@pytest.mark.parametrize("style", list(LineBreak))
def test_text_without_breaks_unchanged(style):
    text = "一门赋予每个人构建可靠且高效软件能力的语言。"
    assert normalize(text, style) == text.encode("utf-8")


@pytest.mark.parametrize("style", list(LineBreak))
def test_idempotent(style):
    once = normalize(INPUT, style)
    assert normalize(once, style) == once


def test_trailing_cr_completed_under_crlf():
    assert normalize(b"a\r", LineBreak.CRLF) == b"a\r\n"


def test_empty_input():
    assert normalize(b"", LineBreak.CRLF) == b""