import pytest

from jctl2gray.errors import (
    InsufficientLogLevel,
    InternalError,
    Jctl2grayError,
    JournalIOError,
    JsonParsingError,
    NoMessage,
)


@pytest.mark.parametrize(
    "cls, prefix",
    [
        (JournalIOError, "[IO]"),
        (JsonParsingError, "[JSON parsing]"),
        (InternalError, "[Internal]"),
    ],
)
def test_prefixed_errors_render_reason(cls, prefix):
    err = cls("something broke")
    assert str(err) == f"{prefix} something broke"
    assert err.reason == "something broke"


def test_insufficient_log_level_description():
    assert str(InsufficientLogLevel()) == "insufficient log level"


def test_no_message_description():
    assert str(NoMessage()) == "no message found"


@pytest.mark.parametrize(
    "make, expected",
    [
        (lambda: JournalIOError("x"), "[IO] x"),
        (lambda: JsonParsingError("x"), "[JSON parsing] x"),
        (lambda: InternalError("x"), "[Internal] x"),
        (InsufficientLogLevel, "insufficient log level"),
        (NoMessage, "no message found"),
    ],
)
def test_all_errors_share_base(make, expected):
    err = make()
    assert isinstance(err, Jctl2grayError)
    assert isinstance(err, Exception)
    assert str(err) == expected


def test_specific_error_is_catchable_alone():
    no_message = NoMessage()
    assert not isinstance(no_message, InternalError)
    assert not isinstance(no_message, InsufficientLogLevel)
    assert str(no_message) == "no message found"

    internal = InternalError("stdout closed")
    assert not isinstance(internal, NoMessage)
    assert not isinstance(internal, JournalIOError)
    assert internal.reason == "stdout closed"
    assert str(internal) == "[Internal] stdout closed"