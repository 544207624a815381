import logging

from utils.config_log import RequestIDFilter, ScrubFilter, request_id_ctx, scrub_for_log
from utils.exceptions import _first_message


def test_scrub_masks_secrets_and_audio():
    data = {"audio": "UklGRi4uLg==", "targetPhrase": "Hello", "headers": {"Authorization": "Bearer x"}}

    assert scrub_for_log(data) == {"audio": "***", "targetPhrase": "Hello", "headers": {"Authorization": "***"}}


def test_scrub_filter_rewrites_extra_data():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "saved %s %s", ({"password": "p"}, "x"), None)
    record.data = {"audio_base64": "abc", "language": "en-US"}

    assert ScrubFilter().filter(record)
    assert record.data == {"audio_base64": "***", "language": "en-US"}
    assert record.args == ({"password": "***"}, "x")


def test_request_id_filter():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", (), None)
    token = request_id_ctx.set("rid-42")
    try:
        RequestIDFilter().filter(record)
    finally:
        request_id_ctx.reset(token)

    assert record.request_id == "rid-42"


def test_first_message_digs_into_field_errors():
    assert _first_message({"targetPhrase": ["This field is required."]}) == "This field is required."
    assert _first_message({"detail": "Not found."}) == "Not found."
    assert _first_message([]) == ""
