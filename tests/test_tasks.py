import logging
from unittest.mock import MagicMock

from fcm_push.tasks import process_on_response


class TestProcessOnResponse:
    def test_no_callback_is_noop(self) -> None:
        assert process_on_response(None, object()) is None

    def test_invokes_callback_once(self, notification) -> None:
        on_response = MagicMock()

        process_on_response(on_response, notification)

        on_response.assert_called_once_with(notification)

    def test_callback_failure_is_logged(self, notification, caplog) -> None:
        on_response = MagicMock(side_effect=RuntimeError("boom"))

        with caplog.at_level(logging.ERROR):
            process_on_response(on_response, notification)

        assert caplog.records[0].getMessage() == "on_response callback failed"
        assert caplog.records[0].exc_info is not None
