import json
import logging

from starlette.requests import Request

from tourfx.core import errors


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_server_error_handler_logs_the_traceback():
    handler = ListHandler()
    logger = logging.getLogger("tourfx.errors")
    logger.addHandler(handler)
    try:
        try:
            raise RuntimeError("boom")
        except RuntimeError as caught:
            exc = caught
        # the middleware invokes the handler outside the except block
        request = Request({"type": "http", "method": "GET", "path": "/rates", "headers": [], "query_string": b""})
        response = errors.server_error_handler(request, exc)
    finally:
        logger.removeHandler(handler)

    assert response.status_code == 500
    assert json.loads(response.body)["error"] == "internal_error"
    [record] = handler.records
    assert record.exc_info[1] is exc
    assert record.path == "/rates"
