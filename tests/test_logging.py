import json
import logging

from packages.common.logging import JsonFormatter


def _format(record: logging.LogRecord, **kwargs) -> dict:
    formatter = JsonFormatter("%(asctime)s %(level)s %(name)s %(message)s", **kwargs)
    return json.loads(formatter.format(record))


def test_json_record_carries_level_and_logger() -> None:
    record = logging.LogRecord("packages.uploads.gatekeeper", logging.INFO, __file__, 1, "upload_rejected", None, None)

    line = _format(record)

    assert line["level"] == "INFO"
    assert line["logger"] == "packages.uploads.gatekeeper"
    assert line["message"] == "upload_rejected"


def test_json_record_carries_service_context() -> None:
    record = logging.LogRecord("apps.api.main", logging.WARNING, __file__, 1, "api_started", None, None)

    line = _format(record, context={"service": "Vargo Agro", "environment": "test"})

    assert line["level"] == "WARNING"
    assert line["service"] == "Vargo Agro"
    assert line["environment"] == "test"
