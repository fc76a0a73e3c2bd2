from __future__ import annotations

import json
import logging

from incidentstore.utils.logging_utils import (
    RequestContextFilter,
    clear_request_context,
    configure_logging,
    get_request_context,
    set_request_context,
    structured_log,
)


def test_request_context_roundtrip():
    tokens = set_request_context(request_id='req-1')
    try:
        assert get_request_context()['request_id'] == 'req-1'
    finally:
        clear_request_context(tokens)

    assert get_request_context()['request_id'] is None


def test_context_filter_injects_request_id():
    record = logging.LogRecord('x', logging.INFO, __file__, 1, 'msg', None, None)
    tokens = set_request_context(request_id='req-2')
    try:
        assert RequestContextFilter().filter(record) is True
    finally:
        clear_request_context(tokens)
    assert record.request_id == 'req-2'


def test_structured_log_emits_json(caplog):
    logger = logging.getLogger('incidentstore.test')
    with caplog.at_level(logging.INFO, logger='incidentstore.test'):
        structured_log(logger, logging.INFO, 'http_request', path='/api/v1/incidents', status_code=200)
    payload = json.loads(caplog.records[-1].getMessage())
    assert payload == {'event': 'http_request', 'path': '/api/v1/incidents', 'status_code': 200}


def test_configure_logging_adds_file_sink(tmp_path):
    log_file = tmp_path / 'app.log'
    root = logging.getLogger()
    before = list(root.handlers)
    old_level = root.level
    try:
        configure_logging('warning', str(log_file))
        configure_logging('warning', str(log_file))
        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler) and h.baseFilename == str(log_file)]
        assert len(file_handlers) == 1
        assert root.level == logging.WARNING

        logging.getLogger('incidentstore.test').warning('disk is full')
        file_handlers[0].flush()
        text = log_file.read_text(encoding='utf-8')
        assert 'WARNING' in text
        assert 'disk is full' in text
        assert '[request_id=-]' in text
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(old_level)
