"""Errors are logged once then raised; logger configuration."""

import logging

import pytest

import sipuri
from sipuri import SIP, InvalidComponentError


def test_errors_are_logged_and_marked(caplog, alice):
    with caplog.at_level(logging.ERROR, logger='SIP'):
        with pytest.raises(InvalidComponentError) as e:
            alice.to = 'a?b'
    assert e.value.logged is True
    assert e.value.__suppress_context__
    assert [r.name for r in caplog.records] == ['SIP']
    assert "bad component(to): 'a?b'" in caplog.records[0].getMessage()


def test_package_loggers_raise_and_log():
    for name,_ in sipuri.LOGLEVELS:
        assert isinstance(logging.getLogger(name), sipuri.Logger)


def test_setloglevel():
    log = logging.getLogger('URI')
    level = log.level
    try:
        sipuri.setloglevel('URI', 'DEBUG')
        assert log.level == logging.DEBUG
    finally:
        log.setLevel(level)
    with pytest.raises(KeyError):
        sipuri.setloglevel('Transport', 'DEBUG')


def test_parse_logs_dispatch(caplog):
    with caplog.at_level(logging.DEBUG, logger='URI'):
        sipuri.parse('sip:alice@atlanta.com')
    assert 'sip --> SIP' in caplog.text


def test_construction_does_not_log(caplog):
    with caplog.at_level(logging.DEBUG):
        SIP.build(['alice@atlanta.com', [['subject', 'hi']]])
    assert caplog.records == []


def test_formatter_highlights_uris():
    record = logging.LogRecord('SIP', logging.ERROR, __file__, 1, 'bad sip:alice@atlanta.com\nline', None, None)
    text = sipuri.ColoredFormatter('%(indentedmessage)s').format(record)
    assert '\x1b[92msip:alice@atlanta.com\x1b[m' in text
    assert '\n   line' in text
