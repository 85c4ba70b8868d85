"""Shared fixtures for the sipuri test suite."""

import pytest

import sipuri


@pytest.fixture
def parse():
    return sipuri.parse


@pytest.fixture
def alice():
    """alice@atlanta.com with a subject and a second recipient."""
    return sipuri.SIP.build(['alice@atlanta.com', [['subject', 'project%20x'], ['to', 'bob@biloxi.com']]])


@pytest.fixture
def registry():
    """A private registry, so tests never touch the package one."""
    return sipuri.SchemeRegistry()
