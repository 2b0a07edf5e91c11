"""Shared fixtures for dataknobs_inval tests."""

import pytest

from dataknobs_inval import rule
from dataknobs_inval.settings import settings


@pytest.fixture(autouse=True)
def reset_settings():
    """Restore default settings after every test."""
    yield
    settings.reset()


@pytest.fixture
def calls():
    """List recording which marker rules ran."""
    return []


@pytest.fixture
def marker(calls):
    """Factory of rules that record their name and then pass or fail."""

    def make(name, fail=False):
        @rule
        def marked(check, value):
            calls.append(name)
            if fail:
                check.error(f"{name} failed")

        return marked

    return make


@pytest.fixture
def passing():
    """Rule that never records a violation."""
    return rule(lambda check, value: None)


@pytest.fixture
def failing():
    """Rule that always records an empty message."""
    return rule(lambda check, value: check.error(""))
