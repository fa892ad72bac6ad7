"""
Fixtures for the framework unit tests.

Every fixture is built on the in-memory FakeDriver and FakeClock, so no
browser is started and waits complete instantly.
"""

import pytest

from testsuites.unit.fakes import HOST, FakeClock, FakeDriver
from uiready.framework.config import SessionConfig
from uiready.framework.resolver import ElementResolver
from uiready.framework.session import DriverEnvironment, Session


@pytest.fixture
def fake_driver():
    return FakeDriver()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def resolver(fake_driver, fake_clock):
    return ElementResolver(fake_driver, clock=fake_clock.now, sleep=fake_clock.sleep)


@pytest.fixture
def driver_environment(fake_driver):
    return DriverEnvironment(SessionConfig(), driver_factory=lambda config: fake_driver)


@pytest.fixture
def session(driver_environment, resolver):
    session = Session(HOST, driver_environment, resolver=resolver)
    yield session
    session.close()
