import os
import sys
import asyncio
import inspect

import pytest

# Ensure project root is on sys.path so `import travel_resolver` works in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
HERE = os.path.dirname(os.path.abspath(__file__))
if HERE not in sys.path:
    sys.path.insert(0, HERE)

from travel_resolver.config import Settings
from travel_resolver.obs.context import clear_context
from travel_resolver.obs.metrics import reset_metrics

from payloads import flight_status_payload


def pytest_pyfunc_call(pyfuncitem):
    """Allow running async tests without pytest-asyncio.

    If the test function is a coroutine, run it in a fresh event loop.
    """
    testfunction = pyfuncitem.obj
    if inspect.iscoroutinefunction(testfunction):
        funcargs = pyfuncitem.funcargs
        sig = inspect.signature(testfunction)
        # Filter only the parameters that the test function expects
        allowed = {name: funcargs[name] for name in sig.parameters.keys() if name in funcargs}
        asyncio.run(testfunction(**allowed))
        return True
    return None


@pytest.fixture(autouse=True)
def clean_observability():
    reset_metrics()
    clear_context()
    yield
    reset_metrics()
    clear_context()


@pytest.fixture
def unconfigured_settings():
    return Settings(
        _env_file=None,
        AMADEUS_CLIENT_ID=None,
        AMADEUS_CLIENT_SECRET=None,
        OPENAI_API_KEY="sk-test",
        TZ="UTC",
    )


@pytest.fixture
def configured_settings():
    return Settings(
        _env_file=None,
        AMADEUS_CLIENT_ID="client-id",
        AMADEUS_CLIENT_SECRET="client-secret",
        OPENAI_API_KEY="sk-test",
        TZ="UTC",
    )


@pytest.fixture
def status_json():
    return flight_status_payload()
