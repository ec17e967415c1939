import logging
import os
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def _isolate_cli(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep env config out of CLI runs and drop handlers bound to closed runner streams."""
    for key in list(os.environ):
        if key.startswith("PITCH_TRACKER__"):
            monkeypatch.delenv(key)
    yield
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.WARNING)
