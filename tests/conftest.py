from __future__ import annotations

import pytest

from vimline.runtime import telemetry


@pytest.fixture(autouse=True, scope="session")
def quiet_telemetry() -> None:
    telemetry.configure(preset="quiet")
