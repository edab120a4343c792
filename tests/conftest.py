from __future__ import annotations

from collections.abc import Iterator

import pytest

from buttonlock.global_set import clear_global_bindings


@pytest.fixture(autouse=True)
def _isolate_global_bindings() -> Iterator[None]:
    clear_global_bindings()
    yield
    clear_global_bindings()
