"""Fixtures for facade contract tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.fixtures.runtimes import REDIRECTED_STATES, STATES, make_facade

if TYPE_CHECKING:
    from binstring.service_layer.dispatcher import BinString


@pytest.fixture(params=STATES, scope="module")
def strings(request: pytest.FixtureRequest) -> BinString:
    """Return a facade in each capability state.

    Module scoped so Hypothesis examples reuse one facade per state; the
    facade holds no per-call state.
    """
    return make_facade(request.param)


@pytest.fixture(params=REDIRECTED_STATES, scope="module")
def redirected_strings(request: pytest.FixtureRequest) -> BinString:
    """Return a facade in each state where every family is overloaded."""
    return make_facade(request.param)
