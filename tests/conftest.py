"""Pytest configuration for taiclock tests.

Exhaustive sweeps (e.g. every CUC fine value) are marked ``extra`` and only
run with ``pytest --run-extra``.
"""

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-extra",
        action="store_true",
        default=False,
        help="include tests marked 'extra' (exhaustive CUC and leap second sweeps)",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-extra"):
        return

    skip_extra = pytest.mark.skip(reason="exhaustive sweep, use --run-extra")
    for item in items:
        if item.get_closest_marker("extra") is not None:
            item.add_marker(skip_extra)
