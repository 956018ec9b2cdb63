# type: ignore
import logging
import os

import pytest


def init_testsuite_env():
    """Initialize testsuite environment."""
    # Force UTC timezone
    os.environ["TZ"] = "UTC"
    # Ignore user configuration files, must be set before importing openvex
    os.environ["OPENVEX_CONFIG"] = "/dev/null"
    if "OPENVEX_ENABLE_FEATURE" in os.environ:
        del os.environ["OPENVEX_ENABLE_FEATURE"]

    import openvex.log

    # Activate full debug logs
    openvex.log.activate(level=logging.DEBUG)


init_testsuite_env()


@pytest.fixture(autouse=True)
def run_in_tmp_dir(tmp_path, monkeypatch):
    """Run each test in its own temporary directory."""
    monkeypatch.chdir(tmp_path)
