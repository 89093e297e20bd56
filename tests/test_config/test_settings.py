# tests/test_config/test_settings.py
import os
import pytest
from pydantic import ValidationError
from sqlweave.config.settings import App


def setup_function():
    for k in list(os.environ):
        if k.startswith("SQW_"):
            del os.environ[k]


def teardown_function():
    for k in list(os.environ):
        if k.startswith("SQW_"):
            del os.environ[k]


def test_app_default_settings():
    app = App()
    assert app.beQuiet is True
    assert app.varMarker == "."
    assert app.strictDelimiters is True


def test_app_env_override():
    os.environ["SQW_BEQUIET"] = "false"
    os.environ["SQW_VARMARKER"] = ":"
    os.environ["SQW_STRICTDELIMITERS"] = "false"

    app = App()
    assert app.beQuiet is False
    assert app.varMarker == ":"
    assert app.strictDelimiters is False


def test_app_empty_marker_rejected():
    os.environ["SQW_VARMARKER"] = ""
    with pytest.raises(ValidationError):
        App()
