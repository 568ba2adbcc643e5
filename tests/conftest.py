"""Shared test fixtures for svcmodel.

Provides raw and decoded model documents plus an isolated environment for
configuration tests. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from svcmodel.models import Model


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Raw document fixtures (plain dicts loaded from JSON files)
# ---------------------------------------------------------------------------


@pytest.fixture
def lambda_raw() -> dict[str, Any]:
    """Load the raw Lambda-style model document."""
    with open(FIXTURES_DIR / "lambda.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def minimal_raw() -> dict[str, Any]:
    """A small valid document with one operation and three shapes."""
    return {
        "version": "2.0",
        "metadata": {
            "apiVersion": "2020-01-01",
            "endpointPrefix": "widgets",
            "protocol": "json",
            "serviceFullName": "Widget Service",
            "serviceId": "Widgets",
            "signatureVersion": "v4",
        },
        "operations": {
            "GetWidget": {
                "name": "GetWidget",
                "http": {"method": "POST", "requestUri": "/"},
                "input": {"shape": "GetWidgetInput"},
                "output": {"shape": "Widget"},
                "errors": [],
                "documentation": "<p>Returns a widget.</p>",
            }
        },
        "shapes": {
            "GetWidgetInput": {
                "type": "structure",
                "required": ["Id"],
                "members": {"Id": {"shape": "String"}},
            },
            "Widget": {
                "type": "structure",
                "members": {"Id": {"shape": "String"}},
            },
            "String": {"type": "string"},
        },
        "documentation": "Widget service.",
    }


# ---------------------------------------------------------------------------
# Decoded model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def lambda_model(lambda_raw: dict[str, Any]) -> Model:
    """Decoded Lambda-style model."""
    from svcmodel.parser.decoder import decode_model

    return decode_model(lambda_raw)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration lookups to a temporary directory.

    Clears all SVCMODEL_* environment variables and changes the working
    directory to tmp_path so a stray ``svcmodel.json`` is never picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in [
        "SVCMODEL_CONFIG",
        "SVCMODEL_CHECK_REFERENCES",
        "SVCMODEL_NORMALIZE_DOCUMENTATION",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path
