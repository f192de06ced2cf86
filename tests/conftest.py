"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed pycnab package.
"""

import json
import pytest
from pathlib import Path

HERE = Path(__file__).resolve().parent
FIXTURES = HERE.parent / "fixtures"

MINIMAL_BUNDLE = (
    '{"name":"aristotle","invocationImages":[],'
    '"schemaVersion":"1.0.0","version":"1.0.0"}'
)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def hello_bundle_path() -> Path:
    """The helloworld descriptor exercising every top-level field."""
    return FIXTURES / "bundle.json"


@pytest.fixture
def hello_bundle_data(hello_bundle_path) -> dict:
    return json.loads(hello_bundle_path.read_text(encoding="utf-8"))


@pytest.fixture
def minimal_bundle_json() -> str:
    return MINIMAL_BUNDLE


@pytest.fixture
def make_bundle_json():
    """Factory: minimal descriptor text with extra top-level fields merged in."""
    def _make(**fields) -> str:
        data = json.loads(MINIMAL_BUNDLE)
        data.update(fields)
        return json.dumps(data)
    return _make
