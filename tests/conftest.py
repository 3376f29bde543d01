import sys
from pathlib import Path

import pytest

# Ensure src and the shared schema module are importable without installation
_tests_dir = Path(__file__).resolve().parent
sys.path.insert(0, str(_tests_dir.parent / "src"))
sys.path.insert(0, str(_tests_dir))

from protodigest import ProtoHasher  # noqa: E402
from schema_fixtures import api as _api  # noqa: E402


@pytest.fixture
def hasher():
    return ProtoHasher()


@pytest.fixture(scope="session")
def api():
    return _api
