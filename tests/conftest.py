"""Root conftest for all tests - shared fixtures."""
import sys
from pathlib import Path

import pytest

# Add src directory to path
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from jsonkit.patcher import JsonPatcher  # noqa: E402
from jsonkit.builder import JsonPatchBuilder  # noqa: E402
from fixtures import documents  # noqa: E402


@pytest.fixture
def patcher():
    """Shared patch engine instance."""
    return JsonPatcher()


@pytest.fixture
def builder():
    """Fresh patch builder."""
    return JsonPatchBuilder()


@pytest.fixture
def user_document():
    """Nested user document."""
    return documents.make_user_document()


@pytest.fixture
def users_document():
    """Document holding an array of user objects."""
    return documents.make_users_document()


@pytest.fixture
def sample_entries():
    """Entries for multi-entry store tests."""
    return documents.make_entries()


@pytest.fixture(autouse=True)
def reset_environment_for_tests(monkeypatch):
    """Clear JSONKIT_* variables so every test sees default settings."""
    for var in ("JSONKIT_LOG_LEVEL", "JSONKIT_ENCODING", "JSONKIT_INDENT", "JSONKIT_WRITE_RETRIES"):
        monkeypatch.delenv(var, raising=False)
