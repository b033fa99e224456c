import pytest
from fastapi.testclient import TestClient

from urwarden.api.server import create_app
from urwarden.config import Settings
from urwarden.pipelines.url_pipeline import URLPipeline
from urwarden.services.blocklist_service import BlocklistIndex


SAMPLE_BLOCKLIST = """# Test blocklist
0.0.0.0 bad.example.com
malicious.test
127.0.0.1 another.bad.com
# This is a comment
good.example.com
"""


@pytest.fixture
def blocklist_file(tmp_path):
    """Blocklist file with a mix of plain and hosts-file lines."""
    path = tmp_path / "blocklist.txt"
    path.write_text(SAMPLE_BLOCKLIST, encoding="utf-8")
    return path


@pytest.fixture
def blocklist(blocklist_file):
    """Loaded blocklist index."""
    index = BlocklistIndex(str(blocklist_file))
    index.load()
    return index


@pytest.fixture
def settings(blocklist_file):
    return Settings(_env_file=None, blocklist_path=str(blocklist_file), workers=2)


@pytest.fixture
def pipeline(blocklist, settings):
    return URLPipeline(blocklist, settings)


@pytest.fixture
def client(settings, blocklist):
    """FastAPI test client fixture."""
    return TestClient(create_app(settings, blocklist))


@pytest.fixture
def sample_phishing_url():
    """Blocklisted host with a login path."""
    return "https://bad.example.com/login"


@pytest.fixture
def sample_safe_url():
    return "https://www.python.org/downloads/"
