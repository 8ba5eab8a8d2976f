import pytest

from rpgmz.scaffold import init_project
from rpgmz.storage import VersionLedger, write_json

TEST_ENTITIES = "TestEntities.json"


@pytest.fixture
def project_dir(tmp_path):
    """Minimal project: System.json at versionId 0 plus one test database file."""
    root = tmp_path / "game"
    data = root / "data"
    data.mkdir(parents=True)
    write_json(data / "System.json", {"versionId": 0, "gameTitle": "Test Game"})
    write_json(data / TEST_ENTITIES, [None, {"id": 1, "name": "First", "value": 10}])
    return root


@pytest.fixture
def ledger(project_dir):
    return VersionLedger(project_dir)


@pytest.fixture
def new_project(tmp_path):
    """A fully scaffolded project, as create_project would leave it."""
    root = tmp_path / "MyGame"
    init_project(root, "My Game")
    return root
