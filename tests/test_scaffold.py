import pytest

from rpgmz.defaults import DEFAULT_FACTORIES
from rpgmz.models import ENTITY_TYPES, MapData, MapInfo
from rpgmz.scaffold import EMPTY_ARRAY_FILES, PROJECT_DIRS, init_project
from rpgmz.storage import (
    REQUIRED_DATA_FILES,
    ProjectExistsError,
    ProjectManager,
    read_json,
    read_json_raw,
)


def test_init_project_lays_down_valid_project(tmp_path):
    root = tmp_path / "Quest"
    written = init_project(root, "Quest")

    assert (root / "Game.rmmzproject").exists()
    for rel in PROJECT_DIRS:
        assert (root / rel).is_dir()
    assert set(REQUIRED_DATA_FILES) <= set(written)
    assert "Map001.json" in written
    assert ProjectManager(root).validate()["valid"]


def test_system_json(new_project):
    system = read_json_raw(new_project / "data" / "System.json")
    assert system["gameTitle"] == "My Game"
    assert system["versionId"] == 0
    assert system["startMapId"] == 1


@pytest.mark.parametrize("entity_type", list(ENTITY_TYPES))
def test_database_files_hold_one_default_record(new_project, entity_type):
    config = ENTITY_TYPES[entity_type]
    records = read_json(new_project / "data" / config.filename, list[config.shape | None])

    assert records[0] is None
    assert len(records) == 2
    assert records[1].model_dump() == DEFAULT_FACTORIES[entity_type](1)


def test_empty_array_files(new_project):
    for filename in EMPTY_ARRAY_FILES:
        assert read_json_raw(new_project / "data" / filename) == [None]


def test_first_map(new_project):
    data = new_project / "data"
    infos = read_json(data / "MapInfos.json", list[MapInfo | None])
    assert infos[1].name == "Map001"
    assert read_json(data / "Map001.json", MapData).events == [None]


def test_scaffold_leaves_no_backups(new_project):
    assert not list(new_project.rglob("*.bak"))
    assert not list(new_project.rglob("*.tmp"))


@pytest.mark.parametrize("marker", ["game.rmmzproject", "Game.rmmzproject"])
def test_refuses_existing_project(tmp_path, marker):
    (tmp_path / marker).write_text("")
    with pytest.raises(ProjectExistsError):
        init_project(tmp_path, "Again")
    assert not (tmp_path / "data").exists()
