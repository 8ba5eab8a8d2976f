import pytest
from pydantic import ValidationError

from rpgmz.defaults import DEFAULT_FACTORIES, default_event_page, default_map, default_map_info
from rpgmz.models import ENTITY_TYPES, Actor, Audio, EventPage, MapData, MapInfo, ProjectInfo


# ── Defaults conform to their shapes ───────────────────────


@pytest.mark.parametrize("entity_type", list(ENTITY_TYPES))
def test_default_record_validates(entity_type):
    record = DEFAULT_FACTORIES[entity_type](5)
    model = ENTITY_TYPES[entity_type].shape.model_validate(record)
    assert model.id == 5
    assert model.model_dump() == record


def test_default_map_validates():
    data = MapData.model_validate(default_map(10, 8, 2))
    assert data.width == 10
    assert data.tilesetId == 2
    assert len(data.data) == 10 * 8 * 6


def test_default_event_page_validates():
    page = EventPage.model_validate(default_event_page())
    assert page.list[-1].code == 0


def test_default_map_info_validates():
    assert MapInfo.model_validate(default_map_info(3, "Dungeon", 2, 1)).parentId == 1


# ── Strictness ──────────────────────────────────────────────


def test_numbers_are_not_coerced_from_strings():
    with pytest.raises(ValidationError):
        Audio.model_validate({"name": "Battle1", "pan": "0", "pitch": 100, "volume": 90})


def test_bools_are_not_coerced_from_ints():
    record = DEFAULT_FACTORIES["items"](1)
    record["consumable"] = 1
    with pytest.raises(ValidationError):
        ENTITY_TYPES["items"].shape.model_validate(record)


def test_floats_are_numbers():
    audio = Audio.model_validate({"name": "", "pan": 0, "pitch": 100.5, "volume": 90})
    assert audio.pitch == 100.5


def test_unknown_fields_survive():
    actor = Actor.model_validate({**DEFAULT_FACTORIES["actors"](1), "customParam": [1, 2]})
    assert actor.model_dump()["customParam"] == [1, 2]


# ── Entity type table ───────────────────────────────────────


def test_protected_types():
    protected = {name for name, config in ENTITY_TYPES.items() if config.protect_first}
    assert protected == {"actors", "classes", "states"}


def test_every_type_searches_name_and_note():
    for config in ENTITY_TYPES.values():
        assert {"name", "note"} <= set(config.search_fields)


def test_project_info_defaults():
    info = ProjectInfo(name="Game", path="/tmp/Game")
    assert info.map_count == 0
    assert info.data_files == []
