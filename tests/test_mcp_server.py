"""End-to-end tool tests through the FastMCP in-process client.

Each test gets a fresh Session; project directories live under tmp_path.
"""

import json

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

import rpgmz.mcp_server as mcp_server
from rpgmz.session import Session
from rpgmz.storage import read_json_raw


@pytest.fixture(autouse=True)
def fresh_session():
    mcp_server.set_session(Session())


@pytest.fixture
def loaded(new_project):
    mcp_server.get_session().open(new_project)
    return new_project


async def _call(tool: str, **arguments):
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        return await client.call_tool(tool, arguments)


def _text(result) -> str:
    return result.content[0].text


def _json(result) -> dict:
    assert not result.isError, _text(result)
    return json.loads(_text(result))


# ── Project ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_tools_need_a_project():
    result = await _call("list_entities", entity_type="actors")
    assert result.isError
    assert "No project loaded" in _text(result)


@pytest.mark.asyncio
async def test_create_project(tmp_path):
    root = tmp_path / "Quest"
    result = await _call("create_project", project_path=str(root), game_title="Quest")

    assert not result.isError
    assert "Project created successfully" in _text(result)
    assert mcp_server.get_session().require().path == root.resolve()
    assert read_json_raw(root / "data" / "System.json")["gameTitle"] == "Quest"


@pytest.mark.asyncio
async def test_create_project_over_existing(new_project):
    result = await _call("create_project", project_path=str(new_project), game_title="Again")
    assert result.isError
    assert "already exists" in _text(result)


@pytest.mark.asyncio
async def test_load_project(new_project):
    result = await _call("load_project", project_path=str(new_project))
    text = _text(result)
    assert "Project loaded successfully" in text
    assert "Actors: 1" in text


@pytest.mark.asyncio
async def test_load_project_with_warnings(tmp_path):
    result = await _call("load_project", project_path=str(tmp_path))
    assert not result.isError
    assert "Missing data/ directory" in _text(result)


@pytest.mark.asyncio
async def test_get_project_info(loaded):
    info = _json(await _call("get_project_info"))
    assert info["name"] == "MyGame"
    assert info["map_count"] == 1
    assert info["warnings"] == []


@pytest.mark.asyncio
async def test_list_resources(loaded):
    faces = loaded / "img" / "faces"
    (faces / "Actor1.png").write_bytes(b"")
    resources = _json(await _call("list_resources", resource_type="img"))
    assert resources == {"img/faces": ["Actor1.png"]}


# ── Entities ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_entity_lifecycle(loaded):
    created = _json(await _call("create_entity", entity_type="weapons", data={"name": "Longsword", "price": 300}))
    assert created["id"] == 2
    assert created["entity"]["wtypeId"] == 1

    updated = _json(await _call("update_entity", entity_type="weapons", id=2, data={"price": 450}))
    assert updated["price"] == 450
    assert updated["name"] == "Longsword"

    fetched = _json(await _call("get_entity", entity_type="weapons", id=2))
    assert fetched == updated

    listing = _text(await _call("list_entities", entity_type="weapons"))
    assert listing.startswith("Weapons (2):")
    assert "[2] Longsword" in listing

    deleted = await _call("delete_entity", entity_type="weapons", id=2)
    assert _text(deleted) == "Weapon ID 2 deleted."
    assert read_json_raw(loaded / "data" / "Weapons.json")[2] is None

    info = _json(await _call("get_project_info"))
    assert info["version_id"] == 3


@pytest.mark.asyncio
async def test_create_entity_needs_name(loaded):
    result = await _call("create_entity", entity_type="items", data={"price": 5})
    assert result.isError
    assert '"name" is required' in _text(result)
    assert len(read_json_raw(loaded / "data" / "Items.json")) == 2


@pytest.mark.asyncio
async def test_get_missing_entity(loaded):
    result = await _call("get_entity", entity_type="items", id=9)
    assert result.isError
    assert "Item with ID 9 not found" in _text(result)


@pytest.mark.asyncio
async def test_id_must_be_positive(loaded):
    result = await _call("get_entity", entity_type="items", id=0)
    assert result.isError


@pytest.mark.asyncio
async def test_unknown_entity_type(loaded):
    result = await _call("list_entities", entity_type="spells")
    assert result.isError


@pytest.mark.parametrize("entity_type", ["actors", "classes", "states"])
@pytest.mark.asyncio
async def test_first_record_is_protected(loaded, entity_type):
    result = await _call("delete_entity", entity_type=entity_type, id=1)
    assert result.isError
    assert "Cannot delete" in _text(result)
    assert read_json_raw(loaded / "data" / "System.json")["versionId"] == 0


@pytest.mark.asyncio
async def test_first_item_can_be_deleted(loaded):
    result = await _call("delete_entity", entity_type="items", id=1)
    assert not result.isError


@pytest.mark.asyncio
async def test_search_entities(loaded):
    await _call("create_entity", entity_type="actors", data={"name": "Harold", "profile": "A knight of the realm"})
    await _call("create_entity", entity_type="actors", data={"name": "Therese"})

    text = _text(await _call("search_entities", entity_type="actors", query="KNIGHT"))
    assert "[2] Harold" in text
    assert "Therese" not in text

    none = _text(await _call("search_entities", entity_type="actors", query="dragon"))
    assert none == 'No Actors matching "dragon".'


# ── Maps & events ───────────────────────────────────────────


@pytest.mark.asyncio
async def test_map_tools(loaded):
    created = _json(await _call("create_map", name="Forest", width=25, height=20, parent_id=1))
    assert created["id"] == 2

    listing = _text(await _call("list_maps"))
    assert "[1] Map001" in listing
    assert "[2] Forest (parent: 1)" in listing

    await _call("update_map", map_id=2, display_name="Dark Forest", bgm_name="Field2")
    summary = _json(await _call("get_map", map_id=2))
    assert summary["width"] == 25
    assert summary["display_name"] == "Dark Forest"
    assert summary["bgm"] == "Field2"
    assert summary["events"] == []

    assert _text(await _call("delete_map", map_id=2)) == "Map 2 deleted."
    assert not (loaded / "data" / "Map002.json").exists()


@pytest.mark.asyncio
async def test_map_size_bounds(loaded):
    result = await _call("create_map", name="Huge", width=300)
    assert result.isError


@pytest.mark.asyncio
async def test_first_map_is_protected(loaded):
    result = await _call("delete_map", map_id=1)
    assert result.isError
    assert (loaded / "data" / "Map001.json").exists()


@pytest.mark.asyncio
async def test_event_tools(loaded):
    assert _text(await _call("list_events", map_id=1)) == "No events on map 1."

    event = _json(await _call("create_event", map_id=1, name="Chest", x=4, y=6, character_name="!Chest"))
    assert event["id"] == 1

    moved = _json(await _call("update_event", map_id=1, event_id=1, x=5))
    assert (moved["x"], moved["y"]) == (5, 6)

    listing = _text(await _call("list_events", map_id=1))
    assert '[1] "Chest" at (5, 6)' in listing

    summary = _json(await _call("get_map", map_id=1))
    assert summary["events"] == [{"id": 1, "name": "Chest", "x": 5, "y": 6}]

    assert _text(await _call("delete_event", map_id=1, event_id=1)) == "Event 1 deleted from map 1."
    missing = await _call("delete_event", map_id=1, event_id=1)
    assert missing.isError


# ── Shape checks ────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_entity_rejects_bad_shape(loaded):
    """Defaults plus data must fit the Actor shape."""
    result = await _call("create_entity", entity_type="actors", data={"name": "Bad", "traits": "oops"})
    assert result.isError
    assert "traits" in _text(result)
    assert len(read_json_raw(loaded / "data" / "Actors.json")) == 2


@pytest.mark.asyncio
async def test_update_entity_rejects_bad_shape(loaded):
    """A bad update leaves the record and versionId alone."""
    result = await _call("update_entity", entity_type="actors", id=1, data={"traits": "oops", "classId": "one"})
    assert result.isError
    assert "classId" in _text(result)
    assert read_json_raw(loaded / "data" / "Actors.json")[1]["traits"] == []
    assert read_json_raw(loaded / "data" / "System.json")["versionId"] == 0


@pytest.mark.asyncio
async def test_get_map_with_malformed_event(loaded):
    """A malformed map comes back as a tool error."""
    path = loaded / "data" / "Map001.json"
    data = read_json_raw(path)
    data["events"].append({"id": 1, "name": "NoPos", "pages": []})
    path.write_text(json.dumps(data), encoding="utf-8")

    result = await _call("get_map", map_id=1)
    assert result.isError
    assert "Validation failed for Map001.json" in _text(result)
