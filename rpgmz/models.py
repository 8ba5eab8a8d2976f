"""Document shapes for RPG Maker MZ data files.

Pydantic is used to validate documents read from disk before their fields
are trusted. Scalars are strict (a string never passes as a number, a
number never passes as a bool) and unknown keys are kept, because the
editor adds fields between releases and writing a document back must not
drop them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

Number = StrictInt | StrictFloat


class MzModel(BaseModel):
    model_config = ConfigDict(extra="allow")


# --- Common sub-shapes ---


class Trait(MzModel):
    code: Number
    dataId: Number
    value: Number


class Effect(MzModel):
    code: Number
    dataId: Number
    value1: Number
    value2: Number


class Learning(MzModel):
    level: Number
    note: StrictStr
    skillId: Number


class Damage(MzModel):
    critical: StrictBool
    elementId: Number
    formula: StrictStr
    type: Number
    variance: Number


class Audio(MzModel):
    name: StrictStr
    pan: Number
    pitch: Number
    volume: Number


# --- Database records ---


class Record(MzModel):
    """Fields every database record carries."""

    id: StrictInt
    name: StrictStr


class Actor(Record):
    battlerName: StrictStr
    characterIndex: Number
    characterName: StrictStr
    classId: Number
    equips: list[Number]
    faceIndex: Number
    faceName: StrictStr
    traits: list[Trait]
    initialLevel: Number
    maxLevel: Number
    nickname: StrictStr
    note: StrictStr
    profile: StrictStr


class Class(Record):
    expParams: list[Number]
    traits: list[Trait]
    learnings: list[Learning]
    note: StrictStr
    params: list[list[Number]]


class Skill(Record):
    animationId: Number
    damage: Damage
    description: StrictStr
    effects: list[Effect]
    hitType: Number
    iconIndex: Number
    message1: StrictStr
    message2: StrictStr
    mpCost: Number
    note: StrictStr
    occasion: Number
    repeats: Number
    requiredWtypeId1: Number
    requiredWtypeId2: Number
    scope: Number
    speed: Number
    stypeId: Number
    successRate: Number
    tpCost: Number
    tpGain: Number


class Item(Record):
    animationId: Number
    consumable: StrictBool
    damage: Damage
    description: StrictStr
    effects: list[Effect]
    hitType: Number
    iconIndex: Number
    itypeId: Number
    note: StrictStr
    occasion: Number
    price: Number
    repeats: Number
    scope: Number
    speed: Number
    successRate: Number
    tpGain: Number


class Weapon(Record):
    animationId: Number
    description: StrictStr
    etypeId: Number
    traits: list[Trait]
    iconIndex: Number
    note: StrictStr
    params: list[Number]
    price: Number
    wtypeId: Number


class Armor(Record):
    atypeId: Number
    description: StrictStr
    etypeId: Number
    traits: list[Trait]
    iconIndex: Number
    note: StrictStr
    params: list[Number]
    price: Number


class EnemyAction(MzModel):
    conditionParam1: Number
    conditionParam2: Number
    conditionType: Number
    rating: Number
    skillId: Number


class DropItem(MzModel):
    dataId: Number
    denominator: Number
    kind: Number


class Enemy(Record):
    actions: list[EnemyAction]
    battlerHue: Number
    battlerName: StrictStr
    dropItems: list[DropItem]
    exp: Number
    traits: list[Trait]
    gold: Number
    note: StrictStr
    params: list[Number]


class State(Record):
    autoRemovalTiming: Number
    chanceByDamage: Number
    iconIndex: Number
    maxTurns: Number
    message1: StrictStr
    message2: StrictStr
    message3: StrictStr
    message4: StrictStr
    minTurns: Number
    motion: Number
    note: StrictStr
    overlay: Number
    priority: Number
    removeAtBattleEnd: StrictBool
    removeByDamage: StrictBool
    removeByRestriction: StrictBool
    removeByWalking: StrictBool
    restriction: Number
    stepsToRemove: Number
    traits: list[Trait]


class EntityType(BaseModel):
    filename: str
    shape: type[Record]
    label: str
    search_fields: list[str]
    protect_first: bool = False


ENTITY_TYPES: dict[str, EntityType] = {
    "actors": EntityType(
        filename="Actors.json", shape=Actor, label="Actor",
        search_fields=["name", "note", "profile", "nickname"], protect_first=True,
    ),
    "classes": EntityType(
        filename="Classes.json", shape=Class, label="Class",
        search_fields=["name", "note"], protect_first=True,
    ),
    "skills": EntityType(
        filename="Skills.json", shape=Skill, label="Skill",
        search_fields=["name", "note", "description"],
    ),
    "items": EntityType(
        filename="Items.json", shape=Item, label="Item",
        search_fields=["name", "note", "description"],
    ),
    "weapons": EntityType(
        filename="Weapons.json", shape=Weapon, label="Weapon",
        search_fields=["name", "note", "description"],
    ),
    "armors": EntityType(
        filename="Armors.json", shape=Armor, label="Armor",
        search_fields=["name", "note", "description"],
    ),
    "enemies": EntityType(
        filename="Enemies.json", shape=Enemy, label="Enemy",
        search_fields=["name", "note"],
    ),
    "states": EntityType(
        filename="States.json", shape=State, label="State",
        search_fields=["name", "note"], protect_first=True,
    ),
}


# --- Maps and events ---


class EventCommand(MzModel):
    code: Number
    indent: Number
    parameters: list[Any]


class EventPage(MzModel):
    conditions: dict[str, Any]
    directionFix: StrictBool
    image: dict[str, Any]
    list: list[EventCommand]
    moveFrequency: Number
    moveRoute: dict[str, Any]
    moveSpeed: Number
    moveType: Number
    priorityType: Number
    stepAnime: StrictBool
    through: StrictBool
    trigger: Number
    walkAnime: StrictBool


class Event(MzModel):
    id: StrictInt
    name: StrictStr
    note: StrictStr
    pages: list[EventPage]
    x: Number
    y: Number


class MapInfo(MzModel):
    id: StrictInt
    expanded: StrictBool
    name: StrictStr
    order: Number
    parentId: Number
    scrollX: Number
    scrollY: Number


class MapEncounter(MzModel):
    regionSet: list[Number]
    troopId: Number
    weight: Number


class MapData(MzModel):
    autoplayBgm: StrictBool
    autoplayBgs: StrictBool
    battleback1Name: StrictStr
    battleback2Name: StrictStr
    bgm: Audio
    bgs: Audio
    disableDashing: StrictBool
    displayName: StrictStr
    encounterList: list[MapEncounter]
    encounterStep: Number
    height: StrictInt
    note: StrictStr
    parallaxLoopX: StrictBool
    parallaxLoopY: StrictBool
    parallaxName: StrictStr
    parallaxShow: StrictBool
    parallaxSx: Number
    parallaxSy: Number
    scrollType: Number
    specifyBattleback: StrictBool
    tilesetId: Number
    width: StrictInt
    data: list[Number]
    events: list[Event | None]


# --- Project-level documents ---


class ProjectInfo(BaseModel):
    """Read-only statistics about a project directory."""

    name: str
    path: str
    data_files: list[str] = Field(default_factory=list)
    map_count: int = 0
    actor_count: int = 0
    item_count: int = 0
    version_id: int | float = 0
