"""Default documents for new records, maps and projects.

Each ``default_*`` factory returns a fully populated record for the given
ID, matching what the RPG Maker MZ editor writes for a blank entry.
"""

import random
from collections.abc import Callable
from typing import Any

Record = dict[str, Any]


def default_actor(id: int) -> Record:
    return {
        "id": id,
        "battlerName": "",
        "characterIndex": 0,
        "characterName": "",
        "classId": 1,
        "equips": [0, 0, 0, 0, 0],
        "faceIndex": 0,
        "faceName": "",
        "traits": [],
        "initialLevel": 1,
        "maxLevel": 99,
        "name": "",
        "nickname": "",
        "note": "",
        "profile": "",
    }


def default_class(id: int) -> Record:
    # MHP, MMP, ATK, DEF, MAT, MDF, AGI, LUK; one value per level 0-99
    curves = [(400, 10), (80, 5)] + [(15, 2)] * 6
    return {
        "id": id,
        "expParams": [30, 20, 30, 30],
        "traits": [],
        "learnings": [],
        "name": "",
        "note": "",
        "params": [[base + level * step for level in range(100)] for base, step in curves],
    }


def _default_damage() -> dict[str, Any]:
    return {"critical": False, "elementId": -1, "formula": "0", "type": 0, "variance": 20}


def default_skill(id: int) -> Record:
    return {
        "id": id,
        "animationId": -1,
        "damage": _default_damage(),
        "description": "",
        "effects": [],
        "hitType": 0,
        "iconIndex": 0,
        "message1": "",
        "message2": "",
        "mpCost": 0,
        "name": "",
        "note": "",
        "occasion": 1,
        "repeats": 1,
        "requiredWtypeId1": 0,
        "requiredWtypeId2": 0,
        "scope": 0,
        "speed": 0,
        "stypeId": 1,
        "successRate": 100,
        "tpCost": 0,
        "tpGain": 0,
        "messageType": 1,
    }


def default_item(id: int) -> Record:
    return {
        "id": id,
        "animationId": -1,
        "consumable": True,
        "damage": _default_damage(),
        "description": "",
        "effects": [],
        "hitType": 0,
        "iconIndex": 0,
        "itypeId": 1,
        "name": "",
        "note": "",
        "occasion": 0,
        "price": 0,
        "repeats": 1,
        "scope": 0,
        "speed": 0,
        "successRate": 100,
        "tpGain": 0,
    }


def default_weapon(id: int) -> Record:
    return {
        "id": id,
        "animationId": -1,
        "description": "",
        "etypeId": 1,
        "traits": [],
        "iconIndex": 0,
        "name": "",
        "note": "",
        "params": [0] * 8,
        "price": 0,
        "wtypeId": 1,
    }


def default_armor(id: int) -> Record:
    return {
        "id": id,
        "atypeId": 1,
        "description": "",
        "etypeId": 2,
        "traits": [],
        "iconIndex": 0,
        "name": "",
        "note": "",
        "params": [0] * 8,
        "price": 0,
    }


def default_enemy(id: int) -> Record:
    return {
        "id": id,
        "actions": [
            {"conditionParam1": 0, "conditionParam2": 0, "conditionType": 0, "rating": 5, "skillId": 1}
        ],
        "battlerHue": 0,
        "battlerName": "",
        "dropItems": [{"dataId": 0, "denominator": 1, "kind": 0} for _ in range(3)],
        "exp": 0,
        "traits": [],
        "gold": 0,
        "name": "",
        "note": "",
        "params": [100, 0, 10, 10, 10, 10, 10, 10],
    }


def default_state(id: int) -> Record:
    return {
        "id": id,
        "autoRemovalTiming": 0,
        "chanceByDamage": 100,
        "iconIndex": 0,
        "maxTurns": 1,
        "message1": "",
        "message2": "",
        "message3": "",
        "message4": "",
        "minTurns": 1,
        "motion": 0,
        "name": "",
        "note": "",
        "overlay": 0,
        "priority": 50,
        "removeAtBattleEnd": False,
        "removeByDamage": False,
        "removeByRestriction": False,
        "removeByWalking": False,
        "restriction": 0,
        "stepsToRemove": 100,
        "traits": [],
        "releaseByDamage": False,
        "messageType": 1,
    }


DEFAULT_FACTORIES: dict[str, Callable[[int], Record]] = {
    "actors": default_actor,
    "classes": default_class,
    "skills": default_skill,
    "items": default_item,
    "weapons": default_weapon,
    "armors": default_armor,
    "enemies": default_enemy,
    "states": default_state,
}


# --- Maps and events ---


def default_audio(name: str = "") -> dict[str, Any]:
    return {"name": name, "pan": 0, "pitch": 100, "volume": 90}


def end_command() -> dict[str, Any]:
    """The terminator every event command list ends with."""
    return {"code": 0, "indent": 0, "parameters": []}


def default_event_page() -> dict[str, Any]:
    return {
        "conditions": {
            "actorId": 1,
            "actorValid": False,
            "itemId": 1,
            "itemValid": False,
            "selfSwitchCh": "A",
            "selfSwitchValid": False,
            "switch1Id": 1,
            "switch1Valid": False,
            "switch2Id": 1,
            "switch2Valid": False,
            "variableId": 1,
            "variableValid": False,
            "variableValue": 0,
        },
        "directionFix": False,
        "image": {"characterIndex": 0, "characterName": "", "direction": 2, "pattern": 1, "tileId": 0},
        "list": [end_command()],
        "moveFrequency": 3,
        "moveRoute": {
            "list": [{"code": 0, "parameters": []}],
            "repeat": True,
            "skippable": False,
            "wait": False,
        },
        "moveSpeed": 3,
        "moveType": 0,
        "priorityType": 1,
        "stepAnime": False,
        "through": False,
        "trigger": 0,
        "walkAnime": True,
    }


def default_map(width: int = 17, height: int = 13, tileset_id: int = 1) -> dict[str, Any]:
    return {
        "autoplayBgm": False,
        "autoplayBgs": False,
        "battleback1Name": "",
        "battleback2Name": "",
        "bgm": default_audio(),
        "bgs": default_audio(),
        "disableDashing": False,
        "displayName": "",
        "encounterList": [],
        "encounterStep": 30,
        "height": height,
        "note": "",
        "parallaxLoopX": False,
        "parallaxLoopY": False,
        "parallaxName": "",
        "parallaxShow": True,
        "parallaxSx": 0,
        "parallaxSy": 0,
        "scrollType": 0,
        "specifyBattleback": False,
        "tilesetId": tileset_id,
        "width": width,
        # six tile layers
        "data": [0] * (width * height * 6),
        "events": [None],
    }


def default_map_info(id: int, name: str, order: int, parent_id: int = 0) -> dict[str, Any]:
    return {
        "id": id,
        "expanded": False,
        "name": name,
        "order": order,
        "parentId": parent_id,
        "scrollX": 0,
        "scrollY": 0,
    }


def default_tileset(id: int) -> Record:
    return {
        "id": id,
        "flags": [0] * 8192,
        "mode": 1,
        "name": "World_A1",
        "note": "",
        "tilesetNames": ["World_A1", "World_A2", "", "", "", "World_B", "World_C", "", ""],
    }


# --- System.json ---


def _vehicle() -> dict[str, Any]:
    return {"bgm": default_audio(), "characterIndex": 0, "characterName": "", "startMapId": 0, "startX": 0, "startY": 0}


_SYSTEM_SOUNDS = [
    "Cursor2", "Decision1", "Cancel2", "Buzzer1", "Equip1", "Save", "Load",
    "Battle1", "Escape", "Enemy1", "Damage4", "Damage5", "Enemy2", "Magic1",
    "Magic2", "Item1", "Recovery", "Miss", "Evasion1", "Magic3", "Reflection",
    "Shop1", "Run", "Battle1",
]

_TERMS_MESSAGES = {
    "alwaysDash": "Always Dash",
    "commandRemember": "Command Remember",
    "touchUI": "Touch UI",
    "bgmVolume": "BGM Volume",
    "bgsVolume": "BGS Volume",
    "meVolume": "ME Volume",
    "seVolume": "SE Volume",
    "possession": "Possession",
    "expTotal": "Current %1",
    "expNext": "To Next %1",
    "saveMessage": "Which file would you like to save to?",
    "loadMessage": "Which file would you like to load?",
    "file": "File",
    "autosave": "Autosave",
    "partyName": "%1's Party",
    "emerge": "%1 emerged!",
    "preemptive": "%1 got the upper hand!",
    "surprise": "%1 was surprised!",
    "escapeStart": "%1 has started to escape!",
    "escapeFailure": "However, it was unable to escape!",
    "victory": "%1 was victorious!",
    "defeat": "%1 was defeated.",
    "obtainExp": "%1 %2 received!",
    "obtainGold": "%1\\G found!",
    "obtainItem": "%1 found!",
    "levelUp": "%1 is now %2 %3!",
    "obtainSkill": "%1 learned!",
    "useItem": "%1 uses %2!",
    "criticalToEnemy": "An excellent hit!!",
    "criticalToActor": "A painful blow!!",
    "actorDamage": "%1 took %2 damage!",
    "actorRecovery": "%1 recovered %2 %3!",
    "actorGain": "%1 gained %2 %3!",
    "actorLoss": "%1 lost %2 %3!",
    "actorDrain": "%1 was drained of %2 %3!",
    "actorNoDamage": "%1 took no damage!",
    "actorNoHit": "Miss! %1 took no damage!",
    "enemyDamage": "%1 took %2 damage!",
    "enemyRecovery": "%1 recovered %2 %3!",
    "enemyGain": "%1 gained %2 %3!",
    "enemyLoss": "%1 lost %2 %3!",
    "enemyDrain": "%1 was drained of %2 %3!",
    "enemyNoDamage": "%1 took no damage!",
    "enemyNoHit": "Miss! %1 took no damage!",
    "evasion": "%1 evaded the attack!",
    "magicEvasion": "%1 nullified the magic!",
    "magicReflection": "%1 reflected the magic!",
    "counterAttack": "%1 made a counterattack!",
    "substitute": "%1 protected %2!",
    "buffAdd": "%1's %2 went up!",
    "debuffAdd": "%1's %2 went down!",
    "buffRemove": "%1's %2 returned to normal!",
    "actionFailure": "There was no effect on %1!",
}


def default_system(game_title: str) -> dict[str, Any]:
    """System.json for a new project, with ``versionId`` starting at 0."""
    return {
        "advanced": {
            "gameId": random.randint(10_000_000, 99_999_999),
            "screenWidth": 816,
            "screenHeight": 624,
            "uiAreaWidth": 816,
            "uiAreaHeight": 624,
            "mainFontFilename": "mplus-1m-regular.woff",
            "numberFontFilename": "mplus-2p-bold-sub.woff",
            "fallbackFonts": "Verdana, sans-serif",
            "fontSize": 26,
            "screenScale": 1,
            "windowOpacity": 192,
            "picturesUpperLimit": 100,
        },
        "airship": _vehicle(),
        "armorTypes": ["", "General Armor", "Magic Armor", "Light Armor", "Heavy Armor", "Small Shield", "Large Shield"],
        "attackMotions": (
            [{"type": 0, "weaponImageId": 0}]
            + [{"type": 1, "weaponImageId": i} for i in range(1, 7)]
            + [{"type": 2, "weaponImageId": i} for i in range(7, 10)]
            + [{"type": 0, "weaponImageId": i} for i in range(10, 13)]
        ),
        "battleBgm": default_audio("Battle1"),
        "battleback1Name": "",
        "battleback2Name": "",
        "battlerHue": 0,
        "battlerName": "",
        "battleSystem": 0,
        "boat": _vehicle(),
        "currencyUnit": "G",
        "itemCategories": [True, True, True, True],
        "defeatMe": default_audio("Defeat1"),
        "editMapId": 1,
        "elements": ["", "Physical", "Fire", "Ice", "Thunder", "Water", "Earth", "Wind", "Light", "Darkness"],
        "equipTypes": ["", "Weapon", "Shield", "Head", "Body", "Accessory"],
        "gameTitle": game_title,
        "gameoverMe": default_audio("Gameover1"),
        "locale": "en_US",
        "magicSkills": [1],
        "menuCommands": [True] * 6,
        "optAutosave": True,
        "optDisplayTp": True,
        "optDrawTitle": True,
        "optExtraExp": False,
        "optFloorDeath": False,
        "optFollowers": True,
        "optKeyItemsNumber": False,
        "optMessageSkip": True,
        "optSideView": True,
        "optSlipDeath": False,
        "optSplashScreen": False,
        "optTransparent": False,
        "partyMembers": [1],
        "ship": _vehicle(),
        "skillTypes": ["", "Magic", "Special"],
        "sounds": [default_audio(name) for name in _SYSTEM_SOUNDS],
        "startMapId": 1,
        "startX": 8,
        "startY": 6,
        "switches": [""] * 25,
        "terms": {
            "basic": ["Level", "Lv", "HP", "HP", "MP", "MP", "TP", "TP", "EXP", "EXP"],
            "commands": [
                "Fight", "Escape", "Attack", "Guard", "Item", "Skill",
                "Equip", "Status", "Formation", "Save", "Game End",
                "Options", "Weapon", "Armor", "Key Item", "Equip", "Optimize", "Clear",
                "New Game", "Continue", None, "To Title", "Cancel", None, "Buy", "Sell",
            ],
            "messages": dict(_TERMS_MESSAGES),
            "params": ["Max HP", "Max MP", "Attack", "Defense", "M.Attack", "M.Defense", "Agility", "Luck", "Hit", "Evasion"],
        },
        "testBattlers": [{"actorId": 1, "equips": [0, 0, 0, 0, 0], "level": 1}],
        "testTroopId": 4,
        "title1Name": "",
        "title2Name": "",
        "titleBgm": default_audio("Theme6"),
        "titleCommandWindow": {"background": 0, "offsetX": 0, "offsetY": 0},
        "variables": [""] * 25,
        "versionId": 0,
        "victoryMe": default_audio("Victory1"),
        "weaponTypes": ["", "Dagger", "Sword", "Flail", "Axe", "Whip", "Staff", "Bow", "Crossbow", "Gun", "Claw", "Glove", "Spear"],
        "windowTone": [0, 0, 0, 0],
        "editor": {"messageWidth1": 60, "messageWidth2": 47, "jsonFormatLevel": 1},
        "faceSize": 144,
        "iconSize": 32,
        "tileSize": 48,
    }
