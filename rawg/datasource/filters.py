"""
Well-known RAWG identifiers for type-safe filters.

The IDs are stable RAWG database IDs; anything not listed here can still be
passed as a plain int.
"""

from enum import Enum, IntEnum


class KnownPlatform(IntEnum):
    """Platform IDs (the `platforms` filter)."""

    PC = 4
    MACOS = 5
    LINUX = 6
    PLAYSTATION_5 = 187
    PLAYSTATION_4 = 18
    PLAYSTATION_3 = 16
    PLAYSTATION_2 = 27
    PS_VITA = 19
    PSP = 17
    XBOX_SERIES_X = 186
    XBOX_ONE = 1
    XBOX_360 = 14
    XBOX_ORIGINAL = 80
    NINTENDO_SWITCH = 7
    WII_U = 10
    WII = 11
    NINTENDO_3DS = 8
    NINTENDO_DS = 9
    GAMECUBE = 105
    NINTENDO_64 = 83
    SNES = 79
    NES = 49
    GAMEBOY_ADVANCE = 24
    GAMEBOY = 26
    GAMEBOY_COLOR = 43
    IOS = 3
    ANDROID = 21
    DREAMCAST = 106
    SEGA_SATURN = 107
    GENESIS = 167
    SEGA_MASTER_SYSTEM = 168
    GAME_GEAR = 169
    WEB = 171

    @property
    def display_name(self) -> str:
        return _PLATFORM_NAMES[self]


_PLATFORM_NAMES = {
    KnownPlatform.PC: "PC",
    KnownPlatform.MACOS: "macOS",
    KnownPlatform.LINUX: "Linux",
    KnownPlatform.PLAYSTATION_5: "PlayStation 5",
    KnownPlatform.PLAYSTATION_4: "PlayStation 4",
    KnownPlatform.PLAYSTATION_3: "PlayStation 3",
    KnownPlatform.PLAYSTATION_2: "PlayStation 2",
    KnownPlatform.PS_VITA: "PS Vita",
    KnownPlatform.PSP: "PSP",
    KnownPlatform.XBOX_SERIES_X: "Xbox Series S/X",
    KnownPlatform.XBOX_ONE: "Xbox One",
    KnownPlatform.XBOX_360: "Xbox 360",
    KnownPlatform.XBOX_ORIGINAL: "Xbox",
    KnownPlatform.NINTENDO_SWITCH: "Nintendo Switch",
    KnownPlatform.WII_U: "Wii U",
    KnownPlatform.WII: "Wii",
    KnownPlatform.NINTENDO_3DS: "Nintendo 3DS",
    KnownPlatform.NINTENDO_DS: "Nintendo DS",
    KnownPlatform.GAMECUBE: "GameCube",
    KnownPlatform.NINTENDO_64: "Nintendo 64",
    KnownPlatform.SNES: "SNES",
    KnownPlatform.NES: "NES",
    KnownPlatform.GAMEBOY_ADVANCE: "Game Boy Advance",
    KnownPlatform.GAMEBOY: "Game Boy",
    KnownPlatform.GAMEBOY_COLOR: "Game Boy Color",
    KnownPlatform.IOS: "iOS",
    KnownPlatform.ANDROID: "Android",
    KnownPlatform.DREAMCAST: "Dreamcast",
    KnownPlatform.SEGA_SATURN: "SEGA Saturn",
    KnownPlatform.GENESIS: "Genesis",
    KnownPlatform.SEGA_MASTER_SYSTEM: "SEGA Master System",
    KnownPlatform.GAME_GEAR: "Game Gear",
    KnownPlatform.WEB: "Web",
}


class KnownParentPlatform(IntEnum):
    """Platform family IDs (the `parent_platforms` filter)."""

    PC = 1
    PLAYSTATION = 2
    XBOX = 3
    IOS = 4
    MAC = 5
    LINUX = 6
    NINTENDO = 7
    ANDROID = 8
    ATARI = 9
    COMMODORE_AMIGA = 10
    SEGA = 11
    THREE_DO = 12
    NEO_GEO = 13
    WEB = 14


class KnownGenre(IntEnum):
    ACTION = 4
    ADVENTURE = 3
    RPG = 5
    SHOOTER = 2
    PUZZLE = 7
    RACING = 1
    SPORTS = 15
    STRATEGY = 10
    SIMULATION = 14
    FIGHTING = 6
    PLATFORMER = 83
    ARCADE = 11
    INDIE = 51
    MASSIVELY_MULTIPLAYER = 59
    CASUAL = 40
    FAMILY = 19
    BOARD_GAMES = 28
    CARD = 17
    EDUCATIONAL = 34


class KnownStore(IntEnum):
    STEAM = 1
    XBOX_STORE = 2
    PLAYSTATION_STORE = 3
    APP_STORE = 4
    GOG = 5
    NINTENDO_STORE = 6
    XBOX_360_STORE = 7
    GOOGLE_PLAY = 8
    ITCH_IO = 9
    EPIC_GAMES = 11


class GameOrdering(str, Enum):
    """Values accepted by the `ordering` parameter; '-' prefix = descending."""

    NAME = "name"
    NAME_DESC = "-name"
    RELEASED = "released"
    RELEASED_DESC = "-released"
    ADDED = "added"
    ADDED_DESC = "-added"
    CREATED = "created"
    CREATED_DESC = "-created"
    UPDATED = "updated"
    UPDATED_DESC = "-updated"
    RATING = "rating"
    RATING_DESC = "-rating"
    METACRITIC = "metacritic"
    METACRITIC_DESC = "-metacritic"
