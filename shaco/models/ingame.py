"""
Live client data API model
==========================

Typed decoding for ``https://127.0.0.1:2999/liveclientdata/*``.

The vendor documents most closed vocabularies only loosely and adds values
without notice, so:

* enum-like fields (game mode, map, terrain, position, team, ...) decode
  unrecognised values to ``UNKNOWN`` instead of failing;
* free-form "who killed it" strings are classified by ordered heuristics
  (:data:`KILLER_RULES`), falling back to a champion/player name;
* event names outside the known set decode to :class:`UnknownEvent`.

Snapshot payloads (players, stats, runes, ...) are pydantic models keyed by
their camelCase names. Structural problems (missing required keys, wrong JSON
types, a ``Stolen`` flag that is not ``"True"``/``"False"``) raise
:class:`DecodeError`.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Callable, ClassVar, Dict, List, Optional, Tuple, Type

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    InstanceOf,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from shaco.errors import DecodeError


# ============================================================================
# HELPERS
# ============================================================================

_INT = TypeAdapter(int)
_FLOAT = TypeAdapter(float)


def _require(data: Dict[str, Any], key: str) -> Any:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected an object, got {type(data).__name__}")
    if key not in data:
        raise DecodeError(f"Missing field '{key}'")
    return data[key]


def _typed(data: Dict[str, Any], key: str, adapter: TypeAdapter) -> Any:
    value = _require(data, key)
    try:
        return adapter.validate_python(value)
    except ValidationError as e:
        raise DecodeError(f"Field '{key}' is invalid: {value!r}") from e


def decode_bool_string(value: Any) -> bool:
    """Decode the API's ``"True"``/``"False"`` strings. Anything else is an error."""
    if value == "True":
        return True
    if value == "False":
        return False
    raise DecodeError(f"Expected 'True' or 'False', got {value!r}")


# ============================================================================
# CLOSED-BUT-EVOLVING VOCABULARIES
# ============================================================================

class LenientEnum(str, Enum):
    """String enum whose unrecognised values map to ``UNKNOWN``."""

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class Team(LenientEnum):
    ORDER = "ORDER"
    CHAOS = "CHAOS"
    NEUTRAL = "NEUTRAL"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_id(cls, team_id: str) -> "Team":
        """Map the ``1``/``100`` and ``2``/``200`` ids used in unit names."""
        if team_id in ("1", "100"):
            return cls.ORDER
        if team_id in ("2", "200"):
            return cls.CHAOS
        return cls.UNKNOWN


class Position(LenientEnum):
    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MIDDLE = "MIDDLE"
    BOTTOM = "BOTTOM"
    UTILITY = "UTILITY"
    NONE = ""
    UNKNOWN = "UNKNOWN"


class GameMode(LenientEnum):
    CLASSIC = "CLASSIC"
    ODIN = "ODIN"
    ARAM = "ARAM"
    TUTORIAL = "TUTORIAL"
    URF = "URF"
    DOOMBOTSTEEMO = "DOOMBOTSTEEMO"
    ONEFORALL = "ONEFORALL"
    ASCENSION = "ASCENSION"
    FIRSTBLOOD = "FIRSTBLOOD"
    KINGPORO = "KINGPORO"
    SIEGE = "SIEGE"
    ASSASSINATE = "ASSASSINATE"
    ARSR = "ARSR"
    DARKSTAR = "DARKSTAR"
    STARGUARDIAN = "STARGUARDIAN"
    PROJECT = "PROJECT"
    GAMEMODEX = "GAMEMODEX"
    ODYSSEY = "ODYSSEY"
    NEXUSBLITZ = "NEXUSBLITZ"
    ULTBOOK = "ULTBOOK"
    CHERRY = "CHERRY"
    PRACTICETOOL = "PRACTICETOOL"
    UNKNOWN = "UNKNOWN"


class MapName(LenientEnum):
    SUMMONERS_RIFT = "Map11"
    HOWLING_ABYSS = "Map12"
    NEXUS_BLITZ = "Map21"
    RINGS_OF_WRATH = "Map30"
    UNKNOWN = "UNKNOWN"


class MapTerrain(LenientEnum):
    DEFAULT = "Default"
    INFERNAL = "Infernal"
    MOUNTAIN = "Mountain"
    OCEAN = "Ocean"
    CLOUD = "Cloud"
    HEXTECH = "Hextech"
    CHEMTECH = "Chemtech"
    UNKNOWN = "UNKNOWN"


class DragonType(LenientEnum):
    FIRE = "Fire"
    WATER = "Water"
    EARTH = "Earth"
    AIR = "Air"
    HEXTECH = "Hextech"
    CHEMTECH = "Chemtech"
    ELDER = "Elder"
    UNKNOWN = "UNKNOWN"


class GameResult(LenientEnum):
    WIN = "Win"
    LOSE = "Lose"
    UNKNOWN = "UNKNOWN"


class MonsterCamp(LenientEnum):
    BLUE = "Blue"
    RED = "Red"
    GROMP = "Gromp"
    KRUG = "Krug"
    MURKWOLF = "Murkwolf"
    RAZORBEAK = "Razorbeak"
    SCUTTLE = "Crab"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_token(cls, token: str) -> "MonsterCamp":
        """``KrugMini`` -> ``KRUG``, case-insensitive."""
        token = token.lower()
        if token.endswith("mini"):
            token = token[:-4]
        for camp in cls:
            if camp.value.lower() == token:
                return camp
        return cls.UNKNOWN


class Lane(str, Enum):
    TOP = "top"
    MID = "mid"
    BOT = "bot"
    BASE = "base"
    UNKNOWN = "unknown"


class TurretTier(str, Enum):
    OUTER = "outer"
    INNER = "inner"
    INHIBITOR = "inhibitor"
    NEXUS = "nexus"
    FOUNTAIN = "fountain"
    UNKNOWN = "unknown"


# ============================================================================
# STRUCTURES
# ============================================================================

# Summoner's Rift turret ids without the team part, e.g. Turret_T1_L_03_A
_TURRET_POSITIONS: Dict[str, Tuple[Lane, TurretTier]] = {
    "L_03_A": (Lane.TOP, TurretTier.OUTER),
    "L_02_A": (Lane.TOP, TurretTier.INNER),
    "C_06_A": (Lane.TOP, TurretTier.INHIBITOR),
    "C_05_A": (Lane.MID, TurretTier.OUTER),
    "C_04_A": (Lane.MID, TurretTier.INNER),
    "C_03_A": (Lane.MID, TurretTier.INHIBITOR),
    "R_03_A": (Lane.BOT, TurretTier.OUTER),
    "R_02_A": (Lane.BOT, TurretTier.INNER),
    "C_07_A": (Lane.BOT, TurretTier.INHIBITOR),
    "C_01_A": (Lane.BASE, TurretTier.NEXUS),
    "C_02_A": (Lane.BASE, TurretTier.NEXUS),
}

TURRET_TABLE: Dict[str, Tuple[Team, Lane, TurretTier]] = {
    f"Turret_T{team_id}_{position}": (Team.from_id(team_id), lane, tier)
    for team_id in ("1", "2")
    for position, (lane, tier) in _TURRET_POSITIONS.items()
}
TURRET_TABLE["Turret_OrderTurretShrine_A"] = (Team.ORDER, Lane.BASE, TurretTier.FOUNTAIN)
TURRET_TABLE["Turret_ChaosTurretShrine_A"] = (Team.CHAOS, Lane.BASE, TurretTier.FOUNTAIN)


@dataclass(frozen=True)
class Turret:
    team: Team
    lane: Lane
    tier: TurretTier
    id: str = ""

    @property
    def is_unknown(self) -> bool:
        return self.tier is TurretTier.UNKNOWN

    @classmethod
    def from_str(cls, value: str) -> "Turret":
        entry = TURRET_TABLE.get(value)
        if entry is None:
            return cls(Team.UNKNOWN, Lane.UNKNOWN, TurretTier.UNKNOWN, value)
        team, lane, tier = entry
        return cls(team, lane, tier, value)


_INHIBITOR_RE = re.compile(r"^Barracks_T([12])_([LCR])1$")
_INHIBITOR_LANES = {"L": Lane.TOP, "C": Lane.MID, "R": Lane.BOT}


@dataclass(frozen=True)
class Inhibitor:
    team: Team
    lane: Lane
    id: str = ""

    @classmethod
    def from_str(cls, value: str) -> "Inhibitor":
        match = _INHIBITOR_RE.match(value)
        if match is None:
            return cls(Team.UNKNOWN, Lane.UNKNOWN, value)
        return cls(Team.from_id(match.group(1)), _INHIBITOR_LANES[match.group(2)], value)


# ============================================================================
# KILLER CLASSIFICATION
# ============================================================================

class KillerKind(str, Enum):
    MINION = "minion"
    TURRET = "turret"
    DRAGON = "dragon"
    HERALD = "herald"
    BARON = "baron"
    VOIDGRUB = "voidgrub"
    ATAKHAN = "atakhan"
    MONSTER = "monster"
    CHAMPION = "champion"


@dataclass(frozen=True)
class Killer:
    """
    Whatever is named in a ``KillerName`` field.

    Best effort only: the underlying unit names are not contractually
    documented, and anything that no rule recognises is taken to be a
    player's name.
    """
    kind: KillerKind
    name: str
    team: Team = Team.UNKNOWN
    dragon_type: Optional[DragonType] = None
    turret: Optional[Turret] = None
    monster: Optional[MonsterCamp] = None

    @property
    def is_champion(self) -> bool:
        return self.kind is KillerKind.CHAMPION

    @classmethod
    def from_str(cls, value: str) -> "Killer":
        for predicate, build in KILLER_RULES:
            if predicate(value):
                return build(value)
        # KILLER_RULES ends with a catch-all
        raise AssertionError("unreachable")


_MINION_TEAM_RE = re.compile(r"_T(100|200)")
_DRAGON_RE = re.compile(r"^SRU_Dragon_([A-Za-z]+)")
_CAMP_RE = re.compile(r"^S[Rr][Uu]_([A-Za-z]+)")


def _minion(value: str) -> Killer:
    match = _MINION_TEAM_RE.search(value)
    team = Team.from_id(match.group(1)) if match else Team.UNKNOWN
    return Killer(KillerKind.MINION, value, team=team)


def _dragon(value: str) -> Killer:
    match = _DRAGON_RE.match(value)
    dragon_type = DragonType(match.group(1)) if match else DragonType.UNKNOWN
    return Killer(KillerKind.DRAGON, value, team=Team.NEUTRAL, dragon_type=dragon_type)


def _camp_token(value: str) -> Optional[str]:
    match = _CAMP_RE.match(value)
    return match.group(1) if match else None


def _is_known_camp(value: str) -> bool:
    token = _camp_token(value)
    return token is not None and MonsterCamp.from_token(token) is not MonsterCamp.UNKNOWN


def _camp(value: str) -> Killer:
    token = _camp_token(value) or ""
    return Killer(KillerKind.MONSTER, value, team=Team.NEUTRAL, monster=MonsterCamp.from_token(token))


def _turret(value: str) -> Killer:
    turret = Turret.from_str(value)
    return Killer(KillerKind.TURRET, value, team=turret.team, turret=turret)


def _neutral(kind: KillerKind) -> Callable[[str], Killer]:
    return lambda value: Killer(kind, value, team=Team.NEUTRAL)


# Evaluated in order; the first matching predicate wins.
KILLER_RULES: List[Tuple[Callable[[str], bool], Callable[[str], Killer]]] = [
    (lambda s: s.startswith("Minion"), _minion),
    (lambda s: s.startswith("SRU_Dragon"), _dragon),
    (_is_known_camp, _camp),
    (lambda s: s.startswith("Turret_"), _turret),
    (lambda s: s.startswith("SRU_Baron"), _neutral(KillerKind.BARON)),
    (lambda s: s.startswith("SRU_RiftHerald"), _neutral(KillerKind.HERALD)),
    (lambda s: s.startswith("SRU_Horde"), _neutral(KillerKind.VOIDGRUB)),
    (lambda s: s.startswith("SRU_Atakhan"), _neutral(KillerKind.ATAKHAN)),
    (lambda s: _camp_token(s) is not None, _camp),
    (lambda s: True, lambda s: Killer(KillerKind.CHAMPION, s)),
]


# ============================================================================
# GAME EVENTS
# ============================================================================

def _str_field(data: Dict[str, Any], key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise DecodeError(f"Field '{key}' should be a string, got {value!r}")
    return value


def _killer_field(data: Dict[str, Any], key: str = "KillerName") -> Killer:
    return Killer.from_str(_str_field(data, key))


def _assisters_field(data: Dict[str, Any]) -> List[str]:
    assisters = data.get("Assisters") or []
    if not isinstance(assisters, list) or not all(isinstance(a, str) for a in assisters):
        raise DecodeError(f"Field 'Assisters' should be a list of strings, got {assisters!r}")
    return list(assisters)


def _stolen_field(data: Dict[str, Any]) -> bool:
    return decode_bool_string(_require(data, "Stolen"))


@dataclass(frozen=True)
class GameEvent:
    """Common part of every live client event."""
    event_id: int
    event_time: float

    EVENT_NAME: ClassVar[str] = ""

    @classmethod
    def decode_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        return {}


@dataclass(frozen=True)
class GameStart(GameEvent):
    EVENT_NAME: ClassVar[str] = "GameStart"


@dataclass(frozen=True)
class MinionsSpawning(GameEvent):
    EVENT_NAME: ClassVar[str] = "MinionsSpawning"


@dataclass(frozen=True)
class FirstBrick(GameEvent):
    killer: Killer = None

    EVENT_NAME: ClassVar[str] = "FirstBrick"

    @classmethod
    def decode_fields(cls, data):
        return {"killer": _killer_field(data)}


@dataclass(frozen=True)
class FirstBlood(GameEvent):
    recipient: str = ""

    EVENT_NAME: ClassVar[str] = "FirstBlood"

    @classmethod
    def decode_fields(cls, data):
        return {"recipient": _str_field(data, "Recipient")}


@dataclass(frozen=True)
class TurretKilled(GameEvent):
    turret: Turret = None
    killer: Killer = None
    assisters: List[str] = field(default_factory=list)

    EVENT_NAME: ClassVar[str] = "TurretKilled"

    @classmethod
    def decode_fields(cls, data):
        return {
            "turret": Turret.from_str(_str_field(data, "TurretKilled")),
            "killer": _killer_field(data),
            "assisters": _assisters_field(data),
        }


@dataclass(frozen=True)
class InhibKilled(GameEvent):
    inhibitor: Inhibitor = None
    killer: Killer = None
    assisters: List[str] = field(default_factory=list)

    EVENT_NAME: ClassVar[str] = "InhibKilled"

    @classmethod
    def decode_fields(cls, data):
        return {
            "inhibitor": Inhibitor.from_str(_str_field(data, "InhibKilled")),
            "killer": _killer_field(data),
            "assisters": _assisters_field(data),
        }


@dataclass(frozen=True)
class InhibRespawningSoon(GameEvent):
    inhibitor: Inhibitor = None

    EVENT_NAME: ClassVar[str] = "InhibRespawningSoon"

    @classmethod
    def decode_fields(cls, data):
        return {"inhibitor": Inhibitor.from_str(_str_field(data, "InhibRespawningSoon"))}


@dataclass(frozen=True)
class InhibRespawned(GameEvent):
    inhibitor: Inhibitor = None

    EVENT_NAME: ClassVar[str] = "InhibRespawned"

    @classmethod
    def decode_fields(cls, data):
        return {"inhibitor": Inhibitor.from_str(_str_field(data, "InhibRespawned"))}


@dataclass(frozen=True)
class DragonKill(GameEvent):
    dragon_type: DragonType = DragonType.UNKNOWN
    stolen: bool = False
    killer: Killer = None
    assisters: List[str] = field(default_factory=list)

    EVENT_NAME: ClassVar[str] = "DragonKill"

    @classmethod
    def decode_fields(cls, data):
        return {
            "dragon_type": DragonType(_str_field(data, "DragonType")),
            "stolen": _stolen_field(data),
            "killer": _killer_field(data),
            "assisters": _assisters_field(data),
        }


@dataclass(frozen=True)
class _ObjectiveKill(GameEvent):
    stolen: bool = False
    killer: Killer = None
    assisters: List[str] = field(default_factory=list)

    @classmethod
    def decode_fields(cls, data):
        return {
            "stolen": _stolen_field(data),
            "killer": _killer_field(data),
            "assisters": _assisters_field(data),
        }


@dataclass(frozen=True)
class HeraldKill(_ObjectiveKill):
    EVENT_NAME: ClassVar[str] = "HeraldKill"


@dataclass(frozen=True)
class BaronKill(_ObjectiveKill):
    EVENT_NAME: ClassVar[str] = "BaronKill"


@dataclass(frozen=True)
class HordeKill(_ObjectiveKill):
    EVENT_NAME: ClassVar[str] = "HordeKill"


@dataclass(frozen=True)
class ChampionKill(GameEvent):
    victim_name: str = ""
    killer: Killer = None
    assisters: List[str] = field(default_factory=list)

    EVENT_NAME: ClassVar[str] = "ChampionKill"

    @classmethod
    def decode_fields(cls, data):
        return {
            "victim_name": _str_field(data, "VictimName"),
            "killer": _killer_field(data),
            "assisters": _assisters_field(data),
        }


@dataclass(frozen=True)
class Multikill(GameEvent):
    killer: Killer = None
    kill_streak: int = 0

    EVENT_NAME: ClassVar[str] = "Multikill"

    @classmethod
    def decode_fields(cls, data):
        return {
            "killer": _killer_field(data),
            "kill_streak": _typed(data, "KillStreak", _INT),
        }


@dataclass(frozen=True)
class Ace(GameEvent):
    acer: str = ""
    acing_team: Team = Team.UNKNOWN

    EVENT_NAME: ClassVar[str] = "Ace"

    @classmethod
    def decode_fields(cls, data):
        return {
            "acer": _str_field(data, "Acer"),
            "acing_team": Team(_str_field(data, "AcingTeam")),
        }


@dataclass(frozen=True)
class GameEnd(GameEvent):
    result: GameResult = GameResult.UNKNOWN

    EVENT_NAME: ClassVar[str] = "GameEnd"

    @classmethod
    def decode_fields(cls, data):
        return {"result": GameResult(_str_field(data, "Result"))}


@dataclass(frozen=True)
class UnknownEvent(GameEvent):
    """An event whose ``EventName`` is not modelled; the raw object is kept."""
    name: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)


EVENT_TYPES: Dict[str, Type[GameEvent]] = {
    cls.EVENT_NAME: cls
    for cls in (
        GameStart, MinionsSpawning, FirstBrick, FirstBlood, TurretKilled,
        InhibKilled, InhibRespawningSoon, InhibRespawned, DragonKill,
        HeraldKill, BaronKill, HordeKill, ChampionKill, Multikill, Ace, GameEnd,
    )
}


def decode_game_event(data: Dict[str, Any]) -> GameEvent:
    """Decode one object of the ``Events`` array."""
    name = _str_field(data, "EventName")
    event_id = _typed(data, "EventID", _INT)
    event_time = _typed(data, "EventTime", _FLOAT)

    event_cls = EVENT_TYPES.get(name)
    if event_cls is None:
        return UnknownEvent(event_id=event_id, event_time=event_time, name=name, raw=dict(data))
    return event_cls(event_id=event_id, event_time=event_time, **event_cls.decode_fields(data))


def decode_event_data(payload: Any) -> List[GameEvent]:
    """Decode an ``eventdata`` response, ``{"Events": [...]}``."""
    events = _require(payload, "Events")
    if not isinstance(events, list):
        raise DecodeError("Field 'Events' should be a list")
    return [decode_game_event(event) for event in events]


# ============================================================================
# SNAPSHOT MODELS
# ============================================================================

def _lenient(enum_cls: Type[LenientEnum], default: Optional[LenientEnum] = None) -> BeforeValidator:
    """Route raw values through the enum so unknown ones become ``UNKNOWN``."""
    def convert(value: Any) -> Any:
        if value is None and default is not None:
            return default
        return enum_cls(value)
    return BeforeValidator(convert)


TeamField = Annotated[Team, _lenient(Team)]
PositionField = Annotated[Position, _lenient(Position, Position.NONE)]


class LiveModel(BaseModel):
    """Immutable snapshot keyed by camelCase names; unknown keys are ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @classmethod
    def from_dict(cls, data: Any):
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"{cls.__name__}: {e}") from e


class RiotId(LiveModel):
    game_name: str
    tag_line: str = ""

    @model_validator(mode="before")
    @classmethod
    def from_player_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("riotIdGameName") is not None:
            return {"gameName": data["riotIdGameName"], "tagLine": data.get("riotIdTagLine") or ""}
        if "game_name" in data or "gameName" in data:
            return data
        # Older patches only send the combined id, or just the summoner name
        combined = data.get("riotId") or data.get("summonerName")
        if combined is None:
            raise ValueError("missing riotIdGameName, riotId and summonerName")
        game_name, _, tag_line = str(combined).partition("#")
        return {"gameName": game_name, "tagLine": tag_line}

    @property
    def riot_id(self) -> str:
        return f"{self.game_name}#{self.tag_line}" if self.tag_line else self.game_name

    def __str__(self) -> str:
        return self.riot_id


def _with_riot_id(data: Any) -> Any:
    # The id is spread over several top-level keys of the player object
    if isinstance(data, dict) and "riot_id" not in data:
        return {**data, "riotId": RiotId.from_dict(data)}
    return data


class ChampionStats(LiveModel):
    ability_haste: float = 0.0
    ability_power: float = 0.0
    armor: float = 0.0
    armor_penetration_flat: float = 0.0
    armor_penetration_percent: float = 0.0
    attack_damage: float = 0.0
    attack_range: float = 0.0
    attack_speed: float = 0.0
    bonus_armor_penetration_percent: float = 0.0
    bonus_magic_penetration_percent: float = 0.0
    crit_chance: float = 0.0
    crit_damage: float = 0.0
    current_health: float = 0.0
    heal_shield_power: float = 0.0
    health_regen_rate: float = 0.0
    life_steal: float = 0.0
    magic_lethality: float = 0.0
    magic_penetration_flat: float = 0.0
    magic_penetration_percent: float = 0.0
    magic_resist: float = 0.0
    max_health: float = 0.0
    move_speed: float = 0.0
    omnivamp: float = 0.0
    physical_lethality: float = 0.0
    physical_vamp: float = 0.0
    resource_max: float = 0.0
    resource_regen_rate: float = 0.0
    resource_type: str = ""
    resource_value: float = 0.0
    spell_vamp: float = 0.0
    tenacity: float = 0.0


class PlayerAbility(LiveModel):
    display_name: str
    id: str
    raw_description: str
    raw_display_name: str
    ability_level: Optional[int] = None


class ActivePlayerAbilities(LiveModel):
    passive: PlayerAbility = Field(alias="Passive")
    q: PlayerAbility = Field(alias="Q")
    w: PlayerAbility = Field(alias="W")
    e: PlayerAbility = Field(alias="E")
    r: PlayerAbility = Field(alias="R")


class PlayerRune(LiveModel):
    display_name: str
    id: int
    raw_description: str
    raw_display_name: str


class StatRune(LiveModel):
    id: int
    raw_description: str


class ActivePlayerRunes(LiveModel):
    keystone: PlayerRune
    primary_rune_tree: PlayerRune
    secondary_rune_tree: PlayerRune
    general_runes: List[PlayerRune] = []
    stat_runes: List[StatRune] = []


class ActivePlayer(LiveModel):
    abilities: ActivePlayerAbilities
    champion_stats: ChampionStats
    current_gold: float
    full_runes: Optional[ActivePlayerRunes] = None
    level: int
    riot_id: RiotId
    summoner_name: str = ""
    team_relative_colors: bool = False

    @model_validator(mode="before")
    @classmethod
    def collect_riot_id(cls, data: Any) -> Any:
        return _with_riot_id(data)

    @field_validator("full_runes", mode="before")
    @classmethod
    def drop_empty_runes(cls, value: Any) -> Any:
        # Arena games send no runes
        return value or None


class PlayerScores(LiveModel):
    assists: int
    creep_score: int
    deaths: int
    kills: int
    ward_score: float


class SummonerSpell(LiveModel):
    display_name: str
    raw_description: str
    raw_display_name: str


class PlayerSummonerSpells(LiveModel):
    summoner_spell_one: SummonerSpell
    summoner_spell_two: SummonerSpell


class PlayerMainRunes(LiveModel):
    keystone: PlayerRune
    primary_rune_tree: PlayerRune
    secondary_rune_tree: PlayerRune


class PlayerItem(LiveModel):
    can_use: bool
    consumable: bool
    count: int
    display_name: str
    item_id: int = Field(alias="itemID")
    price: int = 0
    raw_description: str = ""
    raw_display_name: str = ""
    slot: int = 0


class Player(LiveModel):
    champion_name: str
    is_bot: bool
    is_dead: bool
    level: int
    riot_id: RiotId
    scores: PlayerScores
    summoner_spells: PlayerSummonerSpells
    team: TeamField
    position: PositionField = Position.NONE
    items: List[PlayerItem] = []
    raw_champion_name: str = ""
    raw_skin_name: Optional[str] = None
    respawn_timer: float = 0.0
    runes: Optional[PlayerMainRunes] = None
    skin_id: int = Field(default=0, alias="skinID")
    skin_name: Optional[str] = None
    summoner_name: str = ""

    @model_validator(mode="before")
    @classmethod
    def collect_riot_id(cls, data: Any) -> Any:
        return _with_riot_id(data)

    @field_validator("runes", mode="before")
    @classmethod
    def drop_empty_runes(cls, value: Any) -> Any:
        return value or None


class GameStats(LiveModel):
    game_mode: Annotated[GameMode, _lenient(GameMode)]
    game_time: float
    map_name: Annotated[MapName, _lenient(MapName)]
    map_number: int
    map_terrain: Annotated[MapTerrain, _lenient(MapTerrain, MapTerrain.DEFAULT)] = MapTerrain.DEFAULT


class AllGameData(LiveModel):
    active_player: Optional[ActivePlayer]
    all_players: List[Player]
    events: List[InstanceOf[GameEvent]]
    game_data: GameStats

    @field_validator("active_player", mode="before")
    @classmethod
    def drop_spectator_error(cls, value: Any) -> Any:
        # Spectators get {"error": "..."} instead of an active player
        if not isinstance(value, dict) or "error" in value:
            return None
        return value

    @field_validator("events", mode="before")
    @classmethod
    def decode_events(cls, value: Any) -> Any:
        return decode_event_data(value)
