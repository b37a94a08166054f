# File: agent/agent_tools/calculator.py

import json
import math
import re
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, Optional, Union

from langchain_core.tools import tool


class Mode(str, Enum):
    RAW = "raw"
    DILUTE = "dilute"


# Strength assumed when the current-strength field is empty or unusable
PURE_STRENGTH = 100.0

EXCEEDS_CURRENT_MESSAGE = "Must be less than Current %"

# Target strengths (%) for raw mode, (from, to) pairs for dilute mode
PRESETS_RAW = (50, 20, 10, 1)
PRESETS_DILUTE = ((50, 20), (20, 10), (10, 1))

_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class DilutionInput:
    mode: Mode
    current_strength_text: str = ""
    target_strength_text: str = ""
    volume_text: str = ""


@dataclass(frozen=True)
class DilutionResult:
    material_mass: float = 0.0
    solvent_mass: float = 0.0

    @property
    def is_idle(self) -> bool:
        return self.material_mass == 0 and self.solvent_mass == 0


@dataclass(frozen=True)
class Proportions:
    material_percent: float = 0.0
    solvent_percent: float = 100.0


IDLE = DilutionResult()


# --- Parsing helpers ---
def parse_number(text: Optional[str]) -> Optional[float]:
    """
    Lenient float parse: leading/trailing whitespace is ignored and the longest
    numeric prefix wins ("12abc" -> 12.0). Returns None when nothing parses.
    """
    if text is None:
        return None
    m = _NUMBER_PREFIX.match(str(text).strip())
    if not m:
        return None
    return float(m.group(0))


def _usable(value: Optional[float]) -> bool:
    return value is not None and value != 0 and math.isfinite(value)


def _current_strength(text: Optional[str]) -> float:
    value = parse_number(text)
    return value if _usable(value) else PURE_STRENGTH


def round2(value: float) -> float:
    """Rounds to 2 decimals, half away from zero, on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


# --- The core logic functions ---
def compute(inp: DilutionInput) -> DilutionResult:
    """Material and solvent grams for the finished volume, or IDLE."""
    volume = parse_number(inp.volume_text)
    target = parse_number(inp.target_strength_text)
    if not _usable(volume) or not _usable(target):
        return IDLE

    if inp.mode == Mode.RAW:
        material = (target / PURE_STRENGTH) * volume
    elif inp.mode == Mode.DILUTE:
        material = (target / _current_strength(inp.current_strength_text)) * volume
    else:
        raise ValueError(f"Unknown calculation mode: {inp.mode}")

    # Finite inputs can still overflow (1e200 * 1e200)
    solvent = volume - material
    if not math.isfinite(material) or not math.isfinite(solvent):
        return IDLE

    return DilutionResult(material_mass=round2(material), solvent_mass=round2(solvent))


def proportions(volume: Union[float, str, None], material_mass: Optional[float]) -> Proportions:
    if isinstance(volume, str):
        volume = parse_number(volume)
    if not volume or not material_mass:
        return Proportions(0.0, 100.0)
    pct = min(max(material_mass / volume * 100, 0.0), 100.0)
    return Proportions(material_percent=pct, solvent_percent=100 - pct)


def exceeds_current(inp: DilutionInput) -> bool:
    """Advisory check: is the target stronger than the stock it is made from?"""
    target = parse_number(inp.target_strength_text)
    if target is None or not math.isfinite(target):
        return False
    return target > _current_strength(inp.current_strength_text)


def apply_preset(session, mode: Mode, preset):
    """
    Returns a copy of `session` with a preset's strengths filled in.
    Raw presets are a single target; dilute presets are (existing, target).
    """
    if mode == Mode.RAW:
        return replace(session, target=str(preset))
    existing, target = preset
    return replace(session, existing=str(existing), target=str(target))


def _calc(payload: Dict) -> Dict:
    out = {}
    for it in payload.get("items", []):
        try:
            mode = Mode(it.get("mode"))
        except ValueError:
            raise ValueError(f"Unknown calculation mode: {it.get('mode')}")

        inp = DilutionInput(
            mode=mode,
            current_strength_text=str(it.get("current", "")),
            target_strength_text=str(it.get("target", "")),
            volume_text=str(it.get("volume", "")),
        )
        result = compute(inp)
        out[it.get("name", mode.value)] = {
            "material_g": result.material_mass,
            "solvent_g": result.solvent_mass,
            "exceeds_current": exceeds_current(inp),
        }
    return out


@tool("dilution_calculator")
def dilution_calculator(payload: str) -> str:
    """
    Computes grams of concentrate and grams of solvent for a finished volume.
    'raw' mode dilutes pure (100%) material; 'dilute' mode dilutes a stock of
    known strength given as 'current' (%). Blank 'current' means 100%.

    Input (JSON string):
    {"items":[{"name":"A","mode":"raw","target":20,"volume":100}]}
    {"items":[{"name":"B","mode":"dilute","current":50,"target":20,"volume":100}]}
    """
    try:
        data = json.loads(payload) if isinstance(payload, str) else payload
    except json.JSONDecodeError:
        raise ValueError('Invalid JSON payload.')

    return json.dumps(_calc(data))
