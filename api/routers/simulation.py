"""
Simulation router - uruchamianie walk i szukanie bonusu Elfów.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Dict, Any, Optional
from pathlib import Path

from cavern.core.config_loader import ConfigLoader
from cavern.simulation import (
    RunMode, Simulation, SimulationConfig, find_minimum_elf_bonus,
)
from cavern.text import MapParseError, parse_grid


router = APIRouter()

DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class SimulationRequest(BaseModel):
    """Request do symulacji."""
    grid: str
    elf_attack_bonus: int = Field(default=0, ge=0)
    mode: RunMode = RunMode.COMPLETE
    include_events: bool = False


class BonusSearchRequest(BaseModel):
    """Request do szukania bonusu."""
    grid: str
    max_bonus: Optional[int] = Field(default=None, ge=0)


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.get("/config")
async def get_config() -> Dict[str, Any]:
    """Zwraca aktywne reguły walki i limity."""
    return {
        "rules": _loader.load_combat_rules().to_dict(),
        "simulation": _loader.get_simulation_config(),
        "bonus_search": _loader.get_search_config(),
    }


@router.post("/simulate")
async def run_simulation(request: SimulationRequest) -> Dict[str, Any]:
    """
    Uruchamia walkę.

    Args:
        request: Mapa, bonus Elfów i tryb biegu

    Returns:
        Wynik walki z końcową mapą (i opcjonalnie logiem eventów)
    """
    try:
        grid = parse_grid(request.grid, _loader.load_combat_rules())
    except MapParseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    config = SimulationConfig(
        elf_attack_bonus=request.elf_attack_bonus,
        mode=request.mode,
        max_rounds=_loader.get_simulation_config()["max_rounds"],
    )
    sim = Simulation(grid, config)
    sim.run()

    response: Dict[str, Any] = {"result": sim.get_result()}
    if request.include_events:
        events = sim.logger.get_events()
        response["events"] = events
        response["total_events"] = len(events)

    return response


@router.post("/bonus-search")
async def bonus_search(request: BonusSearchRequest) -> Dict[str, Any]:
    """
    Szuka minimalnego bonusu, przy którym żaden Elf nie ginie.

    Returns:
        {"bonus": int, "attempts": int, "outcome": {...}} lub {"bonus": None}
    """
    search = _loader.get_search_config()
    max_bonus = request.max_bonus if request.max_bonus is not None else search["max_bonus"]

    try:
        result = find_minimum_elf_bonus(
            request.grid,
            _loader.load_combat_rules(),
            start=search["start"],
            max_bonus=max(max_bonus, search["start"]),
            max_rounds=_loader.get_simulation_config()["max_rounds"],
        )
    except MapParseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result is None:
        return {"bonus": None}

    return result.to_dict()
