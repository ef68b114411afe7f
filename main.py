#!/usr/bin/env python3
"""
Cavern Combat Simulator - Entry Point
═══════════════════════════════════════════════════════════════════════════

Uruchamia walkę Goblinów z Elfami na mapie z pliku.

Użycie:
    python main.py data/example.txt               # Jedna walka, bonus 0
    python main.py data/example.txt --bonus 3     # Elfy zadają 3 + 3
    python main.py data/example.txt --search      # Minimalny bonus bez strat Elfów
    python main.py data/example.txt --verbose     # Mapa po każdej rundzie
    python main.py data/example.txt --log out.json

Wynik:
    - Wypisuje wynik walki: rundy * HP = score
    - Opcjonalnie zapisuje pełny log do pliku JSON
"""

import argparse
import sys
from pathlib import Path

# Dodaj katalog projektu do path
sys.path.insert(0, str(Path(__file__).parent))

from cavern.core.config_loader import ConfigLoader
from cavern.simulation import (
    RunMode, Simulation, SimulationConfig, find_minimum_elf_bonus, run_with_bonus,
)
from cavern.events import EventType
from cavern.text import parse_grid, render_grid


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cavern Combat Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", help="Plik z mapą jaskini")
    parser.add_argument(
        "--bonus",
        type=int,
        default=0,
        help="Bonus obrażeń Elfów (domyślnie: 0)"
    )
    parser.add_argument(
        "--search",
        action="store_true",
        help="Szukaj minimalnego bonusu, przy którym żaden Elf nie ginie"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Wypisz mapę po każdej rundzie"
    )
    parser.add_argument(
        "--log",
        default=None,
        help="Zapisz log zdarzeń do pliku JSON"
    )
    parser.add_argument(
        "--data",
        default=str(Path(__file__).parent / "data"),
        help="Folder z defaults.yaml"
    )
    return parser


def print_outcome(sim: Simulation) -> None:
    outcome = sim.outcome
    print()
    print("=" * 60)
    print("WYNIKI")
    print("=" * 60)

    if outcome.winner is not None:
        print(f"🏆 ZWYCIĘZCA: {outcome.winner.name}")
    elif outcome.stalled:
        print("🤝 BRAK ROZSTRZYGNIĘCIA (brak kontaktu lub limit rund)")

    if outcome.aborted:
        print("⚠️  Walka przerwana po śmierci Elfa")

    print(f"Combat ended after {outcome.completed_rounds} rounds")
    print("Final map:")
    print(render_grid(sim.grid))
    print()
    print(
        f"Outcome: {outcome.completed_rounds} * {outcome.total_hit_points} = {outcome.score}"
    )


def main(argv=None) -> int:
    """Główna funkcja."""
    args = build_parser().parse_args(argv)

    try:
        text = Path(args.input).read_text(encoding="utf-8")
        loader = ConfigLoader(args.data)
        rules = loader.load_combat_rules()
        sim_defaults = loader.get_simulation_config()
        search_defaults = loader.get_search_config()
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("=" * 60)
    print("CAVERN COMBAT SIMULATOR")
    print("=" * 60)

    try:
        if args.search:
            result = find_minimum_elf_bonus(
                text,
                rules,
                start=search_defaults["start"],
                max_bonus=search_defaults["max_bonus"],
                max_rounds=sim_defaults["max_rounds"],
            )
            if result is None:
                print("Żaden bonus z zakresu nie chroni wszystkich Elfów")
                return 0
            print(f"Minimalny bonus Elfów: {result.bonus} (prób: {result.attempts})")
            sim = run_with_bonus(
                text, result.bonus, rules,
                mode=RunMode.COMPLETE, max_rounds=sim_defaults["max_rounds"],
            )
        else:
            print(f"Bonus Elfów: {args.bonus}")
            config = SimulationConfig(
                elf_attack_bonus=args.bonus,
                max_rounds=sim_defaults["max_rounds"],
                record_frames=args.verbose or sim_defaults["record_frames"],
            )
            sim = Simulation(parse_grid(text, rules), config)
            print()
            print("Initial map:")
            print(render_grid(sim.grid))
            sim.run()

            if args.verbose:
                for event in sim.logger.get_events_by_type(EventType.ROUND_END):
                    status = "complete" if event.data["completed"] else "interrupted"
                    print()
                    print(f"Round {event.round} {status}:")
                    print(event.data["frame"])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_outcome(sim)

    if args.log:
        sim.save_log(args.log)
        print()
        print(f"📄 Log zapisany: {args.log}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
