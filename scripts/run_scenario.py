"""CLI for replaying LiftGossip request scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from fleet import BankConfig, ElevatorBank

EVENTS = ("accepted", "rejected", "move")


def build_bank(config: Dict) -> ElevatorBank:
    bank_config = BankConfig.from_dict(config.get("bank", {}))
    return ElevatorBank.from_config(bank_config)


def record_events(bank: ElevatorBank) -> List[Dict]:
    events: List[Dict] = []
    for name in EVENTS:
        bank.on_event(name, lambda payload, name=name: events.append({"event": name, **payload}))
    return events


def run_scenario(bank: ElevatorBank, config: Dict) -> Dict:
    accepted: List[Dict] = []
    for request in config.get("requests", []):
        floor = request["floor"]
        count = bank.submit(
            floor,
            request.get("direction", "rest"),
            request.get("priority", 0),
        )
        accepted.append({"floor": floor, "accepted": count})
    traces = bank.drain_all()
    return {
        "accepted": accepted,
        "traces": {elevator.elevator_id: trace for elevator, trace in zip(bank.elevators, traces)},
    }


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write acceptance counts, traces and events as JSON",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level, e.g. DEBUG")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = json.loads(args.config.read_text())
    bank = build_bank(config)
    events = record_events(bank)
    outcome = run_scenario(bank, config)

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "accepted": outcome["accepted"],
        "traces": outcome["traces"],
        "events": events,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print("Acceptances:")
    for entry in results["accepted"]:
        print(f"  floor {entry['floor']}: {entry['accepted']} elevator(s)")
    print("Traces:")
    for elevator_id, trace in results["traces"].items():
        print(f"  elevator {elevator_id}: {' -> '.join(trace) if trace else '(idle)'}")
    if args.output:
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
