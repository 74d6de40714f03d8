#!/usr/bin/env python3
"""
gen_factory.py
Generates *random but valid* production graphs for testing factory/main.py.

Resources are laid out in tiers; every edge goes from a lower tier to a
higher one, so the system is always invertible.

Usage:
  python gen_factory.py > input.json
  python gen_factory.py 5 > cases.json
  python gen_factory.py 1 42 > input.json   # 1 case, deterministic with seed 42
"""

import json
import random
import sys

TIERS = [
    ["iron_ore", "copper_ore", "limestone", "coal"],
    ["iron_ingot", "copper_ingot", "concrete", "steel_ingot"],
    ["iron_plate", "iron_rod", "wire", "copper_sheet", "steel_beam", "steel_pipe"],
    ["screw", "cable", "reinforced_iron_plate", "rotor"],
    ["modular_frame", "smart_plating", "encased_beam"],
]


def make_factory_case(seed: int = None):
    rng = random.Random(seed)

    # --- Resources ---
    tiers = [rng.sample(tier, rng.randint(2, len(tier))) for tier in TIERS]
    resources = {}
    for tier in tiers:
        for name in tier:
            resources[name] = {"rate_per_min": rng.choice([2, 4, 5, 10, 15, 20, 30, 45, 60])}

    # --- Edges: each resource above tier 0 takes 1-3 inputs from lower tiers ---
    edges = []
    for level in range(1, len(tiers)):
        lower = [name for tier in tiers[:level] for name in tier]
        for name in tiers[level]:
            for source in rng.sample(lower, min(len(lower), rng.randint(1, 3))):
                edges.append({
                    "from": source,
                    "to": name,
                    "rate_per_min": rng.choice([2, 3, 6, 12, 15, 20, 30, 45, 60]),
                })

    # --- Targets: one or two top-tier products ---
    top = tiers[-1]
    targets = {item: rng.choice([1, 2, 5, 10]) for item in rng.sample(top, rng.randint(1, min(2, len(top))))}

    return {"resources": resources, "edges": edges, "targets": targets}


def main():
    n = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else None
    cases = [make_factory_case(seed + i if seed is not None else None) for i in range(n)]

    if n == 1:
        print(json.dumps(cases[0], indent=2))
    else:
        print(json.dumps(cases, indent=2))


if __name__ == "__main__":
    main()
