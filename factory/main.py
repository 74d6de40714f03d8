#!/usr/bin/env python3
# factory/main.py
"""
Reads JSON from stdin, writes JSON to stdout.
Builds the production graph, solves the conservation system and reports
how many production units each resource needs.

Usage: python -m factory.main [--backend lu|glop] [--dot] [-v] < input.json
"""
import argparse
import json
import logging
import sys

from factory.dot import to_dot
from factory.errors import FactoryError, InvalidRateError, SingularSystemError
from factory.graph import ProductionGraph
from factory.solver import BACKENDS, TOL, solve

log = logging.getLogger("factory")

DUPLICATE_EDGE_MODES = ("reject", "sum")


def read_input():
    return json.load(sys.stdin)


def write_output(obj):
    json.dump(obj, sys.stdout, separators=(",", ":"))


def _section(data, key, kind, default):
    value = data.get(key, default)
    if not isinstance(value, kind):
        raise ValueError(f"{key} must be a JSON {'object' if kind is dict else 'array'}")
    return value


def _rate(entry, what):
    # "iron_ore": 30 and "iron_ore": {"rate_per_min": 30} are both fine
    if isinstance(entry, dict):
        if "rate_per_min" not in entry:
            raise InvalidRateError(f"{what} missing rate_per_min")
        return entry["rate_per_min"]
    return entry


def build_graph(data, duplicate_edges="reject"):
    if duplicate_edges not in DUPLICATE_EDGE_MODES:
        raise ValueError(f"duplicate_edges must be one of {DUPLICATE_EDGE_MODES}")
    graph = ProductionGraph()
    for name, entry in _section(data, "resources", dict, {}).items():
        graph.add_node(name, _rate(entry, f"resource {name}"))
    for e in _section(data, "edges", list, []):
        if not isinstance(e, dict):
            raise ValueError(f"edge must be a JSON object, got {e!r}")
        graph.add_edge(e["from"], e["to"], _rate(e, f"edge {e['from']} -> {e['to']}"),
                       accumulate=(duplicate_edges == "sum"))
    return graph


def read_targets(data):
    targets = dict(_section(data, "targets", dict, {}))
    # single-target form: {"target": {"item": ..., "rate_per_min": ...}}
    target = data.get("target")
    if target:
        if not isinstance(target, dict):
            raise ValueError("target must be a JSON object")
        item = target["item"]
        targets[item] = float(targets.get(item, 0.0)) + float(target.get("rate_per_min", 0.0))
    return targets


def read_options(data):
    options = _section(data, "options", dict, {})
    max_condition = options.get("max_condition")
    return {
        "backend": options.get("backend", "lu"),
        "tolerance": float(options.get("tolerance", TOL)),
        "max_condition": None if max_condition is None else float(max_condition),
        "duplicate_edges": options.get("duplicate_edges", "reject"),
    }


def build_and_solve(data, backend=None):
    if not isinstance(data, dict):
        return {"status": "invalid", "reason": "input must be a JSON object"}

    try:
        options = read_options(data)
        graph = build_graph(data, options["duplicate_edges"])
        solution = solve(graph, read_targets(data),
                         backend=backend or options["backend"],
                         tolerance=options["tolerance"],
                         max_condition=options["max_condition"])
    except SingularSystemError as e:
        log.info("singular system: %s", e)
        return {"status": "singular", "reason": str(e)}
    except (FactoryError, KeyError, TypeError, ValueError) as e:
        log.info("invalid input: %s", e)
        return {"status": "invalid", "reason": str(e)}

    factories = solution.factories()
    return {"status": "ok",
            "units": dict(solution.items()),
            "factories": factories,
            "total_factories": sum(factories.values())}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--backend", choices=sorted(BACKENDS),
                        help="linear solver (default: options.backend or lu)")
    parser.add_argument("--dot", action="store_true",
                        help="print the graph in Graphviz DOT form instead of solving")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        data = read_input()
    except json.JSONDecodeError as e:
        write_output({"status": "invalid", "reason": f"bad JSON: {e}"})
        return

    if args.dot:
        try:
            if not isinstance(data, dict):
                raise ValueError("input must be a JSON object")
            graph = build_graph(data, read_options(data)["duplicate_edges"])
        except (FactoryError, KeyError, TypeError, ValueError) as e:
            write_output({"status": "invalid", "reason": str(e)})
            return
        sys.stdout.write(to_dot(graph))
        return

    write_output(build_and_solve(data, backend=args.backend))


if __name__ == "__main__":
    main()
