# run_samples.py
import json
import sys
import subprocess
from typing import Dict, Any, Tuple, List

FACTORY_CMD = f"{sys.executable} -m factory.main"


def run(cmd: str, payload: Dict[str, Any]) -> Tuple[Dict[str, Any], str, str]:
    p = subprocess.run(
        cmd.split(),
        input=json.dumps(payload).encode("utf-8"),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        check=False,
    )
    out = p.stdout.decode("utf-8").strip()
    err = p.stderr.decode("utf-8")
    try:
        return json.loads(out), out, err
    except Exception:
        print("STDOUT:")
        print(out)
        print("STDERR:")
        print(err)
        raise

# ---------------- Factory samples ----------------

VERSATILE_FRAMEWORK = {
    "resources": {
        "iron_ore": 30, "iron_ingot": 30, "iron_plate": 20, "iron_rod": 15,
        "screw": 40, "reinforced_iron_plate": 5, "modular_frame": 2, "rotor": 4,
        "smart_plating": 2, "copper_ingot": 30, "copper_sheet": 10, "wire": 30,
        "cable": 30, "limestone": 30, "concrete": 30, "copper_ore": 30,
        "steel_ingot": 45, "coal": 60, "steel_beam": 15, "steel_pipe": 20,
        "versatile_framework": 2,
    },
    "edges": [
        {"from": "iron_plate", "to": "reinforced_iron_plate", "rate_per_min": 30},
        {"from": "screw", "to": "reinforced_iron_plate", "rate_per_min": 60},
        {"from": "reinforced_iron_plate", "to": "modular_frame", "rate_per_min": 3},
        {"from": "iron_rod", "to": "modular_frame", "rate_per_min": 12},
        {"from": "iron_rod", "to": "rotor", "rate_per_min": 20},
        {"from": "screw", "to": "rotor", "rate_per_min": 100},
        {"from": "reinforced_iron_plate", "to": "smart_plating", "rate_per_min": 2},
        {"from": "rotor", "to": "smart_plating", "rate_per_min": 2},
        {"from": "iron_ingot", "to": "iron_plate", "rate_per_min": 30},
        {"from": "iron_ingot", "to": "iron_rod", "rate_per_min": 15},
        {"from": "iron_rod", "to": "screw", "rate_per_min": 10},
        {"from": "copper_ingot", "to": "copper_sheet", "rate_per_min": 20},
        {"from": "copper_ingot", "to": "wire", "rate_per_min": 15},
        {"from": "wire", "to": "cable", "rate_per_min": 60},
        {"from": "limestone", "to": "concrete", "rate_per_min": 45},
        {"from": "iron_ore", "to": "iron_ingot", "rate_per_min": 30},
        {"from": "copper_ore", "to": "copper_ingot", "rate_per_min": 30},
        {"from": "iron_ore", "to": "steel_ingot", "rate_per_min": 45},
        {"from": "coal", "to": "steel_ingot", "rate_per_min": 45},
        {"from": "steel_ingot", "to": "steel_beam", "rate_per_min": 60},
        {"from": "steel_ingot", "to": "steel_pipe", "rate_per_min": 60},
        {"from": "modular_frame", "to": "versatile_framework", "rate_per_min": 12},
        {"from": "steel_beam", "to": "versatile_framework", "rate_per_min": 60},
    ],
    "targets": {"versatile_framework": 2},
}

FACTORY_SAMPLES: List[Dict[str, Any]] = [
    # 1) Full versatile framework chain, 2/min
    {"name": "factory_versatile_framework_2", "payload": VERSATILE_FRAMEWORK},
    # 2) Same chain through the GLOP backend
    {
        "name": "factory_versatile_framework_2_glop",
        "payload": dict(VERSATILE_FRAMEWORK, options={"backend": "glop"}),
    },
    # 3) Two-step chain, single-target form
    {
        "name": "factory_iron_plate_60",
        "payload": {
            "resources": {"iron_ore": {"rate_per_min": 30},
                          "iron_ingot": {"rate_per_min": 30},
                          "iron_plate": {"rate_per_min": 20}},
            "edges": [
                {"from": "iron_ore", "to": "iron_ingot", "rate_per_min": 30},
                {"from": "iron_ingot", "to": "iron_plate", "rate_per_min": 30},
            ],
            "target": {"item": "iron_plate", "rate_per_min": 60},
        }
    },
    # 4) Singular: a resource nobody produces or consumes
    {
        "name": "factory_singular_dead_resource",
        "payload": {
            "resources": {"iron_ore": 30, "sam_ore": 0},
            "edges": [],
            "targets": {"iron_ore": 30},
        }
    },
]


def pretty_print(name: str, obj: Dict[str, Any]):
    print("##", name)
    print(json.dumps(obj, indent=2, ensure_ascii=False, separators=(",", ":")))
    print()


def main():
    factory_cmd = sys.argv[1] if len(sys.argv) > 1 else FACTORY_CMD

    print("# Running factory samples\n")
    for case in FACTORY_SAMPLES:
        try:
            got, raw_out, raw_err = run(factory_cmd, case["payload"])
        except Exception as e:
            print(f"## {case['name']} - error running sample")
            print(str(e))
            continue
        pretty_print(case["name"], got)


if __name__ == "__main__":
    main()
