from __future__ import annotations

import argparse
from functools import lru_cache
from pathlib import Path
from typing import Any

import orjson
from jsonschema import Draft202012Validator

SCHEMA_FILENAME = "presentation_data.schema.json"


def schema_path() -> Path:
    # .../src/slidedata/core/validate/schema_validate.py -> .../src/slidedata/core/schemas
    return Path(__file__).resolve().parents[1] / "schemas" / SCHEMA_FILENAME


def load_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    return Draft202012Validator(load_json(schema_path()))


def _json_path(error: Any) -> str:
    path = "$"
    for p in error.path:
        path += f"[{p!r}]" if isinstance(p, str) else f"[{p}]"
    return path


def validate_instance(instance: Any) -> list[str]:
    """
    Validate an interchange document against the bundled presentation-data schema.
    Returns a list of human-readable error strings (empty if valid).
    Each error is formatted as: "<jsonpath>: <message>"
    """
    errors = sorted(_validator().iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    return [f"{_json_path(e)}: {e.message}" for e in errors]


def validate_file(instance_path: Path) -> list[str]:
    if not instance_path.exists():
        return [f"[ERR] instance not found: {instance_path}"]
    try:
        inst = load_json(instance_path)
    except orjson.JSONDecodeError as e:
        return [f"[ERR] not valid JSON: {instance_path} ({e})"]
    return validate_instance(inst)


def main() -> int:
    ap = argparse.ArgumentParser(prog="schema_validate")
    ap.add_argument("--instance", required=True, help="path to json to validate")
    args = ap.parse_args()

    instance_path = Path(args.instance)
    errors = validate_file(instance_path)
    if not errors:
        print(f"[OK] {instance_path} conforms to {schema_path()}")
        return 0
    if errors[0].startswith("[ERR]"):
        print(errors[0])
        return 2
    print(f"[NG] {instance_path} does NOT conform to {schema_path()}")
    for err in errors:
        print(f"- {err}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
