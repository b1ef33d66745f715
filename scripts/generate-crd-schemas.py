#!/usr/bin/env python3
"""
Generate the Config CRD and its JSON schema from the pydantic models.

Output structure:
    _schemas/
    ├── crds/
    │   └── imageregistry-config-crd.yaml
    └── v1/
        └── Config.json
"""

import json
import sys
from pathlib import Path

import yaml

from imageregistry_config.constants import API_VERSION, CONFIG_KIND
from imageregistry_config.schema import config_crd_manifest, config_crd_schema


def log(message: str) -> None:
    """Print a log message to stdout."""
    print(f"[INFO] {message}")


def success(message: str) -> None:
    """Print a success message to stdout."""
    print(f"[SUCCESS] {message}")


def write_crd(output_dir: Path) -> Path:
    crd_path = output_dir / "crds" / "imageregistry-config-crd.yaml"
    crd_path.parent.mkdir(parents=True, exist_ok=True)
    with crd_path.open("w") as f:
        yaml.safe_dump(config_crd_manifest(), f, sort_keys=False)
    return crd_path


def write_json_schema(output_dir: Path) -> Path:
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": CONFIG_KIND,
        **config_crd_schema(),
    }
    schema_path = output_dir / API_VERSION / f"{CONFIG_KIND}.json"
    schema_path.parent.mkdir(parents=True, exist_ok=True)
    schema_path.write_text(json.dumps(schema, indent=2) + "\n")
    return schema_path


def main() -> int:
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("_schemas")
    log(f"Writing schemas to {output_dir}")

    crd_path = write_crd(output_dir)
    log(f"Wrote {crd_path}")

    schema_path = write_json_schema(output_dir)
    log(f"Wrote {schema_path}")

    success("Schema generation complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
