from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from jsonschema import ValidationError
from jsonschema.validators import Draft202012Validator

from .errors import ConfigurationError

SCHEMAS_DIR = Path(__file__).parent / "schemas"


def read_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


@dataclass(frozen=True)
class SchemaRegistry:
    schemas_base_dir: Path = field(default=SCHEMAS_DIR)

    def validate(self, document: dict, schema_filename: str) -> None:
        schema = read_json(self.schemas_base_dir / schema_filename)
        try:
            Draft202012Validator(schema).validate(document)
        except ValidationError as e:
            where = "/".join(str(p) for p in e.absolute_path) or "<root>"
            raise ConfigurationError(code="SCHEMA_INVALID", message=f"{where}: {e.message}") from e
