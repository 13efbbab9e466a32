"""
JSON Schema checks for tracker documents.

Schemas live in tracker/schemas/<name>.schema.json. Each one is compiled
into a validator once and reused for every read and write.
"""

import json
from pathlib import Path

import jsonschema
from jsonschema.exceptions import best_match
from jsonschema.protocols import Validator

SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"


class ValidationError(Exception):
    """Document doesn't match its schema."""

    def __init__(self, schema_name: str, message: str, path: str = None, extra_errors: int = 0):
        self.schema_name = schema_name
        self.path = path
        self.extra_errors = extra_errors
        text = f"[{schema_name}] {message}" + (f" at {path}" if path else "")
        if extra_errors:
            text += f" (+{extra_errors} more)"
        super().__init__(text)


_validators: dict[str, Validator] = {}


def get_validator(schema_name: str) -> Validator:
    """Compile (once) and return the validator for a named schema."""
    if schema_name not in _validators:
        schema_path = SCHEMAS_DIR / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
        schema = json.loads(schema_path.read_text())
        cls = jsonschema.validators.validator_for(schema)
        cls.check_schema(schema)
        _validators[schema_name] = cls(schema)
    return _validators[schema_name]


def validate(data: dict, schema_name: str) -> None:
    """
    Check data against a named schema.

    Reports the most relevant error and how many others were found.

    Raises:
        ValidationError: If the data doesn't match
    """
    errors = list(get_validator(schema_name).iter_errors(data))
    if not errors:
        return

    error = best_match(errors)
    path = ".".join(str(p) for p in error.absolute_path) or "(root)"
    raise ValidationError(schema_name, error.message, path, extra_errors=len(errors) - 1)


def validate_before_write(data: dict, schema_name: str, filepath: Path) -> None:
    """
    Check data that is about to be written to filepath.

    Raises:
        ValidationError: If data doesn't match, naming the target file
    """
    try:
        validate(data, schema_name)
    except ValidationError as e:
        raise ValidationError(
            schema_name,
            f"Refusing to write invalid data to {filepath}: {e}",
            extra_errors=0,
        ) from None
