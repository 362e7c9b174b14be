"""Build record types from plain data (e.g. a parsed JSON file).

Expected shape:

```json
{
  "name": "tasks",
  "columns": {"name": "string", "some_float": "float"},
  "validations": [
    {"field": "name", "presence": true, "length": [2, 10]},
    {"field": "some_float", "presence": true}
  ]
}
```

Each validation entry names a field and one or more rule kinds, exactly like
`RecordTypeBuilder.validate`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import DeclarationError
from .records import RecordType


def record_type_from_dict(data: Mapping[str, Any]) -> RecordType:
    """Return the record type described by `data`.

    Raises:
        DeclarationError: if the data is malformed or declares invalid rules.
    """
    if not isinstance(data, Mapping):
        raise DeclarationError("A declaration must be an object.")
    try:
        name = data["name"]
        columns = data["columns"]
    except KeyError as e:
        raise DeclarationError(f"Declaration is missing '{e.args[0]}'.") from e
    if not isinstance(columns, Mapping):
        raise DeclarationError("'columns' must map field names to types.")

    validations = data.get("validations", [])
    if not isinstance(validations, list):
        raise DeclarationError("'validations' must be a list of rule entries.")

    builder = RecordType.declare(name).columns(**columns)
    for entry in validations:
        if not isinstance(entry, Mapping) or not isinstance(entry.get("field"), str):
            raise DeclarationError(f"Validation entry needs a 'field' name: {entry!r}")
        kinds = {k: v for k, v in entry.items() if k != "field"}
        builder.validate(entry["field"], **kinds)
    return builder.build()
