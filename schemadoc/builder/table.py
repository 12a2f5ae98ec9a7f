"""
Table Renderer - HTML-in-Markdown tables for field maps and request specs.

Output is deterministic: field maps are rendered in key order, request rows
in the order they were built.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from ..introspection.field_map import SchemaRef
from ..typespec.type_names import short_name, unique

DEFAULT_NAMESPACES = ("typing.", "builtins.")

TABLE_TEMPLATE = """<table>
  <thead>
    <tr>
      <th>Field</th>
      <th>Type</th>
    </tr>
  </thead>
  <tbody>
    {rows}
  </tbody>
</table>
"""


@dataclass
class ParamRow:
    """One request body field: nested rows when the field is itself a map"""
    key: str
    type: Union[str, List["ParamRow"]]
    required: bool = False

    def is_nested(self) -> bool:
        return isinstance(self.type, list)

    def to_dict(self):
        """Convert to dictionary representation"""
        return {
            "key": self.key,
            "type": [row.to_dict() for row in self.type] if self.is_nested() else self.type,
            "required": self.required,
        }


class TableRenderer:
    """Renders field maps and ParamRow lists as `Field | Type` tables"""

    def __init__(self, strip_namespaces: Sequence[str] = ()):
        namespaces = unique(
            ns if ns.endswith(".") else f"{ns}."
            for ns in [*DEFAULT_NAMESPACES, *strip_namespaces]
            if ns
        )
        self.namespace_pattern = re.compile(
            "|".join(rf"(?<![\w.]){re.escape(ns)}" for ns in namespaces)
        )

    def render(self, field_map: Mapping[str, Any], modules: Optional[Mapping[str, Any]] = None) -> str:
        """
        Render a schema field map

        Args:
            field_map: {field: display type or SchemaRef}
            modules: Registry view name -> schema map, used to label links
        """
        modules = modules or {}
        rows = [self.field_row(key, field_map[key], modules) for key in sorted(field_map)]
        return self.to_table(rows)

    def render_rows(self, rows: Iterable[ParamRow]) -> str:
        return self.to_table(rows)

    def field_row(self, key: str, value: Any, modules: Mapping[str, Any]) -> str:
        if isinstance(value, SchemaRef):
            name = short_name(modules.get(value.name)) or value.name
            return f"<tr><td>{key}</td><td>[{name}](#{name})</td></tr>"
        return f"<tr><td>{key}</td><td>{value}</td></tr>"

    def to_table(self, rows: Iterable[Any]) -> str:
        body = "\n".join(self._to_row(row) for row in rows)
        return self.strip_namespaces(TABLE_TEMPLATE.format(rows=body))

    def strip_namespaces(self, text: str) -> str:
        return self.namespace_pattern.sub("", text)

    def _to_row(self, row: Any) -> str:
        if isinstance(row, str):
            return row

        if isinstance(row, tuple):
            if len(row) == 2:
                return f"<tr><td>{row[0]}</td><td>{row[1]}</td></tr>"
            row = ParamRow(*row)

        marker = "**" if row.required else ""
        value = self.to_table(row.type) if row.is_nested() else row.type
        return f"<tr><td>{marker}{row.key}{marker}</td><td>{value}</td></tr>"
