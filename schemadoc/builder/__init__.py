"""
Table Builder Module

Turns resolved types into documentation tables:
- Request body rows from handler contracts (param_spec.py)
- `Field | Type` HTML tables with required markers (table.py)
"""

from .param_spec import ParamSpecBuilder
from .table import ParamRow, TableRenderer

__all__ = [
    "ParamSpecBuilder",
    "ParamRow",
    "TableRenderer",
]
