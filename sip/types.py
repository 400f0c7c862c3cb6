"""Runtime value helpers for SIP.

SIP has two runtime types, INTEGER and REAL, carried by Python `int`
and `float`. This module names them and renders values and memory
contents for the debug log and the command line driver.
"""

from __future__ import annotations

from typing import Any, Dict, List


def type_name(value: Any) -> str:
    """Return the SIP type name of a runtime value."""
    if isinstance(value, bool):
        raise TypeError(f"not a SIP value: {value!r}")
    if isinstance(value, int):
        return 'INTEGER'
    if isinstance(value, float):
        return 'REAL'
    raise TypeError(f"not a SIP value: {value!r}")


def is_real(*values: Any) -> bool:
    """True when any operand is REAL, which makes the result REAL."""
    return any(isinstance(v, float) for v in values)


def to_string(value: Any) -> str:
    if value is None:
        return 'None'
    if isinstance(value, float):
        # Use repr for a concise round-trip representation
        return repr(value)
    return str(value)


def format_memory(memory: Dict[str, Any]) -> List[str]:
    """Render memory contents one `name = value` line per variable."""
    return [f"{name} = {to_string(value)}" for name, value in memory.items()]
