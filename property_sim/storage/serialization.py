"""GameState <-> JSON conversion.

Dataclasses are encoded field by field; enums as their values. The staff
role union is tagged with a ``kind`` key so it can be decoded back into
the right role type.
"""

from __future__ import annotations

import json
import types
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Union, get_args, get_origin, get_type_hints

from property_sim.exceptions import StorageError
from property_sim.models.staff import CaretakerRole, EstateAgentRole
from property_sim.models.state import GameState
from property_sim.storage.migrations import migrate

ROLE_KINDS: dict[str, type] = {
    "estate_agent": EstateAgentRole,
    "caretaker": CaretakerRole,
}
_KIND_BY_TYPE = {cls: kind for kind, cls in ROLE_KINDS.items()}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Enum):
        return value.value
    elif is_dataclass(value) and not isinstance(value, type):
        data = {f.name: serialize_value(getattr(value, f.name)) for f in fields(value)}
        kind = _KIND_BY_TYPE.get(type(value))
        if kind is not None:
            data = {"kind": kind, **data}
        return data
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def deserialize_value(tp: Any, value: Any) -> Any:
    """Rebuild a value of type ``tp`` from its JSON form."""
    if value is None:
        return None

    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        options = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(options) == 1:
            return deserialize_value(options[0], value)
        return deserialize_tagged(options, value)
    if origin is list:
        (item_type,) = get_args(tp)
        return [deserialize_value(item_type, v) for v in value]
    if origin is dict:
        key_type, value_type = get_args(tp)
        return {deserialize_value(key_type, k): deserialize_value(value_type, v) for k, v in value.items()}
    if is_dataclass(tp):
        return dataclass_from_dict(tp, value)
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp(value)
    if tp is float:
        return float(value)
    if tp is int:
        return int(value)
    return value


def deserialize_tagged(options: list[Any], value: dict[str, Any]) -> Any:
    cls = ROLE_KINDS.get(value.get("kind", ""))
    if cls is None or cls not in options:
        raise StorageError(f"Unknown tagged value kind {value.get('kind')!r}")
    return dataclass_from_dict(cls, value)


def dataclass_from_dict(cls: type, data: dict[str, Any]) -> Any:
    """Build ``cls`` from a dict; absent keys fall back to field defaults."""
    hints = get_type_hints(cls)
    kwargs = {f.name: deserialize_value(hints[f.name], data[f.name]) for f in fields(cls) if f.name in data}
    return cls(**kwargs)


def dump_state(state: GameState, pretty: bool = False) -> str:
    data = serialize_value(state)
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)


def load_state(blob: str) -> GameState:
    """Parse, migrate and decode a stored game.

    Raises
    ------
    StorageError
        If the blob is not valid JSON or does not describe a game state.
    MigrationError
        If the stored version cannot be migrated.
    """
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as exc:
        raise StorageError(f"Corrupt save data: {exc}") from exc
    if not isinstance(data, dict):
        raise StorageError("Save data is not an object")

    data = migrate(data)
    try:
        return dataclass_from_dict(GameState, data)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise StorageError(f"Save data does not match the game state: {exc}") from exc
