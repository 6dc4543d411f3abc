from __future__ import annotations

import dataclasses
import logging
import sys
import typing as t
from dataclasses import fields, is_dataclass
from types import UnionType
from typing import Any, get_args, get_origin

from ..errors import ConfigLoadError

_LOG = logging.getLogger(__name__)

# -------------------- Helpers --------------------

def _type_name(tp: Any) -> str:
    try:
        return tp.__name__  # type: ignore[attr-defined]
    except Exception:
        return str(tp)

def _err(path: str, msg: str) -> ConfigLoadError:
    _LOG.debug("RAISE at %s: %s", path, msg)
    return ConfigLoadError(f"{path}: {msg}")

def _coerce_union(val: Any, tp: Any, path: str) -> Any:
    variants = get_args(tp)
    _LOG.debug("Union at %s: variants=%s, val=%r", path, [_type_name(a) for a in variants], val)
    errs: list[str] = []
    for sub in variants:
        # NoneType матчится ТОЛЬКО при val is None
        if sub is type(None):
            if val is None:
                return None
            continue
        try:
            return load_typed(sub, val, path=path)
        except ConfigLoadError as e:
            errs.append(str(e))
    raise _err(path, " | ".join(errs) or f"no variant of {_type_name(tp)} matched")

def _coerce_mapping(val: Any, tp: Any, path: str) -> Any:
    if not isinstance(val, dict):
        raise _err(path, f"expected dict, got {type(val).__name__}")
    kt, vt = get_args(tp) or (Any, Any)
    out: dict[Any, Any] = {}
    for k, v in val.items():
        k2 = load_typed(kt, k, path=f"{path}.<key>")
        out[k2] = load_typed(vt, v, path=f"{path}.{k2}")
    return out

def _resolve_type_hints_for_class(tp: Any) -> dict[str, Any]:
    mod = sys.modules.get(tp.__module__)
    gns: dict[str, Any] = dict(getattr(mod, "__dict__", {}))
    return t.get_type_hints(tp, globalns=gns, localns=None)

def _coerce_dataclass(val: Any, tp: Any, path: str) -> Any:
    _LOG.debug("Dataclass at %s: %s, val-type=%s", path, _type_name(tp), type(val).__name__)
    if not isinstance(val, dict):
        raise _err(path, f"expected mapping for {_type_name(tp)}, got {type(val).__name__}")
    type_hints = _resolve_type_hints_for_class(tp)
    fld_map = {f.name: f for f in fields(tp) if f.init}
    extras = set(val.keys()) - set(fld_map.keys())
    if extras:
        raise _err(path, f"unknown key(s): {sorted(extras)}")
    kwargs: dict[str, Any] = {}
    for name, f in fld_map.items():
        sub_path = f"{path}.{name}"
        if name in val:
            kwargs[name] = load_typed(type_hints.get(name, f.type), val[name], path=sub_path)
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            raise _err(sub_path, "required field missing")
    return tp(**kwargs)

# -------------------- Entry point --------------------

def load_typed(tp: Any, val: Any, *, path: str = "$") -> Any:
    """
    Рекурсивная типо-коэрция raw→typed по аннотациям tp.

    Поддерживает dataclass, Optional/Union, dict и примитивы.
    int принимается там, где ожидается float.
    """
    origin = get_origin(tp)

    if tp is Any or tp is object:
        return val

    if isinstance(tp, type) and is_dataclass(tp):
        return _coerce_dataclass(val, tp, path)

    # typing.Union и types.UnionType (X | None)
    if origin in (t.Union, UnionType):
        return _coerce_union(val, tp, path)

    if origin in (dict, t.Dict):
        return _coerce_mapping(val, tp, path)

    if tp is type(None):
        if val is None:
            return None
        raise _err(path, f"expected None, got {type(val).__name__}")

    if tp is float and isinstance(val, int) and not isinstance(val, bool):
        return float(val)

    if tp in (str, int, float, bool):
        # bool - подкласс int, но в конфиге это разные вещи
        if not isinstance(val, tp) or (tp is int and isinstance(val, bool)):
            raise _err(path, f"expected {_type_name(tp)}, got {type(val).__name__}")
        return val

    raise _err(path, f"unsupported type {_type_name(tp)}")


__all__ = ["load_typed", "ConfigLoadError"]
