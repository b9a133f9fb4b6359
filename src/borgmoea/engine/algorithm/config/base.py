"""Base utilities for algorithm configuration."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict, Mapping, Tuple

from borgmoea.foundation.exceptions import ConfigurationError, MissingConfigError


class _SerializableConfig:
    """Mixin to serialize dataclass configs."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


def _require_fields(cfg: Dict[str, Any], fields: Tuple[str, ...], name: str) -> None:
    """Validate that required fields are present in configuration."""
    missing = [field for field in fields if field not in cfg]
    if missing:
        raise MissingConfigError(", ".join(missing), f"{name}Config")


def _normalize_operator_spec(raw: Any) -> Tuple[str, Dict[str, Any]]:
    """
    Accept ``"sbx"``, ``("pcx", {"n_parents": 3})``, ``["pcx", {...}]`` or
    ``{"name": "pcx", "n_parents": 3}`` and return ``(name, params)``.
    """
    if isinstance(raw, str):
        return raw, {}
    if isinstance(raw, Mapping):
        params = dict(raw)
        name = params.pop("name", None) or params.pop("method", None)
        if not name:
            raise ConfigurationError(f"Operator entry {raw!r} has no 'name'.")
        return str(name), params
    if isinstance(raw, (list, tuple)) and raw and isinstance(raw[0], str):
        if len(raw) == 1:
            return raw[0], {}
        if len(raw) == 2 and isinstance(raw[1], Mapping):
            return raw[0], dict(raw[1])
    raise ConfigurationError(
        f"Cannot interpret operator entry {raw!r}.",
        "Use a name, a (name, params) pair or a mapping with a 'name' key",
    )


__all__ = ["_SerializableConfig", "_require_fields", "_normalize_operator_spec"]
