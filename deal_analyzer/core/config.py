from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from loguru import logger

from .assumptions import Assumptions
from .rehab import RehabItem

# Directory holding the packaged defaults
BASE_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = BASE_DIR / "config.yaml"

PathLike = Union[str, Path]


def _load_yaml(path: Optional[PathLike] = None) -> Dict[str, Any]:
    with open(path or DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


def _coerce(name: str, value: Any, default: Any) -> Any:
    try:
        if isinstance(default, dict):
            return {str(k): float(v) for k, v in dict(value).items()}
        if isinstance(default, int):
            return int(value)
        return float(value)
    except (TypeError, ValueError) as err:
        raise ValueError(f"invalid value for {name!r}: {value!r}") from err


def load_assumptions(path: Optional[PathLike] = None) -> Assumptions:
    """Read the ``assumptions`` mapping of a YAML file into an ``Assumptions`` record.

    Keys missing from the file keep their built-in defaults; unknown keys are
    ignored with a warning.
    """
    section = _load_yaml(path).get("assumptions") or {}
    defaults = Assumptions()
    known = {f.name: getattr(defaults, f.name) for f in fields(Assumptions)}

    values: Dict[str, Any] = {}
    for key, value in section.items():
        if key not in known:
            logger.warning("Ignoring unknown assumption", key=key)
            continue
        values[key] = _coerce(key, value, known[key])
    return Assumptions(**values)


def load_rehab_catalog(path: Optional[PathLike] = None) -> List[RehabItem]:
    """Read the ``rehab_catalog`` list of a YAML file into catalog items."""
    items: List[RehabItem] = []
    for raw in _load_yaml(path).get("rehab_catalog") or []:
        base_prices = {str(k): float(v) for k, v in (raw.get("base_prices") or {}).items()}
        unit_price = raw.get("unit_price")
        default_quantity = raw.get("default_quantity")
        items.append(
            RehabItem(
                id=str(raw["id"]),
                label=str(raw.get("label", raw["id"])),
                unit_type=raw.get("unit_type", "fixed"),
                unit_price=None if unit_price is None else float(unit_price),
                base_prices=base_prices,
                default_quantity=None if default_quantity is None else float(default_quantity),
                category=raw.get("category"),
            )
        )
    return items
