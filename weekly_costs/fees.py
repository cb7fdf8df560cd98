# SPDX-License-Identifier: MIT
# weekly_costs/fees.py
from __future__ import annotations
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

# env var -> FeeSchedule field
ENV_OVERRIDES = {
    "ADD_FEE": "add_fee",
    "TRADE_FEE": "trade_fee",
    "LOSS_FEE": "loss_fee",
    "WEEKS": "weeks",
    "BOUNDARY_WEEKDAY": "boundary_weekday",
    "TIMEZONE": "timezone",
}


class FeeConfigError(ValueError):
    """Raised when a fee file or env override holds an unusable value."""


@dataclass(frozen=True)
class FeeSchedule:
    add_fee: int = 3
    trade_fee: int = 10
    loss_fee: int = 5
    weeks: int = 14
    boundary_weekday: str = "tuesday"
    timezone: str = "UTC"

    @property
    def boundary_weekday_index(self) -> int:
        return WEEKDAYS[self.boundary_weekday]


def _coerce(name: str, value: Any) -> Any:
    if name in ("add_fee", "trade_fee", "loss_fee", "weeks"):
        try:
            out = int(value)
        except (TypeError, ValueError):
            raise FeeConfigError(f"{name} must be an integer, got {value!r}")
        if out < 0 or (name == "weeks" and out < 1):
            raise FeeConfigError(f"{name} out of range: {out}")
        return out
    if name == "boundary_weekday":
        day = str(value or "").strip().lower()
        if day not in WEEKDAYS:
            raise FeeConfigError(
                f"boundary_weekday must be one of {', '.join(WEEKDAYS)}, got {value!r}"
            )
        return day
    if name == "timezone":
        tz = str(value or "").strip()
        if tz.upper() == "UTC":
            return "UTC"
        try:
            ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError):
            raise FeeConfigError(f"Unknown timezone {value!r}")
        return tz
    return str(value)


def _load_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            y = yaml.safe_load(f) or {}
    except OSError as e:
        raise FeeConfigError(f"Cannot read fee file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise FeeConfigError(f"Invalid YAML in fee file {path}: {e}") from e
    if not isinstance(y, dict):
        raise FeeConfigError(f"Fee file {path} must contain a mapping")
    return y


def load_fee_schedule(
    path: str | None = None, env: Mapping[str, str] | None = None
) -> FeeSchedule:
    """Build a FeeSchedule from defaults, an optional YAML file, then env vars.

    Later sources win. Unknown YAML keys are ignored so a league can keep its
    own notes in the same file.
    """
    env = os.environ if env is None else env
    known = {f.name for f in fields(FeeSchedule)}
    overrides: Dict[str, Any] = {}

    path = path or env.get("FEES_FILE")
    if path:
        for k, v in _load_yaml(path).items():
            if k in known:
                overrides[k] = _coerce(k, v)

    for var, name in ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw not in (None, ""):
            overrides[name] = _coerce(name, raw)

    return replace(FeeSchedule(), **overrides)
