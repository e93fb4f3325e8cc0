# src/sigstat/config/schema.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .loader import ConfigError

Validator = Callable[[Any], None]


class _Required:
    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED: Any = _Required()

_TYPE_NAMES: Dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "null": type(None),
}


# ------------------------------- Validators ---------------------------------
def make_choices_validator(choices: Iterable[Any]) -> Validator:
    """
    Build a validator accepting only the given *choices* (compared by equality).

    :return: A callable raising ``ValueError`` for any other value.
    """
    allowed = list(choices)

    def _validator(value: Any) -> None:
        if value not in allowed:
            raise ValueError(f"{value!r} is not one of {allowed!r}")

    return _validator


def make_range_validator(
        *,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        exclusive_minimum: bool = False,
) -> Validator:
    """
    Build a validator for numeric bounds.

    :param minimum: Lower bound (inclusive unless *exclusive_minimum*).
    :param maximum: Inclusive upper bound.
    :param exclusive_minimum: Reject values equal to *minimum*.
    :return: A callable raising ``ValueError`` when the value is out of range.
    """
    def _validator(value: Any) -> None:
        if minimum is not None:
            if exclusive_minimum and not value > minimum:
                raise ValueError(f"{value!r} must be > {minimum!r}")
            if not exclusive_minimum and not value >= minimum:
                raise ValueError(f"{value!r} must be >= {minimum!r}")
        if maximum is not None and not value <= maximum:
            raise ValueError(f"{value!r} must be <= {maximum!r}")

    return _validator


# ------------------------------- KeySpec -----------------------------------
@dataclass(frozen=True)
class KeySpec:
    """
    Declarative rule for one settings key.

    :param types: Accepted type names out of ``str``, ``int``, ``float``,
                  ``bool`` and ``null``. ``bool`` only matches when named
                  explicitly, even though it subclasses ``int``.
    :param default: Value used when the key is absent. Without a default the
                    key is required.
    :param choices: Allowed values.
    :param minimum: Lower numeric bound.
    :param maximum: Upper numeric bound (inclusive).
    :param exclusive_minimum: Make *minimum* exclusive.
    """
    types: Tuple[str, ...]
    default: Any = REQUIRED
    choices: Optional[Tuple[Any, ...]] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_minimum: bool = False

    def __post_init__(self) -> None:
        unknown = [name for name in self.types if name not in _TYPE_NAMES]
        if unknown:
            raise ConfigError(f"Unknown type name(s) in KeySpec: {unknown!r}")

    @property
    def required(self) -> bool:
        return self.default is REQUIRED

    def accepts(self, value: Any) -> bool:
        types = tuple(_TYPE_NAMES[name] for name in self.types)
        if isinstance(value, bool) and bool not in types:
            return False
        return isinstance(value, types)

    def validators(self) -> List[Validator]:
        out: List[Validator] = []
        if self.choices is not None:
            out.append(make_choices_validator(self.choices))
        if self.minimum is not None or self.maximum is not None:
            out.append(make_range_validator(
                minimum=self.minimum, maximum=self.maximum, exclusive_minimum=self.exclusive_minimum
            ))
        return out

    def problems(self, value: Any) -> List[str]:
        """Return human-readable reasons why *value* is invalid (empty when valid)."""
        if not self.accepts(value):
            return [f"expected {' or '.join(self.types)}, got {type(value).__name__} ({value!r})"]
        found: List[str] = []
        for check in self.validators():
            try:
                check(value)
            except ValueError as exc:
                found.append(str(exc))
        return found


# ---------------------------- Defaults + validate ---------------------------
def apply_defaults(values: Mapping[str, Any], specs: Mapping[str, KeySpec]) -> Dict[str, Any]:
    """
    Return a copy of *values* with every missing optional key set to its default.

    :param values: Parsed ``key -> value`` mapping of one section.
    :param specs: ``key -> KeySpec`` rules of that section.
    """
    out = dict(values)
    for key, spec in specs.items():
        if key not in out and not spec.required:
            out[key] = spec.default
    return out


def validate_section(
        values: Mapping[str, Any],
        specs: Mapping[str, KeySpec],
        *,
        section: str,
        allow_unknown: bool = False
) -> None:
    """
    Check one section against its rules and report every problem at once.

    :param values: Parsed ``key -> value`` mapping.
    :param specs: ``key -> KeySpec`` rules.
    :param section: Section name used in messages.
    :param allow_unknown: Accept keys that have no rule.
    :raises ConfigError: Listing all missing, mistyped, out-of-range and unknown keys.
    """
    errors: List[str] = []
    for key, spec in specs.items():
        if key not in values:
            if spec.required:
                errors.append(f"[{section}] missing required key '{key}'")
            continue
        errors.extend(f"[{section}] key '{key}': {reason}" for reason in spec.problems(values[key]))

    if not allow_unknown:
        errors.extend(f"[{section}] unknown key '{key}'" for key in values if key not in specs)

    if errors:
        raise ConfigError("\n".join(errors))


__all__ = [
    "KeySpec",
    "Validator",
    "make_choices_validator",
    "make_range_validator",
    "apply_defaults",
    "validate_section",
]
