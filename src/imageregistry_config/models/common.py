"""
Common models shared across the registry configuration.

This module defines the immutable base model, secret key references, the
Go-style duration codec used by every duration field on the wire, and the
status condition shape.
"""

import re
from datetime import timedelta
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer

# Microseconds per Go duration unit
_UNIT_MICROSECONDS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

# Go durations are int64 nanoseconds
_MAX_DURATION_MICROSECONDS = Decimal((1 << 63) - 1) / 1_000
_MIN_DURATION_MICROSECONDS = -Decimal(1 << 63) / 1_000


def parse_go_duration(value: Any) -> timedelta:
    """
    Parse a Go duration string such as "30s", "1m30s" or "-1.5h".

    Args:
        value: Duration string, or an existing timedelta

    Returns:
        Parsed duration

    Raises:
        ValueError: If the value is not a valid duration string, is out of
            Go's int64 nanosecond range, or is not a whole number of
            microseconds
    """
    if isinstance(value, timedelta):
        return value
    if not isinstance(value, str):
        raise ValueError("duration must be a string such as '30s' or '1m30s'")

    text = value.strip()
    if not text:
        raise ValueError("duration cannot be empty")

    sign = 1
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return timedelta(0)

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        total += Decimal(number) * _UNIT_MICROSECONDS[unit]
        pos = match.end()

    if pos == 0:
        raise ValueError(f"invalid duration {value!r}")

    total *= sign
    if not _MIN_DURATION_MICROSECONDS <= total <= _MAX_DURATION_MICROSECONDS:
        raise ValueError(f"duration {value!r} is out of range")
    # timedelta stops at microseconds
    if total != total.to_integral_value():
        raise ValueError(
            f"duration {value!r} is finer than microsecond precision"
        )

    return timedelta(microseconds=int(total))


def format_go_duration(value: timedelta) -> str:
    """Format a duration the way Go's time.Duration.String does."""
    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000_000:
        if micros < 1_000:
            return f"{sign}{micros}µs"
        millis, rem = divmod(micros, 1_000)
        fraction = f".{rem:03d}".rstrip("0") if rem else ""
        return f"{sign}{millis}{fraction}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds, frac = divmod(rest, 1_000_000)
    text = f"{seconds}{f'.{frac:06d}'.rstrip('0') if frac else ''}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{text}"
    if minutes:
        return f"{sign}{minutes}m{text}"
    return f"{sign}{text}"


Duration = Annotated[
    timedelta,
    BeforeValidator(parse_go_duration),
    PlainSerializer(format_go_duration, return_type=str),
]
"""
Duration carried as a Go duration string on the wire.

Decoded to a timedelta; encoded back in Go canonical form ("1m0s").
"""


class RegistryModel(BaseModel):
    """Immutable base for every configuration value; unknown fields are ignored."""

    model_config = {"populate_by_name": True, "frozen": True, "extra": "ignore"}


class SecretKeySelector(RegistryModel):
    """Reference to a key within a secret in the registry's namespace."""

    name: str = Field("", description="Name of the secret")
    key: str = Field("", description="Key within the secret")
    optional: bool | None = Field(
        None, description="Whether the secret or its key must be defined"
    )


class RegistryCondition(RegistryModel):
    """Status condition for the registry."""

    type: str = Field(..., description="Condition type")
    status: str = Field(..., description="Condition status (True/False/Unknown)")
    reason: str | None = Field(None, description="Reason for the condition")
    message: str | None = Field(None, description="Human-readable message")
    last_transition_time: str | None = Field(
        None,
        alias="lastTransitionTime",
        description="Last time the condition transitioned",
    )
