"""Wait options: validation and TOML loading."""

from __future__ import annotations

import logging as py_logging
import sys
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, ValidationError
from typing_extensions import TypedDict

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from waitloop.errors import ConfigurationError
from waitloop.strategies import DEFAULT_ATTEMPTS, DEFAULT_DELAY

DEFAULT_TIMEOUT = 15.0
CONFIG_SECTION = "wait"

logger = py_logging.getLogger(__name__)

# Finite, non-bool numbers of seconds.
PositiveSeconds = Union[
    Annotated[StrictInt, Field(gt=0)],
    Annotated[StrictFloat, Field(gt=0, allow_inf_nan=False)],
]
NonNegativeSeconds = Union[
    Annotated[StrictInt, Field(ge=0)],
    Annotated[StrictFloat, Field(ge=0, allow_inf_nan=False)],
]


class WaitSection(TypedDict, total=False):
    attempts: int
    timeout: float
    delay: float
    exponential: bool
    timeout_mode: str
    debug: bool


class WaitOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    attempts: StrictInt = Field(default=DEFAULT_ATTEMPTS, gt=0)
    timeout: Union[PositiveSeconds, None] = DEFAULT_TIMEOUT
    delay: NonNegativeSeconds = DEFAULT_DELAY
    exponential: StrictBool = False
    timeout_mode: Literal["auto", "signal", "thread"] = "auto"
    debug: StrictBool = False


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "options"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


def build_options(**values: object) -> WaitOptions:
    try:
        return WaitOptions(**values)  # type: ignore[arg-type]
    except ValidationError as exc:
        raise ConfigurationError(
            f"invalid wait options: {_describe(exc)}",
            hint=(
                "attempts must be a positive whole number, timeout a positive number of seconds "
                "and delay a non-negative number of seconds."
            ),
        ) from exc


def get_config_path(path: str | Path) -> Path:
    return Path(path).expanduser()


def load_options(path: str | Path | None = None, **overrides: object) -> WaitOptions:
    """Read the ``[wait]`` table of a TOML file and apply explicit overrides.

    A missing file yields the defaults; unreadable or malformed files are a
    configuration error. Overrides whose value is ``None`` are ignored.
    """
    section: WaitSection = {}
    if path is not None:
        resolved = get_config_path(path)
        if resolved.exists():
            try:
                with resolved.open("rb") as handle:
                    raw = tomllib.load(handle)
            except (tomllib.TOMLDecodeError, OSError) as exc:
                raise ConfigurationError(
                    f"Unable to read config file: {resolved}",
                    hint=str(exc),
                ) from exc
            table = raw.get(CONFIG_SECTION, {})
            if not isinstance(table, dict):
                raise ConfigurationError(
                    f"[{CONFIG_SECTION}] in {resolved} must be a table",
                )
            section = WaitSection(**table)  # type: ignore[typeddict-item]
            logger.debug("Loaded wait options from %s: %s", resolved, dict(section))
        else:
            logger.debug("Config file %s not found; using defaults", resolved)

    values: dict[str, object] = dict(section)
    values.update({key: value for key, value in overrides.items() if value is not None})
    return build_options(**values)
