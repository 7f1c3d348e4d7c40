"""Image size definitions.

A size is a ``(width, height, crop)`` triple registered under a unique key.
Raw parameters come either as an ordered list ``[width, height, crop?]`` or
as a ``"<width>x<height>"`` string token::

    parse_size("hero", "1600x900")
    parse_size("hero", [1600, 900, ("center", "top")])

Width and height are coerced permissively: anything negative or not a
number becomes ``0``.
"""
from __future__ import annotations

import math
import re
from typing import Any, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

HorizontalPosition = Literal["left", "center", "right"]
VerticalPosition = Literal["top", "center", "bottom"]

# False: scale only, True: hard crop from the center, tuple: hard crop anchored at a position.
Crop = Union[bool, Tuple[HorizontalPosition, VerticalPosition]]

SIZE_SEPARATOR = "x"

_HORIZONTAL = ("left", "center", "right")
_VERTICAL = ("top", "center", "bottom")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class SizeValidationError(ValueError):
    """Raised when raw size parameters cannot be turned into a SizeDefinition."""

    def __init__(self, key: str, params: Any) -> None:
        super().__init__(f"Wrong size parameters passed for key '{key}': {params!r}")
        self.key = key
        self.params = params


class SizeDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    crop: Crop = False

    @staticmethod
    def magnification_key(key: str, descriptor: str) -> str:
        """Return the key of the ``descriptor`` (``2x``, ``3x``...) variant of ``key``."""

        return f"{key} @{descriptor}"

    def derive_magnification(self, descriptor: str, factor: float) -> "SizeDefinition":
        """Return a copy scaled by ``factor`` for high-density displays.

        The crop is shared with the base definition.
        """

        key = self.magnification_key(self.key, descriptor)
        if not isinstance(factor, (int, float)) or not factor > 0:
            raise SizeValidationError(key, factor)
        width, height = self.width * factor, self.height * factor
        if not (math.isfinite(width) and math.isfinite(height)):
            raise SizeValidationError(key, factor)
        return SizeDefinition(
            key=key,
            width=int(width),
            height=int(height),
            crop=self.crop,
        )

    @property
    def token(self) -> str:
        return f"{self.width}{SIZE_SEPARATOR}{self.height}"


def parse_size(key: str, params: Any) -> SizeDefinition:
    """Build a SizeDefinition from list or ``"WxH"`` parameters.

    Raises
    ------
    SizeValidationError
        The list has fewer than two entries, the string has no ``x``
        separator, or the parameters are of any other type.
    """

    if isinstance(params, str):
        if SIZE_SEPARATOR not in params:
            raise SizeValidationError(key, params)
        values: list[Any] = params.split(SIZE_SEPARATOR)
    elif isinstance(params, (list, tuple)):
        if len(params) < 2:
            raise SizeValidationError(key, params)
        values = list(params)
    else:
        raise SizeValidationError(key, params)

    crop = values[2] if len(values) > 2 else False
    return SizeDefinition(
        key=key,
        width=_coerce_dimension(values[0]),
        height=_coerce_dimension(values[1]),
        crop=_coerce_crop(crop),
    )


def _coerce_dimension(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return max(0, int(value))
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return max(0, int(match.group(1))) if match else 0
    return 0


def _coerce_crop(value: Any) -> Crop:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        horizontal, vertical = (str(v).lower() for v in value)
        if horizontal in _HORIZONTAL and vertical in _VERTICAL:
            return (horizontal, vertical)  # type: ignore[return-value]
        return True
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no")
    return bool(value)
