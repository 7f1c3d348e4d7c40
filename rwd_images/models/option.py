from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .size import SizeDefinition

# Accepted spellings of template keys in raw registrations.
TEMPLATE_ALIASES = {
    "picture": "picture",
    "bg": "background",
    "background": "background",
    "srcset": "srcset",
    "sizes": "sizes",
}


class BreakpointOption(BaseModel):
    """One breakpoint of a responsive set.

    A template left as ``None`` means the aspect is not rendered for this
    breakpoint.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    size: SizeDefinition
    picture: Optional[str] = None
    background: Optional[str] = None
    srcset: Optional[str] = None
    sizes: Optional[str] = None

    @classmethod
    def from_templates(
        cls, key: str, size: SizeDefinition, templates: Mapping[str, Any] | None = None
    ) -> "BreakpointOption":
        values: dict[str, Any] = {}
        for name, value in (templates or {}).items():
            field = TEMPLATE_ALIASES.get(name)
            if field is not None:
                values[field] = value
        return cls(key=key, size=size, **values)


class ResponsiveSet(BaseModel):
    """Named, ordered group of breakpoints; order drives markup emission."""

    model_config = ConfigDict(frozen=True)

    key: str
    options: dict[str, BreakpointOption] = {}

    def __len__(self) -> int:
        return len(self.options)

    def __contains__(self, breakpoint_key: object) -> bool:
        return breakpoint_key in self.options

    @property
    def breakpoint_keys(self) -> list[str]:
        return list(self.options)

    def with_option(self, option: BreakpointOption) -> "ResponsiveSet":
        """Return a copy with ``option`` added, or replaced in place if its key exists."""

        options = dict(self.options)
        options[option.key] = option
        return ResponsiveSet(key=self.key, options=options)
