"""Turn resolved variants into markup.

Templates are plain strings with ``{src}``, ``{alt}``, ``{title}`` and
``{w}`` placeholders (background templates also get ``{selector}``). Every
warning collected during resolution is emitted first as its own HTML
comment, even when nothing else is rendered.
"""
from __future__ import annotations

import html
from typing import Iterable, Literal, Mapping, Optional

from rwd_images.models import BreakpointOption, RenderAttributes, ResolvedVariant, ResponsiveSet
from rwd_images.utils.tokens import substitute

# Used for a lone breakpoint registered without a picture template.
DEFAULT_PICTURE_TEMPLATE = '<img srcset="{src}" alt="{alt}" title="{title}">'

Aspect = Literal["picture", "img", "background"]


class MarkupRenderer:
    def __init__(self, *, eol: str = "\n", picture_class: str = "attachment-{key} size-{key} rwd-picture") -> None:
        self.eol = eol
        self.picture_class = picture_class

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    def render(
        self,
        resolved: Mapping[str, ResolvedVariant],
        rwd_set: ResponsiveSet,
        attributes: RenderAttributes | None = None,
        warnings: Iterable[str] = (),
        *,
        aspect: Aspect = "picture",
        selector: str = "",
    ) -> str:
        if aspect == "picture":
            return self.picture(resolved, rwd_set, attributes, warnings)
        if aspect == "img":
            return self.img(resolved, rwd_set, attributes, warnings)
        if aspect == "background":
            return self.background(resolved, rwd_set, selector, warnings)
        raise ValueError(f"Unsupported render aspect: {aspect}")

    def picture(
        self,
        resolved: Mapping[str, ResolvedVariant],
        rwd_set: ResponsiveSet,
        attributes: RenderAttributes | None = None,
        warnings: Iterable[str] = (),
    ) -> str:
        """Render a ``<picture>`` with one line per breakpoint that has a picture template."""

        comments = self.warnings_comment(warnings)
        if not resolved:
            return comments

        class_, alt, title = self._attributes(rwd_set, attributes)
        markup = f'<picture class="{_esc(class_)}">{self.eol}'
        for option, variant in self._resolved_options(resolved, rwd_set):
            template = self._picture_template(option, rwd_set)
            if template is None:
                continue
            markup += substitute(template, self._tokens(variant, alt, title)) + self.eol
        markup += "</picture>"
        return comments + markup

    def img(
        self,
        resolved: Mapping[str, ResolvedVariant],
        rwd_set: ResponsiveSet,
        attributes: RenderAttributes | None = None,
        warnings: Iterable[str] = (),
    ) -> str:
        """Render a single ``<img>`` from the srcset and sizes fragments."""

        comments = self.warnings_comment(warnings)
        if not resolved:
            return comments

        class_, alt, title = self._attributes(rwd_set, attributes)
        srcset: list[str] = []
        sizes: list[str] = []
        src = ""
        for option, variant in self._resolved_options(resolved, rwd_set):
            tokens = self._tokens(variant, alt, title)
            src = variant.absolute_url
            if option.srcset is not None:
                srcset.append(substitute(option.srcset, tokens))
            if option.sizes is not None:
                sizes.append(substitute(option.sizes, tokens))

        markup = f'<img src="{_esc(src)}"'
        if srcset:
            markup += f' srcset="{", ".join(srcset)}"'
        if sizes:
            markup += f' sizes="{", ".join(sizes)}"'
        markup += f' alt="{_esc(alt)}" title="{_esc(title)}" class="{_esc(class_)}">'
        return comments + markup

    def background(
        self,
        resolved: Mapping[str, ResolvedVariant],
        rwd_set: ResponsiveSet,
        selector: str,
        warnings: Iterable[str] = (),
    ) -> str:
        """Render a ``<style>`` block from the background templates."""

        comments = self.warnings_comment(warnings)
        lines = []
        for option, variant in self._resolved_options(resolved, rwd_set):
            if option.background is None:
                continue
            tokens = self._tokens(variant, "", "")
            tokens["{selector}"] = selector
            lines.append(substitute(option.background, tokens))
        if not lines:
            return comments
        return comments + f"<style>{self.eol}" + self.eol.join(lines) + f"{self.eol}</style>"

    def warnings_comment(self, warnings: Iterable[str]) -> str:
        return "".join(f"<!-- {warning} -->{self.eol}" for warning in warnings)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _attributes(self, rwd_set: ResponsiveSet, attributes: RenderAttributes | None) -> tuple[str, str, str]:
        attributes = attributes or RenderAttributes()
        class_ = attributes.class_ if attributes.class_ is not None else self.picture_class.replace("{key}", rwd_set.key)
        return class_, attributes.alt or "", attributes.title or ""

    @staticmethod
    def _resolved_options(
        resolved: Mapping[str, ResolvedVariant], rwd_set: ResponsiveSet
    ) -> list[tuple[BreakpointOption, ResolvedVariant]]:
        return [(option, resolved[key]) for key, option in rwd_set.options.items() if key in resolved]

    @staticmethod
    def _picture_template(option: BreakpointOption, rwd_set: ResponsiveSet) -> Optional[str]:
        if option.picture is None:
            return DEFAULT_PICTURE_TEMPLATE if len(rwd_set) == 1 else None
        return option.picture or DEFAULT_PICTURE_TEMPLATE

    @staticmethod
    def _tokens(variant: ResolvedVariant, alt: str, title: str) -> dict[str, str]:
        return {
            "{src}": _esc(variant.absolute_url),
            "{alt}": _esc(alt),
            "{title}": _esc(title),
            "{w}": str(variant.width),
        }


def _esc(value: str) -> str:
    return html.escape(value, quote=True)
