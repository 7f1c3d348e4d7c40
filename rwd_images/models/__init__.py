from .media import GeneratedVariant, ImageHandle, ImageMetadata
from .option import BreakpointOption, ResponsiveSet
from .resolution import RenderAttributes, Resolution, ResolvedVariant
from .size import Crop, SizeDefinition, SizeValidationError, parse_size

__all__ = [
    "Crop",
    "SizeDefinition",
    "SizeValidationError",
    "parse_size",
    "BreakpointOption",
    "ResponsiveSet",
    "GeneratedVariant",
    "ImageMetadata",
    "ImageHandle",
    "ResolvedVariant",
    "Resolution",
    "RenderAttributes",
]
