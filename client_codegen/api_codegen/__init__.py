"""Client module emission on top of the type resolver."""

from .main import GenerationRun, GeneratorContext, build_operations, generate
from .options import ClientOptions, Formatting, apply_format_options

__all__ = [
    "ClientOptions",
    "Formatting",
    "GenerationRun",
    "GeneratorContext",
    "apply_format_options",
    "build_operations",
    "generate",
]
