"""Kiwi - asynchronous template engine core"""

from kiwi._version import __version__
from kiwi.compiler import compile_token_array, compile_tokens
from kiwi.config import (
    DEFAULT_FILE_EXTENSION,
    EngineConfig,
    TemplateOptions,
    load_engine_yaml,
)
from kiwi.exceptions import (
    ConfigError,
    KiwiError,
    ProcessorError,
    RelativePathError,
    RenderError,
    TemplateNotFoundError,
    TokenCompileError,
)
from kiwi.loader import load_template
from kiwi.pipeline import apply, apply_all, apply_each
from kiwi.resolver import Resolver, lookup_template
from kiwi.template import Compiler, Template
from kiwi.utils import escape_compiled_string

__all__ = [
    "__version__",
    # core
    "apply",
    "apply_all",
    "apply_each",
    "compile_token_array",
    "compile_tokens",
    "escape_compiled_string",
    "load_template",
    "lookup_template",
    "Resolver",
    # templates
    "Compiler",
    "Template",
    # config
    "DEFAULT_FILE_EXTENSION",
    "EngineConfig",
    "TemplateOptions",
    "load_engine_yaml",
    # errors
    "ConfigError",
    "KiwiError",
    "ProcessorError",
    "RelativePathError",
    "RenderError",
    "TemplateNotFoundError",
    "TokenCompileError",
]
