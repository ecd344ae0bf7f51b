"""
Code generator for parsed function prototypes.

Renders each prototype into three sections of C boilerplate:

    // Prototypes     #define + typedef describing the function signature
    // Declarations   function pointer variables
    // Load           dynamic library lookup statements

The output is a pure function of the prototypes and the GeneratorConfig.
"""

import logging
import re
from dataclasses import dataclass, fields
from string import Template
from typing import Mapping, Sequence, Union

from protgen.core.parser import FunctionPrototype, parse_prototypes
from protgen.core.tokenizer import tokenize
from protgen.errors import ParseError

logger = logging.getLogger(__name__)

POINTER = "*"

PROTOTYPE_TEMPLATE = Template("#define ${prefix}${name}(name) ${signature}")
TYPEDEF_TEMPLATE = Template("typedef ${prefix}${name}(${type_name});")
DECLARATION_TEMPLATE = Template("${type_name} *${name};")
LOAD_TEMPLATE = Template(
    '${load_macro}(${load_lib_handle}, ${load_lib_name}, '
    '${load_lib_field_prefix}${name}, ${type_name}, "${name}");'
)


@dataclass
class GeneratorConfig:
    """Naming and formatting options for generated code."""

    # Prefix for the signature macro; lowercased it names the typedef
    prefix: str = ""

    # Macro that resolves a symbol from a loaded library
    load_macro: str = ""

    # Expression holding the library handle
    load_lib_handle: str = ""

    # Expression holding the library name
    load_lib_name: str = ""

    # Prefix of the field receiving the resolved function pointer
    load_lib_field_prefix: str = ""

    # Option names as used in presets
    OPTION_NAMES = {
        "prefix": "Prefix",
        "load_macro": "LoadMacro",
        "load_lib_handle": "LoadLibHandle",
        "load_lib_name": "LoadLibName",
        "load_lib_field_prefix": "LoadLibFieldPrefix",
    }

    @classmethod
    def defaults(cls) -> "GeneratorConfig":
        """Configuration for the FPL Win32 function table."""
        return cls(
            prefix="FPL__WIN32_FUNC_",
            load_macro="FPL__WIN32_GET_FUNCTION_ADDRESS_RETURN",
            load_lib_handle="libraryHandle",
            load_lib_name="libraryName",
            load_lib_field_prefix="wapi->user.",
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "GeneratorConfig":
        """
        Build a config from option names (``Prefix``, ``LoadMacro``, ...).

        Missing options become empty strings; unknown keys are ignored.
        """
        return cls(
            **{
                attr: mapping.get(option, "")
                for attr, option in cls.OPTION_NAMES.items()
            }
        )

    def to_mapping(self) -> dict[str, str]:
        return {
            option: getattr(self, attr) for attr, option in self.OPTION_NAMES.items()
        }

    def merged(self, overrides: Mapping[str, str]) -> "GeneratorConfig":
        """Return a copy with the given options replaced."""
        values = self.to_mapping()
        values.update(overrides)
        return GeneratorConfig.from_mapping(values)

    @property
    def type_prefix(self) -> str:
        return self.prefix.lower()

    def validate(self) -> list[str]:
        """
        Validate the configuration.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors = []

        if self.prefix and not re.match(r"^[a-zA-Z_][a-zA-Z0-9_]*$", self.prefix):
            errors.append(
                f"Prefix '{self.prefix}' is not a valid C identifier prefix. "
                "Must start with letter/underscore and contain only "
                "alphanumeric characters and underscores."
            )

        for f in fields(self):
            value = getattr(self, f.name)
            if "\n" in value or "\r" in value:
                errors.append(
                    f"Option '{self.OPTION_NAMES[f.name]}' must be a single line."
                )

        return errors


ConfigLike = Union[GeneratorConfig, Mapping[str, str]]


def _as_config(config: ConfigLike) -> GeneratorConfig:
    if isinstance(config, GeneratorConfig):
        return config
    return GeneratorConfig.from_mapping(config)


def join_names(names: Sequence[str]) -> str:
    """
    Join type and argument tokens into C source text.

    Tokens are separated by single spaces, except around pointer stars:
    ``["const", "char", "*", "s"]`` becomes ``"const char*s"``.
    """
    parts = []
    for index, name in enumerate(names):
        if index > 0 and name != POINTER and names[index - 1] != POINTER:
            parts.append(" ")
        parts.append(name)
    return "".join(parts)


def format_signature(prototype: FunctionPrototype) -> str:
    """Return the ``<returns> name(<args>)`` part of the signature macro."""
    returns = join_names(prototype.returns)
    if returns and not returns.endswith(POINTER):
        returns += " "
    args = ", ".join(join_names(arg) for arg in prototype.args)
    return f"{returns}name({args})"


def render(prototypes: Sequence[FunctionPrototype], config: ConfigLike) -> str:
    """
    Render prototypes into the Prototypes, Declarations and Load sections.

    Args:
        prototypes: Parsed prototypes, rendered in order.
        config: GeneratorConfig or mapping of option names.

    Returns:
        Generated text, or an empty string when there are no prototypes.
    """
    if not prototypes:
        return ""

    cfg = _as_config(config)
    options = {
        "prefix": cfg.prefix,
        "load_macro": cfg.load_macro,
        "load_lib_handle": cfg.load_lib_handle,
        "load_lib_name": cfg.load_lib_name,
        "load_lib_field_prefix": cfg.load_lib_field_prefix,
    }

    lines = ["// Prototypes"]
    for proto in prototypes:
        values = dict(options, name=proto.name, type_name=cfg.type_prefix + proto.name)
        lines.append(
            PROTOTYPE_TEMPLATE.substitute(values, signature=format_signature(proto))
        )
        lines.append(TYPEDEF_TEMPLATE.substitute(values))

    lines.append("")
    lines.append("// Declarations")
    for proto in prototypes:
        lines.append(
            DECLARATION_TEMPLATE.substitute(
                name=proto.name, type_name=cfg.type_prefix + proto.name
            )
        )

    lines.append("")
    lines.append("// Load")
    for proto in prototypes:
        values = dict(options, name=proto.name, type_name=cfg.type_prefix + proto.name)
        lines.append(LOAD_TEMPLATE.substitute(values))

    return "\n".join(lines) + "\n"


def format_error(message: str) -> str:
    """Return the single error line shown in place of generated code."""
    return f"Error: {message}\n"


def generate(source: str, config: ConfigLike) -> str:
    """
    Generate boilerplate for all prototypes in ``source``.

    Parse failures do not propagate: the result is then a single
    ``Error: <message>`` line.
    """
    if not source or source.isspace():
        return ""

    try:
        prototypes = parse_prototypes(tokenize(source))
    except ParseError as e:
        logger.debug("Prototype parsing failed: %s", e)
        return format_error(str(e))

    return render(prototypes, config)
