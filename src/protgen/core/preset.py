"""
Preset files for protgen.

A preset bundles generator options with example prototype source:

    [Settings]
    Prefix=FPL__WIN32_FUNC_
    LoadMacro=FPL__WIN32_GET_FUNCTION_ADDRESS_RETURN

    [Sources]
    int add(int a, int b)

Section names are case-insensitive. Lines in unknown sections are ignored.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from protgen.core.generator import GeneratorConfig
from protgen.errors import PresetError

logger = logging.getLogger(__name__)

SETTINGS_SECTION = "Settings"
SOURCES_SECTION = "Sources"


def _split_lines(text: str) -> list[str]:
    """Split on \\n, \\r\\n and \\r only; other separators stay in the line."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


@dataclass
class Preset:
    """Generator options plus the prototype source lines they apply to."""

    properties: dict[str, str] = field(default_factory=dict)
    sources: list[str] = field(default_factory=list)

    def get_property(self, name: str, default: str = "") -> str:
        return self.properties.get(name, default)

    def set_property(self, name: str, value: str) -> None:
        self.properties[name] = value

    def add_source(self, source: str) -> None:
        self.sources.append(source)

    @property
    def source_text(self) -> str:
        return "\n".join(self.sources)

    @property
    def config(self) -> GeneratorConfig:
        return GeneratorConfig.from_mapping(self.properties)

    @classmethod
    def from_config(
        cls, config: GeneratorConfig, source: Optional[str] = None
    ) -> "Preset":
        """Create a preset from a config and optional multi-line source."""
        preset = cls(properties=config.to_mapping())
        if source:
            for line in _split_lines(source):
                if line:
                    preset.add_source(line)
        return preset

    @classmethod
    def loads(cls, text: str) -> "Preset":
        """Parse preset file content."""
        preset = cls()
        section: Optional[str] = None

        for line in _split_lines(text):
            if len(line) > 2 and line.startswith("[") and line.endswith("]"):
                name = line[1:-1].lower()
                if name == SETTINGS_SECTION.lower():
                    section = SETTINGS_SECTION
                elif name == SOURCES_SECTION.lower():
                    section = SOURCES_SECTION
                else:
                    section = None
                continue

            if not line:
                continue

            if section == SETTINGS_SECTION:
                key, sep, value = line.partition("=")
                if sep:
                    preset.set_property(key, value)
            elif section == SOURCES_SECTION:
                preset.add_source(line)

        return preset

    def dumps(self) -> str:
        """Serialize to preset file content."""
        lines = [f"[{SETTINGS_SECTION}]"]
        lines.extend(f"{key}={value}" for key, value in self.properties.items())
        lines.append("")
        lines.append(f"[{SOURCES_SECTION}]")
        lines.extend(self.sources)
        return "\n".join(lines) + "\n"

    @classmethod
    def load(cls, path: str | Path) -> "Preset":
        """
        Load a preset file.

        Raises:
            PresetError: If the file cannot be read.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise PresetError(f"Cannot read preset {path}: {e}") from e

        preset = cls.loads(text)
        logger.debug(
            "Loaded preset %s (%d settings, %d source lines)",
            path,
            len(preset.properties),
            len(preset.sources),
        )
        return preset

    def save(self, path: str | Path) -> Path:
        """
        Write the preset to ``path``.

        Raises:
            PresetError: If the file cannot be written.
        """
        path = Path(path)
        try:
            path.write_text(self.dumps(), encoding="utf-8")
        except OSError as e:
            raise PresetError(f"Cannot write preset {path}: {e}") from e

        logger.debug("Saved preset %s", path)
        return path

    def to_dict(self) -> dict[str, Any]:
        return {
            "settings": dict(self.properties),
            "sources": list(self.sources),
        }
