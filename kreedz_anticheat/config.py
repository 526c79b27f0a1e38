"""YAML grammar profile loading and validation."""

import importlib.resources
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .grammars import DEFAULT_MARKER
from .models import PluginType


@dataclass
class ExtractionConfig:
    """How the scroll-pattern segment is located in raw stats text."""

    marker: str = DEFAULT_MARKER


@dataclass
class GrammarConfig:
    """A grammar reference from the profile."""

    plugin: PluginType
    parser: str  # dotted Python path


@dataclass
class DecoderProfile:
    """Complete decoder profile loaded from YAML."""

    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    grammars: list[GrammarConfig] = field(default_factory=list)


def load_profile(path: str | Path) -> DecoderProfile:
    """Load a decoder profile from a YAML file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _build_profile(data or {})


def load_default_profile() -> DecoderProfile:
    """Load the bundled default decoder profile."""
    pkg = importlib.resources.files("kreedz_anticheat") / "profiles" / "default.yaml"
    text = pkg.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return _build_profile(data or {})


def _build_profile(data: dict) -> DecoderProfile:
    """Build a DecoderProfile from parsed YAML data."""
    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a mapping, got {type(data).__name__}")

    extraction_data = data.get("extraction") or {}
    if not isinstance(extraction_data, dict):
        raise ValueError(f"'extraction' must be a mapping, got {type(extraction_data).__name__}")

    extraction = ExtractionConfig(
        marker=str(extraction_data.get("marker", DEFAULT_MARKER)),
    )

    grammars_data = data.get("grammars") or []
    if not isinstance(grammars_data, list):
        raise ValueError(f"'grammars' must be a list, got {type(grammars_data).__name__}")

    grammars = []
    for g in grammars_data:
        grammars.append(_parse_grammar(g))

    profile = DecoderProfile(extraction=extraction, grammars=grammars)
    _validate_profile(profile)
    return profile


def _parse_grammar(data: dict) -> GrammarConfig:
    """Parse a single grammar entry from YAML data."""
    if not isinstance(data, dict):
        raise ValueError(f"Grammar entry must be a mapping, got {data!r}")

    required = {"plugin", "parser"}
    missing = required - set(data.keys())
    if missing:
        raise ValueError(f"Grammar missing required fields: {missing}")

    name = str(data["plugin"]).strip().upper()
    if name not in PluginType.__members__:
        raise ValueError(
            f"Grammar has unknown plugin {data['plugin']!r}. "
            f"Must be one of: {sorted(PluginType.__members__)}"
        )

    return GrammarConfig(
        plugin=PluginType[name],
        parser=str(data["parser"]),
    )


def _validate_profile(profile: DecoderProfile) -> None:
    """Validate a decoder profile for correctness."""
    if not profile.extraction.marker:
        raise ValueError("Extraction marker must not be empty")

    seen_plugins = set()
    for g in profile.grammars:
        if g.plugin is PluginType.UNKNOWN:
            raise ValueError("A grammar cannot be registered for the UNKNOWN plugin")
        if g.plugin in seen_plugins:
            raise ValueError(f"Duplicate grammar for plugin: {g.plugin.value!r}")
        seen_plugins.add(g.plugin)
        if not g.parser:
            raise ValueError(f"Grammar for {g.plugin.value!r} has an empty parser path")
