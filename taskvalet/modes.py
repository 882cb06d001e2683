"""
Mode registry - the modes a task can run in or delegate a sub-task to

Built-in modes are always available; custom modes come from configuration
and override built-ins with the same slug.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .config.loader import ModeConfig


@dataclass(frozen=True)
class Mode:
    slug: str
    name: str
    role_definition: str = ""
    groups: List[str] = field(default_factory=list)


BUILTIN_MODES: List[Mode] = [
    Mode(
        slug="code",
        name="Code",
        role_definition="Write, modify, and refactor code",
        groups=["read", "edit", "command"],
    ),
    Mode(
        slug="architect",
        name="Architect",
        role_definition="Plan and design before implementation",
        groups=["read", "edit"],
    ),
    Mode(
        slug="ask",
        name="Ask",
        role_definition="Answer questions about the codebase",
        groups=["read"],
    ),
    Mode(
        slug="debug",
        name="Debug",
        role_definition="Diagnose and fix problems",
        groups=["read", "edit", "command"],
    ),
    Mode(
        slug="orchestrator",
        name="Orchestrator",
        role_definition="Coordinate work across specialized modes",
        groups=[],
    ),
]


def _from_config(config: ModeConfig) -> Mode:
    return Mode(
        slug=config.slug,
        name=config.name,
        role_definition=config.role_definition,
        groups=list(config.groups),
    )


def get_all_modes(custom_modes: Optional[Iterable[ModeConfig]] = None) -> List[Mode]:
    """Built-in modes merged with custom modes (custom wins on slug clash)"""
    modes = {mode.slug: mode for mode in BUILTIN_MODES}
    for config in custom_modes or []:
        modes[config.slug] = _from_config(config)
    return list(modes.values())


def get_mode_by_slug(slug: str, custom_modes: Optional[Iterable[ModeConfig]] = None) -> Optional[Mode]:
    """Look up a mode by slug, or None when it is not registered"""
    for config in custom_modes or []:
        if config.slug == slug:
            return _from_config(config)
    for mode in BUILTIN_MODES:
        if mode.slug == slug:
            return mode
    return None
