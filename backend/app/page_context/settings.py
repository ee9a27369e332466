"""
Page context configuration.

Values come from the environment, optionally seeded from backend/.env:

    BROWSER_CONTEXT_INJECTION      set to "false" (or 0/no/off) to disable
    PAGE_CONTEXT_ROOT              plugin root holding instructions/
    PAGE_CONTEXT_INSTRUCTIONS_DIR  explicit instructions directory
    PAGE_CONTEXT_MODE              "multi" (default) or "single"
"""

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .resolver import (
    BaseContextResolver, ContextResolver, FileContextResolver, INSTRUCTIONS_DIRNAME
)

BACKEND_DIR = Path(__file__).resolve().parent.parent.parent
ENV_PATH = BACKEND_DIR / '.env'

FALSE_VALUES = {'false', '0', 'no', 'off'}


class ResolverMode(str, Enum):
    MULTI = "multi"
    SINGLE = "single"


def is_false_like(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in FALSE_VALUES


def context_injection_enabled() -> bool:
    """Injection is on unless BROWSER_CONTEXT_INJECTION is false-like"""
    return not is_false_like(os.getenv("BROWSER_CONTEXT_INJECTION"))


class ResolverSettings(BaseModel):
    """Settings used to build a resolver"""
    instructions_dir: Path
    mode: ResolverMode = ResolverMode.MULTI
    injection_enabled: bool = True

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> 'ResolverSettings':
        if load_env_file:
            load_dotenv(ENV_PATH)

        instructions_dir = os.getenv("PAGE_CONTEXT_INSTRUCTIONS_DIR")
        if not instructions_dir:
            root = os.getenv("PAGE_CONTEXT_ROOT") or str(BACKEND_DIR)
            instructions_dir = str(Path(root) / INSTRUCTIONS_DIRNAME)

        mode = os.getenv("PAGE_CONTEXT_MODE", ResolverMode.MULTI.value).strip().lower()
        try:
            resolver_mode = ResolverMode(mode)
        except ValueError:
            raise ValueError(f"PAGE_CONTEXT_MODE must be 'multi' or 'single', got '{mode}'")

        return cls(
            instructions_dir=Path(instructions_dir),
            mode=resolver_mode,
            injection_enabled=context_injection_enabled(),
        )


def build_resolver(settings: ResolverSettings) -> BaseContextResolver:
    if settings.mode == ResolverMode.SINGLE:
        return FileContextResolver(instructions_dir=settings.instructions_dir)
    return ContextResolver(instructions_dir=settings.instructions_dir)


# Convenience accessors for the API and CLI
_resolver: Optional[BaseContextResolver] = None


def get_resolver() -> BaseContextResolver:
    """Get or create the global resolver instance"""
    global _resolver
    if _resolver is None:
        _resolver = build_resolver(ResolverSettings.from_env())
    return _resolver


def configure_resolver(settings: Optional[ResolverSettings] = None) -> BaseContextResolver:
    """Replace the global resolver, e.g. after changing settings"""
    global _resolver
    _resolver = build_resolver(settings or ResolverSettings.from_env())
    return _resolver
