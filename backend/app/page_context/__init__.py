"""
Page Context

Resolves a navigated URL to a stack of instruction documents from a
hierarchical, file-backed instruction tree:

- Domain-matched instruction sets (multi-tenant) or a single shared tree
- Segment-by-segment _base.md inheritance with dynamic-id folders
- Exact leaf-file overrides
- Per-instance memo caches, cleared on demand for hot-reload
"""

from .models import InstructionSetConfig, ReadResult, ReadStatus, ResolutionStats
from .store import DocumentStore, FileSystemDocumentStore
from .segments import is_dynamic_segment
from .domains import ConfigLoader, match_domain
from .path_walker import PathWalker
from .cache import ResolutionCache
from .resolver import BaseContextResolver, ContextResolver, FileContextResolver
from .formatter import format_for_prompt
from .settings import (
    ResolverMode,
    ResolverSettings,
    build_resolver,
    configure_resolver,
    context_injection_enabled,
    get_resolver
)

__all__ = [
    # Resolvers
    "BaseContextResolver",
    "ContextResolver",
    "FileContextResolver",
    # Building blocks
    "DocumentStore",
    "FileSystemDocumentStore",
    "ConfigLoader",
    "PathWalker",
    "ResolutionCache",
    "match_domain",
    "is_dynamic_segment",
    "format_for_prompt",
    # Types
    "InstructionSetConfig",
    "ReadResult",
    "ReadStatus",
    "ResolutionStats",
    # Configuration
    "ResolverMode",
    "ResolverSettings",
    "build_resolver",
    "configure_resolver",
    "context_injection_enabled",
    "get_resolver"
]

__version__ = "1.0.0"
