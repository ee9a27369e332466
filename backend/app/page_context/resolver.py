"""
Context Resolver

Resolves a navigated URL to the stack of instruction documents that apply
to it, so the caller can hand page-specific operating knowledge to the
model before issuing further browser commands.

Two flavours share the same walk:
- ContextResolver: multi-tenant. The hostname picks an instruction set
  (a top-level folder with a _config.json), the path is walked inside it.
- FileContextResolver: single-tenant. One tree serves every URL and
  matched leaf folders may also carry an index.md.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
from urllib.parse import urlsplit

from .cache import ResolutionCache
from .domains import ConfigLoader
from .formatter import format_for_prompt
from .path_walker import PathWalker
from .store import DocumentStore, FileSystemDocumentStore

logger = logging.getLogger(__name__)

INSTRUCTIONS_DIRNAME = "instructions"
DOCUMENT_SEPARATOR = "\n\n---\n\n"
SINGLE_DOT_SEGMENTS = {'.', '%2e'}
DOUBLE_DOT_SEGMENTS = {'..', '.%2e', '%2e.', '%2e%2e'}


def split_path(pathname: str) -> List[str]:
    """
    Strip one trailing slash and split into non-empty segments.

    "." and ".." segments (including their %2e spellings) are removed the
    way a URL parser does, so a path can never climb above its root.
    """
    if pathname.endswith('/'):
        pathname = pathname[:-1]
    normalized = pathname or '/'

    segments: List[str] = []
    for segment in normalized.split('/'):
        lowered = segment.lower()
        if not segment or lowered in SINGLE_DOT_SEGMENTS:
            continue
        if lowered in DOUBLE_DOT_SEGMENTS:
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    return segments


def parse_url(url: str) -> Optional[Tuple[str, str]]:
    """Return (hostname, pathname) for an absolute URL, else None"""
    try:
        parsed = urlsplit(url)
        hostname = parsed.hostname
    except ValueError:
        return None
    if not parsed.scheme or not hostname:
        return None
    return hostname, parsed.path or '/'


def parse_pathname(url: str) -> Optional[str]:
    """Return the pathname of any URL with a scheme (file:///docs -> /docs), else None"""
    try:
        parsed = urlsplit(url)
    except ValueError:
        return None
    if not parsed.scheme:
        return None
    return parsed.path or '/'


class BaseContextResolver(ABC):
    """
    Common resolve/cache/format behaviour.

    Each instance owns its own resolution cache, so resolvers built for
    different stores (or different tests) never share state.
    """

    include_index = False

    def __init__(
        self,
        plugin_root: Optional[Union[str, Path]] = None,
        instructions_dir: Optional[Union[str, Path]] = None,
        store: Optional[DocumentStore] = None,
    ):
        if store is None:
            if instructions_dir is None:
                if plugin_root is None:
                    raise ValueError("plugin_root, instructions_dir or store is required")
                instructions_dir = Path(plugin_root) / INSTRUCTIONS_DIRNAME
            store = FileSystemDocumentStore(instructions_dir)

        self.store = store
        self.cache = ResolutionCache()
        self.walker = PathWalker(store, include_index=self.include_index)

    def resolve(self, url: str) -> Optional[str]:
        """
        Resolve instructions for a given URL.

        Returns the matching documents joined by a separator, or None when
        nothing applies. Never raises; any failure degrades to None.
        """
        hit, cached = self.cache.lookup(url)
        if hit:
            logger.debug(f"Context cache hit for {url}")
            return cached

        try:
            instructions = self._collect(url)
        except Exception as e:
            logger.error(f"Context resolution failed for {url}: {e}")
            return None

        result = DOCUMENT_SEPARATOR.join(instructions) if instructions else None
        self.cache.put(url, result)
        return result

    @abstractmethod
    def _collect(self, url: str) -> List[str]:
        """Ordered instruction documents for url"""

    def clear_resolution_cache(self):
        self.cache.clear()

    def clear_config_cache(self):
        """Forget any parsed instruction set configs"""

    def clear_cache(self):
        """Clear all caches (useful for development/hot-reload)"""
        self.clear_resolution_cache()
        self.clear_config_cache()

    def format_for_prompt(self, instructions: str, current_url: str) -> str:
        return format_for_prompt(instructions, current_url)

    def list_instruction_sets(self) -> Dict[str, List[str]]:
        """Instruction set name -> domain patterns (empty for single-tenant)"""
        return {}

    def get_stats(self) -> Dict:
        stats = self.cache.get_stats()
        stats.read_errors = self.store.read_errors
        return stats.to_dict()


class ContextResolver(BaseContextResolver):
    """Multi-tenant resolver: the hostname selects the instruction set"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.configs = ConfigLoader(self.store)

    def _collect(self, url: str) -> List[str]:
        parsed = parse_url(url)
        if parsed is None:
            # Not an absolute URL, so no domain matching is possible
            logger.debug(f"No context for {url}: not an absolute URL")
            return []

        hostname, pathname = parsed
        instruction_set = self.configs.find_instruction_set(hostname)
        if instruction_set is None:
            logger.debug(f"No instruction set matches {hostname}")
            return []

        return self.walker.walk(instruction_set, split_path(pathname))

    def clear_config_cache(self):
        self.configs.clear()

    def list_instruction_sets(self) -> Dict[str, List[str]]:
        return {name: list(config.domains) for name, config in self.configs.load_configs().items()}


class FileContextResolver(BaseContextResolver):
    """Single-tenant resolver: one instruction tree for every URL"""

    include_index = True

    def _collect(self, url: str) -> List[str]:
        pathname = parse_pathname(url)
        if pathname is None:
            # Treat anything without a scheme as a literal path
            pathname = url if url.startswith('/') else f"/{url}"

        return self.walker.walk("", split_path(pathname))
