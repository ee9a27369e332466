"""
Domain Matching

Maps a request hostname to the instruction set whose _config.json declares
it. Each top-level folder of the store may carry a config such as:

    {"domains": ["app.example.com", "*.example.org"]}

Folders without a valid config never match anything.
"""

import json
import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from .models import InstructionSetConfig
from .store import DocumentStore, join_path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "_config.json"


def match_domain(hostname: str, pattern: str) -> bool:
    """
    Check if hostname matches a domain pattern.

    Supports exact match and wildcard prefix. A wildcard pattern
    "*.example.com" matches "a.example.com", "a.b.example.com" and the bare
    parent "example.com".
    """
    if hostname == pattern:
        return True

    if pattern.startswith('*.'):
        suffix = pattern[1:]  # .example.com
        return hostname.endswith(suffix) or hostname == pattern[2:]

    return False


def matches_any(hostname: str, patterns: List[str]) -> bool:
    return any(match_domain(hostname, pattern) for pattern in patterns)


class ConfigLoader:
    """Discovers and memoizes instruction set configs"""

    def __init__(self, store: DocumentStore):
        self.store = store
        self._configs: Optional[Dict[str, InstructionSetConfig]] = None

    def load_configs(self) -> Dict[str, InstructionSetConfig]:
        """Load all instruction set configs, once"""
        if self._configs is not None:
            return self._configs

        configs: Dict[str, InstructionSetConfig] = {}
        for folder in self.store.list_folders():
            config = self._load_config(folder)
            if config is not None:
                configs[folder] = config

        logger.debug(f"Loaded {len(configs)} instruction set config(s)")
        self._configs = configs
        return configs

    def _load_config(self, folder: str) -> Optional[InstructionSetConfig]:
        raw = self.store.load(join_path(folder, CONFIG_FILENAME))
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping instruction set '{folder}': invalid {CONFIG_FILENAME} ({e})")
            return None

        if not isinstance(data, dict) or not data.get('domains'):
            logger.debug(f"Skipping instruction set '{folder}': no domains declared")
            return None

        try:
            return InstructionSetConfig.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Skipping instruction set '{folder}': {e.error_count()} config error(s)")
            return None

    def find_instruction_set(self, hostname: str) -> Optional[str]:
        """Find the instruction set folder that matches the hostname"""
        matched = None
        for folder, config in self.load_configs().items():
            if not matches_any(hostname, config.domains):
                continue
            if matched is None:
                matched = folder
            else:
                logger.debug(
                    f"Host {hostname} also matches instruction set '{folder}'; "
                    f"using '{matched}' (first enumerated)"
                )
        return matched

    def clear(self):
        """Forget loaded configs so the next lookup re-reads them"""
        self._configs = None
