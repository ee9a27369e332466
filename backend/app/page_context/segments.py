"""
Dynamic segment classification.

A path segment is dynamic when it looks like a data identifier (numeric id,
UUID, hash, database object id) rather than a stable route name.
"""

import re
from typing import List

# Folder names that stand in for any dynamic segment, in lookup order
DYNAMIC_FOLDERS = ['_dynamic', '*']

DYNAMIC_SEGMENT_PATTERNS = [
    re.compile(r'[0-9]+'),                       # numeric ids
    re.compile(r'[a-f0-9-]{36}', re.IGNORECASE),  # UUIDs
    re.compile(r'[a-f0-9]{8,}', re.IGNORECASE),  # short hashes
    re.compile(r'[a-f0-9]{24}', re.IGNORECASE),  # MongoDB ObjectIds
]


def is_dynamic_segment(segment: str) -> bool:
    """Check if a URL path segment looks like a dynamic ID"""
    return any(pattern.fullmatch(segment) for pattern in DYNAMIC_SEGMENT_PATTERNS)


def candidate_folders(segment: str) -> List[str]:
    """Folder names to try, in order, for a path segment"""
    if is_dynamic_segment(segment):
        return list(DYNAMIC_FOLDERS)
    return [segment]
