"""
Hierarchical Path Walker

Descends an instruction tree one URL segment at a time, collecting the
_base.md of every matched folder, then tries an exact <leaf>.md match.

For /projects/123/settings against a tree like

    _base.md
    projects/_base.md
    projects/_dynamic/_base.md
    projects/_dynamic/settings.md

the walk yields the root base, the projects base, the dynamic-id base and
finally settings.md, in that order.
"""

import logging
from typing import List

from .segments import candidate_folders
from .store import DocumentStore, join_path

logger = logging.getLogger(__name__)

BASE_FILENAME = "_base.md"
INDEX_FILENAME = "index.md"


class PathWalker:
    """Collects the ordered instruction documents for a path"""

    def __init__(self, store: DocumentStore, include_index: bool = False):
        self.store = store
        # Single-tenant trees also load index.md from the matched leaf folder
        self.include_index = include_index

    def walk(self, base_path: str, segments: List[str]) -> List[str]:
        instructions: List[str] = []

        def add(path: str) -> bool:
            text = self.store.load(path)
            if text:
                instructions.append(text)
                return True
            return False

        # 1. Root base for the tree
        add(join_path(base_path, BASE_FILENAME))

        # 2. Descend segment by segment
        current_path = base_path
        for i, segment in enumerate(segments):
            is_last = i == len(segments) - 1

            matched_folder = None
            for folder in candidate_folders(segment):
                if self.store.has_folder(join_path(current_path, folder)):
                    matched_folder = folder
                    break

            if matched_folder is None:
                # No folder at this level blocks all deeper levels
                if is_last:
                    add(join_path(current_path, f"{segment}.md"))
                break

            current_path = join_path(current_path, matched_folder)
            add(join_path(current_path, BASE_FILENAME))

            if is_last and self.include_index:
                add(join_path(current_path, INDEX_FILENAME))

        # 3. Exact sibling file (e.g. projects/overview.md for /projects/overview)
        if segments:
            parent_path = join_path(base_path, *segments[:-1])
            exact_file = self.store.load(join_path(parent_path, f"{segments[-1]}.md"))
            if exact_file and exact_file not in instructions:
                instructions.append(exact_file)

        logger.debug(f"Walked /{'/'.join(segments)} under '{base_path or '.'}': {len(instructions)} document(s)")
        return instructions
