"""
Instruction Store

Read-only lookup of instruction documents by store-relative path.

The walker and config loader only ever talk to a DocumentStore, so the
backing storage can be swapped (filesystem, archive, remote bucket) without
touching the matching logic.
"""

import logging
import os
import posixpath
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from .models import ReadResult, ReadStatus

logger = logging.getLogger(__name__)


def join_path(*parts: str) -> str:
    """Join store-relative path parts, ignoring empty ones"""
    parts = [p for p in parts if p]
    if not parts:
        return ""
    return posixpath.join(*parts)


class DocumentStore(ABC):
    """Read-only capability: path -> text | absent"""

    def __init__(self):
        self.read_errors = 0

    @abstractmethod
    def _read_raw(self, path: str) -> ReadResult:
        """Return the untrimmed document at path"""

    @abstractmethod
    def has_folder(self, path: str) -> bool:
        """Whether path names a folder in the store"""

    @abstractmethod
    def list_folders(self, path: str = "") -> List[str]:
        """Names of the folders directly under path, in enumeration order"""

    def read(self, path: str) -> ReadResult:
        """Look up a document, trimming surrounding whitespace"""
        result = self._read_raw(path)
        if result.status == ReadStatus.READ_ERROR:
            self.read_errors += 1
            logger.warning(f"Could not read instruction file {path}: {result.error}")
            return result
        if result.found:
            return ReadResult.found_text(path, result.text.strip())
        return result

    def load(self, path: str) -> Optional[str]:
        """Return the trimmed text at path, or None when absent or unreadable"""
        result = self.read(path)
        return result.text if result.found else None


class FileSystemDocumentStore(DocumentStore):
    """Documents stored as UTF-8 files under a root directory"""

    def __init__(self, root: Union[str, Path]):
        super().__init__()
        self.root = Path(root)
        self._normalized_root = os.path.normpath(os.path.abspath(self.root))

    def _full_path(self, path: str) -> Optional[Path]:
        """Absolute path for a store-relative path, or None if it leaves the root"""
        full_path = os.path.normpath(os.path.join(self._normalized_root, path))
        if os.path.commonpath([full_path, self._normalized_root]) != self._normalized_root:
            return None
        return Path(full_path)

    def _read_raw(self, path: str) -> ReadResult:
        full_path = self._full_path(path)
        if full_path is None or not full_path.is_file():
            return ReadResult.not_found(path)
        try:
            return ReadResult.found_text(path, full_path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError) as e:
            return ReadResult.read_error(path, e)

    def has_folder(self, path: str) -> bool:
        full_path = self._full_path(path)
        return full_path is not None and full_path.is_dir()

    def list_folders(self, path: str = "") -> List[str]:
        folder = self._full_path(path)
        if folder is None or not folder.is_dir():
            return []
        try:
            # Sorted so instruction set precedence does not depend on the OS
            return sorted(entry.name for entry in folder.iterdir() if entry.is_dir())
        except OSError as e:
            logger.warning(f"Could not list instruction folder {folder}: {e}")
            return []

    def __repr__(self) -> str:
        return f"FileSystemDocumentStore({str(self.root)!r})"
