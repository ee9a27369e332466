"""
Page Context Models

Supporting types shared by the store, the walker and the resolvers.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, field_validator


class ReadStatus(Enum):
    """Outcome of looking up a single document"""
    FOUND = "found"
    NOT_FOUND = "not_found"
    READ_ERROR = "read_error"  # Treated as NOT_FOUND by the walker


@dataclass(frozen=True)
class ReadResult:
    """Result of a document lookup"""
    status: ReadStatus
    path: str
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == ReadStatus.FOUND

    @classmethod
    def found_text(cls, path: str, text: str) -> 'ReadResult':
        return cls(status=ReadStatus.FOUND, path=path, text=text)

    @classmethod
    def not_found(cls, path: str) -> 'ReadResult':
        return cls(status=ReadStatus.NOT_FOUND, path=path)

    @classmethod
    def read_error(cls, path: str, error: Exception) -> 'ReadResult':
        return cls(status=ReadStatus.READ_ERROR, path=path, error=str(error))


class InstructionSetConfig(BaseModel):
    """Contents of an instruction set's _config.json"""
    domains: List[str]

    @field_validator('domains')
    @classmethod
    def domains_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("domains must name at least one hostname pattern")
        return value


@dataclass
class ResolutionStats:
    """Counters describing resolver cache behaviour"""
    hits: int = 0
    misses: int = 0
    entries: int = 0
    read_errors: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)
