"""
Data models for the album archiver.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Union
from uuid import UUID
from pydantic import BaseModel, validator


RecordId = Union[int, UUID, str]


class CodeFile(BaseModel):
    """An image file in the codes folder and the album code in its name."""
    filename: str
    album_code: str


class ScanResult(BaseModel):
    """Album code files found in the codes folder and how many images were seen."""
    code_files: List[CodeFile] = []
    files_scanned: int = 0
    files_skipped: int = 0


class LinkRecord(BaseModel):
    """A photo upload album link as stored in the database."""
    id: RecordId
    linked_at: datetime
    
    @validator("linked_at")
    def normalize_linked_at(cls, v):
        """Treat timestamps without a zone as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class Partition(BaseModel):
    """Link records split around the threshold instant."""
    before: List[LinkRecord] = []
    after: List[LinkRecord] = []
    
    @property
    def total(self) -> int:
        return len(self.before) + len(self.after)
    
    @property
    def before_ids(self) -> List[RecordId]:
        return [record.id for record in self.before]


class Decision(str, Enum):
    """Operator answer for a single album code."""
    CONFIRM = "confirm"
    SKIP = "skip"
    CONFIRM_ALL = "confirm_all"


class DecisionMode(str, Enum):
    """Whether the operator is still being asked for each code."""
    ASK = "ask"
    AUTO_CONFIRM = "auto_confirm"


class CodeStatus(str, Enum):
    """How processing of an album code ended."""
    ARCHIVED = "archived"
    NOTHING_BEFORE = "nothing_before"
    DECLINED = "declined"
    INVALID_INPUT = "invalid_input"
    DRY_RUN = "dry_run"


class CodeResult(BaseModel):
    """Result of processing one album code."""
    filename: str
    album_code: str
    status: CodeStatus
    total: int = 0
    before_count: int = 0
    after_count: int = 0
    archived_code: Optional[str] = None
    archived_ids: List[RecordId] = []


class RunSummary(BaseModel):
    """Result of a whole archival run."""
    files_scanned: int = 0
    files_skipped: int = 0
    code_files: int = 0
    codes_processed: int = 0
    codes_archived: int = 0
    codes_skipped: int = 0
    records_archived: int = 0
    results: List[CodeResult] = []
    
    def add(self, result: CodeResult) -> None:
        """Fold a per-code result into the totals."""
        self.results.append(result)
        self.codes_processed += 1
        if result.status == CodeStatus.ARCHIVED:
            self.codes_archived += 1
            self.records_archived += len(result.archived_ids)
        else:
            self.codes_skipped += 1
