"""
Run driver for archiving album links created before the threshold date.
"""

from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple
from .album_codes import archive_code, scan_codes_folder
from .config import Settings
from .database import LinkStore
from .models import (
    CodeFile, CodeResult, CodeStatus, Decision, DecisionMode, LinkRecord, Partition, RunSummary
)
from .prompt import ask_operator, format_instant
from .logging import get_logger


class ArchiverError(Exception):
    """Custom exception for archiver errors."""
    pass


def partition_records(records: Iterable[LinkRecord], threshold: datetime) -> Partition:
    """Split records into those linked strictly before the threshold and the rest."""
    partition = Partition()
    for record in records:
        if record.linked_at < threshold:
            partition.before.append(record)
        else:
            partition.after.append(record)
    return partition


class AlbumArchiver:
    """Archives the links of every album code found in the codes folder."""

    def __init__(
        self,
        settings: Settings,
        store: LinkStore,
        input_func: Optional[Callable[[str], str]] = None,
        dry_run: bool = False
    ):
        self.logger = get_logger("archiver")
        self.settings = settings
        self.store = store
        self.input_func = input_func or input
        self.dry_run = dry_run
        self.threshold = settings.date_threshold

    def report(self, album_code: str, partition: Partition) -> None:
        """Log how the links of a code fall around the threshold."""
        threshold = format_instant(self.threshold)
        self.logger.info(f"🔍 Found {partition.total} records for AlbumCode: {album_code}.")
        self.logger.info(f"   {len(partition.before)} images taken before {threshold}.")
        self.logger.info(f"   {len(partition.after)} images taken on or after {threshold}.")

    def confirm(self, before_count: int, mode: DecisionMode) -> Tuple[Optional[Decision], DecisionMode]:
        """Get the operator decision for a code, returning the mode for later codes."""
        if mode == DecisionMode.AUTO_CONFIRM:
            return Decision.CONFIRM, mode

        decision = ask_operator(before_count, self.threshold, self.input_func)
        if decision == Decision.CONFIRM_ALL:
            self.logger.info("⏩ Archiving all remaining album codes without asking")
            return decision, DecisionMode.AUTO_CONFIRM
        return decision, mode

    def archive(self, code_file: CodeFile, partition: Partition) -> CodeResult:
        """Retag every link in the before partition with the archived code."""
        album_code = code_file.album_code
        new_code = archive_code(album_code)
        archived_ids = []

        for record_id in partition.before_ids:
            self.store.set_album_code(record_id, new_code)
            archived_ids.append(record_id)
            self.logger.info(f"📦 Archived record with Id: {record_id} for AlbumCode: {album_code}")

        return self._result(code_file, partition, CodeStatus.ARCHIVED,
                            archived_code=new_code, archived_ids=archived_ids)

    def process_code(self, code_file: CodeFile, mode: DecisionMode) -> Tuple[CodeResult, DecisionMode]:
        """Query, report, confirm and archive a single album code."""
        album_code = code_file.album_code
        records = self.store.fetch_links(album_code)
        partition = partition_records(records, self.threshold)
        self.report(album_code, partition)

        def result(status: CodeStatus) -> CodeResult:
            return self._result(code_file, partition, status)

        if not partition.before:
            self.logger.info(
                f"⏭️  No images before {format_instant(self.threshold)} for AlbumCode: {album_code}. Skipping..."
            )
            return result(CodeStatus.NOTHING_BEFORE), mode

        if self.dry_run:
            self.logger.info(
                f"🔍 DRY RUN: Would archive {len(partition.before)} records "
                f"as {archive_code(album_code)}"
            )
            return result(CodeStatus.DRY_RUN), mode

        decision, mode = self.confirm(len(partition.before), mode)
        if decision == Decision.SKIP:
            self.logger.info(f"⏭️  Skipping AlbumCode: {album_code}")
            return result(CodeStatus.DECLINED), mode
        if decision is None:
            self.logger.warning("⚠️  Invalid input. Skipping this AlbumCode.")
            return result(CodeStatus.INVALID_INPUT), mode

        return self.archive(code_file, partition), mode

    def _result(self, code_file: CodeFile, partition: Partition, status: CodeStatus, **fields) -> CodeResult:
        return CodeResult(
            filename=code_file.filename,
            album_code=code_file.album_code,
            status=status,
            total=partition.total,
            before_count=len(partition.before),
            after_count=len(partition.after),
            **fields
        )

    def run(self, mode: DecisionMode = DecisionMode.ASK) -> RunSummary:
        """Process every album code in the codes folder in order."""
        folder = Path(self.settings.codes_dir)
        try:
            scan = scan_codes_folder(folder, self.settings.image_extension)
        except OSError as e:
            raise ArchiverError(f"Cannot read codes folder {folder}: {e}") from e

        summary = RunSummary(
            files_scanned=scan.files_scanned,
            files_skipped=scan.files_skipped,
            code_files=len(scan.code_files)
        )
        self.logger.info(
            f"🗂️  Found {len(scan.code_files)} album codes in {folder} "
            f"({scan.files_scanned} images, {scan.files_skipped} without a code)"
        )

        for code_file in scan.code_files:
            code_result, mode = self.process_code(code_file, mode)
            summary.add(code_result)

        self.logger.info(
            f"🏁 Archiving process completed! {summary.records_archived} records archived "
            f"across {summary.codes_archived} album codes, {summary.codes_skipped} codes skipped, "
            f"{summary.files_skipped} of {summary.files_scanned} images had no album code"
        )
        return summary
