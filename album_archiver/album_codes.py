"""
Album code extraction from filenames and archived code derivation.
"""

import re
from pathlib import Path
from typing import Optional, Union
from .models import CodeFile, ScanResult
from .logging import get_logger


SIGIL = "@"
ARCHIVE_PREFIX = f"{SIGIL}_archive"

logger = get_logger("album_codes")


def _code_pattern(extension: str) -> "re.Pattern[str]":
    return re.compile(rf"_(?P<album_code>{SIGIL}\w+){re.escape(extension)}$", re.ASCII)


def extract_album_code(filename: str, extension: str = ".png") -> Optional[str]:
    """Return the album code at the end of a filename, or None.
    
    ``upload_20230101_@team42.png`` yields ``@team42``.
    """
    match = _code_pattern(extension).search(filename)
    if not match:
        return None
    return match.group("album_code")


def scan_codes_folder(folder: Union[str, Path], extension: str = ".png") -> ScanResult:
    """List the image files in ``folder`` that carry an album code.
    
    Files with the right extension but no code are logged and skipped.
    A missing or unreadable folder raises ``OSError``.
    """
    folder = Path(folder)
    names = sorted(entry.name for entry in folder.iterdir())
    image_names = [name for name in names if name.endswith(extension)]
    logger.debug(f"📂 {len(image_names)} of {len(names)} entries in {folder} end with {extension}")
    
    code_files = []
    for name in image_names:
        album_code = extract_album_code(name, extension)
        if album_code is None:
            logger.info(f"⏭️  Skipping file {name}, no album code found.")
            continue
        code_files.append(CodeFile(filename=name, album_code=album_code))
    
    return ScanResult(
        code_files=code_files,
        files_scanned=len(image_names),
        files_skipped=len(image_names) - len(code_files)
    )


def is_archived(album_code: str) -> bool:
    """Check whether a code already carries the archive marker."""
    return album_code.startswith(ARCHIVE_PREFIX)


def archive_code(album_code: str) -> str:
    """Derive the archived variant of an album code.
    
    ``@team42`` becomes ``@_archive_team42``; an already archived code is
    returned unchanged.
    """
    if is_archived(album_code):
        return album_code
    if not album_code.startswith(SIGIL):
        raise ValueError(f"Album code must start with {SIGIL!r}: {album_code!r}")
    return f"{ARCHIVE_PREFIX}_{album_code[len(SIGIL):]}"
