"""Read one archive and list its class-like entries."""

import logging
import zipfile
from pathlib import Path

logger = logging.getLogger(__name__)


def is_class_entry(name: str) -> bool:
    """An entry counts if "class" appears anywhere after the first character."""
    return name.find("class") > 0


def scan_archive(path: Path) -> dict[str, list[str]]:
    """Return {archive file name: [matching entry names]} for one archive.

    A corrupt or unreadable archive is logged and yields an empty list so the
    remaining archives can still be scanned.
    """
    entries = []
    try:
        with zipfile.ZipFile(path) as archive:
            for info in archive.infolist():
                if is_class_entry(info.filename):
                    entries.append(info.filename)
    except (zipfile.BadZipFile, OSError, NotImplementedError, ValueError, EOFError) as e:
        logger.error(f"Cannot read archive {path}: {e}")
        entries = []
    return {path.name: entries}
