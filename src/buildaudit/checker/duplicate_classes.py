"""Find class entries bundled in more than one archive of a library directory."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path

from buildaudit.checker.archive_scanner import scan_archive

logger = logging.getLogger(__name__)

RULE = "*********************************************"


@dataclass
class DuplicateClassReport:
    """Entry name -> names of the archives that contain it."""

    owners: dict[str, set[str]] = field(default_factory=dict)
    archives_scanned: int = 0

    @property
    def duplicates(self) -> dict[str, list[str]]:
        return {
            entry: sorted(archives)
            for entry, archives in sorted(self.owners.items())
            if len(archives) > 1
        }

    @property
    def total_duplicate_classes(self) -> int:
        return sum(1 for archives in self.owners.values() if len(archives) > 1)

    @property
    def duplicate_archives(self) -> set[str]:
        implicated = set()
        for archives in self.owners.values():
            if len(archives) > 1:
                implicated.update(archives)
        return implicated


def merge_scan_results(results: list[dict[str, list[str]]]) -> DuplicateClassReport:
    """Fold per-archive entry lists into one entry -> archive-set mapping."""
    owners = defaultdict(set)
    for result in results:
        for archive_name, entry_names in result.items():
            for entry_name in entry_names:
                owners[entry_name].add(archive_name)
    return DuplicateClassReport(owners=dict(owners), archives_scanned=len(results))


def find_duplicate_classes(lib_dir: Path) -> DuplicateClassReport:
    """Scan every file in lib_dir. A missing or empty directory is not an error."""
    if not lib_dir.is_dir():
        logger.info(f"Library directory not found, skipping class check: {lib_dir}")
        return DuplicateClassReport()

    archives = sorted(p for p in lib_dir.iterdir() if p.is_file())
    if not archives:
        logger.info(f"Library directory is empty, skipping class check: {lib_dir}")
        return DuplicateClassReport()

    return merge_scan_results([scan_archive(p) for p in archives])


def log_duplicate_classes(report: DuplicateClassReport) -> None:
    for entry_name, archive_names in report.duplicates.items():
        logger.info(RULE)
        logger.error(f"Found duplicated class : [{entry_name}]")
        for archive_name in archive_names:
            logger.info(archive_name)
        logger.info(RULE)
        logger.info("")

    logger.info("")
    logger.info(
        f"Total Found [{report.total_duplicate_classes}] duplicate class"
        f" in [{len(report.duplicate_archives)}] jars!"
    )
    logger.info("")
