"""Top-level checks: duplicate dependencies/classes and the line census."""

import logging
from dataclasses import dataclass, field

from buildaudit.census.walker import CensusReport, census_roots
from buildaudit.checker.dependencies import (
    Dependency,
    find_duplicate_dependencies,
    log_duplicate_dependencies,
)
from buildaudit.checker.duplicate_classes import (
    DuplicateClassReport,
    find_duplicate_classes,
    log_duplicate_classes,
)
from buildaudit.config import AuditConfig
from buildaudit.errors import CheckFailed

logger = logging.getLogger(__name__)


@dataclass
class DupCheckResult:
    dependencies: dict[str, list[Dependency]] = field(default_factory=dict)
    classes: DuplicateClassReport = field(default_factory=DuplicateClassReport)


def run_dup_check(config: AuditConfig) -> DupCheckResult | None:
    """Report duplicate dependencies, then duplicate classes in the library dir.

    Returns None when the check is skipped. Any unexpected error is wrapped
    in CheckFailed.
    """
    if config.skip:
        logger.info("Skipping Duplicate check.")
        return None

    try:
        dependencies = find_duplicate_dependencies(config.artifacts, config.use_base_version)
        log_duplicate_dependencies(dependencies)

        logger.info(str(config.webapp_directory))
        classes = find_duplicate_classes(config.lib_directory)
        if classes.archives_scanned:
            log_duplicate_classes(classes)
    except Exception as e:
        raise CheckFailed("Error during duplicate dependency or classes check.") from e

    return DupCheckResult(dependencies=dependencies, classes=classes)


def run_census(config: AuditConfig) -> CensusReport | None:
    """Count lines over the configured roots. Returns None when skipped."""
    if config.skip:
        logger.info("Skipping line count.")
        return None

    try:
        report = census_roots(config.census_roots(), config.basedir, config.includes)
    except Exception as e:
        raise CheckFailed("Unable to count lines of code") from e

    total = report.total
    logger.info(f"TOTAL LINES:{total.fake} ({total.real})")
    return report
