"""CENSUS: walk source/resource roots and total real/fake lines per root."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from buildaudit.census.line_classifier import LineCount, count_file

logger = logging.getLogger(__name__)

DEFAULT_INCLUDES = frozenset({"java", "xml", "sql", "properties"})


@dataclass
class DirectoryCensus:
    root: Path
    relative_path: str
    lines: LineCount
    file_count: int


@dataclass
class CensusReport:
    directories: list[DirectoryCensus] = field(default_factory=list)

    @property
    def total(self) -> LineCount:
        total = LineCount()
        for d in self.directories:
            total += d.lines
        return total


def file_suffix(name: str) -> str | None:
    """Lowercased text after the last dot, or None when the dot is missing or leading."""
    index = name.rfind(".")
    if index > 0:
        return name[index + 1:].lower()
    return None


def is_included(name: str, includes) -> bool:
    suffix = file_suffix(name)
    return suffix is not None and suffix in includes


def collect_files(root: Path, includes) -> list[Path]:
    """Depth-first walk from root, returning files whose suffix is included.

    Directories are always descended into. Each directory is visited once,
    keyed by (device, inode), so symlink loops terminate. A root that is a
    plain file is returned on its own when its suffix is included.
    """
    if root.is_file():
        return [root] if is_included(root.name, includes) else []

    collected = []
    visited = set()
    stack = [root]

    while stack:
        directory = stack.pop()
        try:
            st = directory.stat()
        except OSError as e:
            logger.warning(f"Cannot stat {directory}: {e}")
            continue
        key = (st.st_dev, st.st_ino)
        if key in visited:
            continue
        visited.add(key)

        try:
            with os.scandir(directory) as it:
                children = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Cannot list {directory}: {e}")
            continue

        subdirs = []
        for child in children:
            try:
                if child.is_dir():
                    subdirs.append(Path(child.path))
                elif child.is_file() and is_included(child.name, includes):
                    collected.append(Path(child.path))
            except OSError as e:
                logger.warning(f"Cannot stat {child.path}: {e}")
        # reversed so the first child is walked first
        stack.extend(reversed(subdirs))

    return collected


def relative_to_basedir(root: Path, basedir: Path) -> str:
    """Root path with the basedir prefix removed, or the full path if outside basedir."""
    root = root.absolute()
    basedir = basedir.absolute()
    if root.is_relative_to(basedir):
        return str(root)[len(str(basedir)):]
    return str(root)


def count_directory(root: Path, basedir: Path, includes=DEFAULT_INCLUDES) -> DirectoryCensus | None:
    """Census of one root. Returns None when the root does not exist."""
    if not root.exists():
        logger.debug(f"Census root not found, skipping: {root}")
        return None

    files = collect_files(root, includes)
    lines = LineCount()
    for path in files:
        try:
            counted = count_file(path)
        except OSError as e:
            logger.error(f"Cannot read {path}: {e}")
            continue
        logger.debug(f"{path.name}  : {counted.fake} ({counted.real}) lines")
        lines += counted

    census = DirectoryCensus(
        root=root,
        relative_path=relative_to_basedir(root, basedir),
        lines=lines,
        file_count=len(files),
    )
    logger.info(
        f"{census.relative_path} : {lines.fake} ({lines.real})"
        f" lines of code in {census.file_count} files"
    )
    return census


def census_roots(roots: list[Path], basedir: Path, includes=DEFAULT_INCLUDES) -> CensusReport:
    report = CensusReport()
    for root in roots:
        census = count_directory(root, basedir, includes)
        if census is not None:
            report.directories.append(census)
    return report
