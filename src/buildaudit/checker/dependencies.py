"""Group resolved dependencies by artifact id and report collisions.

Only the artifact id is used as the grouping key. Two artifacts from
different groups that share an artifact id are reported together; that is
the behaviour of the tool this replaces and is kept on purpose.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass

logger = logging.getLogger(__name__)

START_BANNER = "********************[duplicated artifact start]*******************"
END_BANNER = "********************[duplicated artifact end]*******************"


@dataclass(frozen=True)
class Dependency:
    group_id: str
    artifact_id: str
    version: str
    type: str = "jar"
    scope: str = "compile"
    classifier: str | None = None
    optional: bool = False

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


def dependency_from_artifact(artifact: dict, use_base_version: bool = False) -> Dependency:
    """Build a Dependency from a resolved artifact record.

    `base_version` falls back to `version` when the record has none.
    """
    version = str(artifact["version"])
    if use_base_version:
        version = str(artifact.get("base_version") or version)

    return Dependency(
        group_id=str(artifact["group_id"]),
        artifact_id=str(artifact["artifact_id"]),
        version=version,
        type=artifact.get("type") or "jar",
        scope=artifact.get("scope") or "compile",
        classifier=artifact.get("classifier") or None,
        optional=bool(artifact.get("optional", False)),
    )


def collect_dependencies(artifacts: list[dict], use_base_version: bool = False) -> list[Dependency]:
    """Convert artifacts to dependencies, leaving out `pom` (aggregator/BOM) entries."""
    dependencies = []
    for artifact in artifacts:
        if artifact.get("type") == "pom":
            continue
        dependencies.append(dependency_from_artifact(artifact, use_base_version))
    return dependencies


def group_by_artifact_id(dependencies: list[Dependency]) -> dict[str, list[Dependency]]:
    groups = defaultdict(list)
    for dep in dependencies:
        groups[dep.artifact_id].append(dep)
    return dict(groups)


def find_duplicate_dependencies(
    artifacts: list[dict], use_base_version: bool = False
) -> dict[str, list[Dependency]]:
    """Return only the artifact-id groups with more than one member."""
    groups = group_by_artifact_id(collect_dependencies(artifacts, use_base_version))
    return {artifact_id: deps for artifact_id, deps in groups.items() if len(deps) > 1}


def log_duplicate_dependencies(duplicates: dict[str, list[Dependency]]) -> None:
    logger.info(START_BANNER)
    for deps in duplicates.values():
        for dep in deps:
            logger.info(dep.coordinates)
    logger.info(END_BANNER)
