"""Load the YAML project descriptor that feeds both checks."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from buildaudit.census.walker import DEFAULT_INCLUDES
from buildaudit.errors import ConfigError

DEFAULT_CONFIG_NAME = "buildaudit.yaml"


@dataclass
class AuditConfig:
    basedir: Path
    skip: bool = False
    use_base_version: bool = False
    includes: frozenset[str] = DEFAULT_INCLUDES
    output_directory: Path | None = None
    webapp_directory: Path | None = None
    lib_directory: Path | None = None
    source_directory: Path | None = None
    test_source_directory: Path | None = None
    resources: list[Path] = field(default_factory=list)
    test_resources: list[Path] = field(default_factory=list)
    artifacts: list[dict] = field(default_factory=list)

    def census_roots(self) -> list[Path]:
        """Source, test source, then resources and test resources."""
        roots = [self.source_directory, self.test_source_directory]
        roots += self.resources + self.test_resources
        return [r for r in roots if r is not None]


def normalize_includes(includes) -> frozenset[str]:
    """Lowercase suffixes without a leading dot. Empty input means the default set."""
    if not includes:
        return DEFAULT_INCLUDES
    if isinstance(includes, str):
        includes = includes.split(",")
    suffixes = {str(s).strip().lstrip(".").lower() for s in includes}
    suffixes.discard("")
    return frozenset(suffixes) or DEFAULT_INCLUDES


def _bool(data: dict, key: str, default: bool = False) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _string(data: dict, key: str, default: str | None = None) -> str | None:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {value!r}")
    return value


def _string_list(data: dict, key: str, default: list[str]) -> list[str]:
    """A missing key gives the default; an explicit null gives an empty list."""
    if key not in data:
        return default
    value = data[key]
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings, got {value!r}")
    return value


def _check_artifacts(artifacts) -> list[dict]:
    if artifacts is None:
        return []
    if not isinstance(artifacts, list):
        raise ConfigError("'artifacts' must be a list of artifact mappings")
    for artifact in artifacts:
        if not isinstance(artifact, dict):
            raise ConfigError(f"Artifact must be a mapping, got: {artifact!r}")
        missing = [k for k in ("group_id", "artifact_id", "version") if k not in artifact]
        if missing:
            raise ConfigError(f"Artifact {artifact!r} is missing {', '.join(missing)}")
        if not isinstance(artifact.get("optional", False), bool):
            raise ConfigError(f"Artifact {artifact!r}: 'optional' must be true or false")
    return artifacts


def build_config(data: dict, basedir: Path) -> AuditConfig:
    """Turn a parsed descriptor mapping into an AuditConfig rooted at basedir.

    Values of the wrong type raise ConfigError.
    """
    if _string(data, "basedir"):
        basedir = basedir / Path(data["basedir"]).expanduser()
    basedir = basedir.absolute()

    def resolve(value) -> Path:
        return basedir / Path(value).expanduser()

    includes = data.get("includes")
    if includes is not None and not isinstance(includes, (str, list)):
        raise ConfigError(f"'includes' must be a list of suffixes, got {includes!r}")

    final_name = _string(data, "final_name", "app")
    webapp_directory = resolve(_string(data, "webapp_directory", f"target/{final_name}"))
    lib_directory = _string(data, "lib_directory")
    lib_directory = resolve(lib_directory) if lib_directory else webapp_directory / "WEB-INF" / "lib"

    return AuditConfig(
        basedir=basedir,
        skip=_bool(data, "skip"),
        use_base_version=_bool(data, "use_base_version"),
        includes=normalize_includes(includes),
        output_directory=resolve(_string(data, "output_directory", "target/classes")),
        webapp_directory=webapp_directory,
        lib_directory=lib_directory,
        source_directory=resolve(_string(data, "source_directory", "src/main/java")),
        test_source_directory=resolve(_string(data, "test_source_directory", "src/test/java")),
        resources=[resolve(r) for r in _string_list(data, "resources", ["src/main/resources"])],
        test_resources=[
            resolve(r) for r in _string_list(data, "test_resources", ["src/test/resources"])
        ],
        artifacts=_check_artifacts(data.get("artifacts")),
    )


def load_config(path: Path | None = None) -> AuditConfig:
    """Load the descriptor at path (default: $BUILDAUDIT_CONFIG or ./buildaudit.yaml).

    A missing default descriptor yields the defaults rooted at the working
    directory. A missing explicit path is an error.
    """
    explicit = path is not None
    path = path or Path(os.environ.get("BUILDAUDIT_CONFIG", DEFAULT_CONFIG_NAME))

    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return build_config({}, Path.cwd())

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot load config {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    return build_config(data, path.parent)
