"""Configuration loading and PropagationConfig model."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..exceptions import ConfigurationError
from .paths import get_workspace_root
from .policy import BuildType, BuildTypePolicy, default_policies
from .targets import ArtifactFormat, ArtifactTarget, default_targets


LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingSettings(BaseModel):
    """Log level and JSON log file location."""
    level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))
    json_file: bool = Field(default=True, description="Write the rotating JSON log file")

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = str(value).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {sorted(LOG_LEVELS)}, got {value!r}")
        return level


class PropagationConfig(BaseModel):
    """Top-level config; extra keys are tolerated."""

    model_config = ConfigDict(extra="allow")

    root: Path = Field(default_factory=get_workspace_root)
    package_name: Optional[str] = Field(default=None, description="Self-referential key for the template manifest")
    snapshot_prefix: str = Field(default="verstamp-set-version-")
    targets: List[ArtifactTarget] = Field(default_factory=default_targets)
    policy: Dict[BuildType, BuildTypePolicy] = Field(default_factory=default_policies)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("root", mode="before")
    @classmethod
    def _resolve_root(cls, value: Any) -> Path:
        return get_workspace_root(value)

    @field_validator("policy", mode="before")
    @classmethod
    def _merge_default_policies(cls, value: Any) -> Dict[str, Any]:
        """Overlay configured policies on the defaults, field by field."""
        merged: Dict[str, Any] = {
            build_type.value: policy.model_dump()
            for build_type, policy in default_policies().items()
        }
        for key, override in dict(value or {}).items():
            key = key.value if isinstance(key, BuildType) else str(key)
            if isinstance(override, BuildTypePolicy):
                override = override.model_dump(exclude_unset=True)
            merged[key] = {**merged.get(key, {}), **(override or {})}
        return merged

    @model_validator(mode="after")
    def _one_target_per_format(self) -> "PropagationConfig":
        seen: Dict[ArtifactFormat, str] = {}
        names = set()
        for target in self.targets:
            if target.name in names:
                raise ValueError(f"Duplicate target name: {target.name}")
            names.add(target.name)
            if target.format in seen:
                raise ValueError(
                    f"Targets '{seen[target.format]}' and '{target.name}' share format {target.format.value}"
                )
            seen[target.format] = target.name
        missing = [fmt.value for fmt in ArtifactFormat if fmt not in seen]
        if missing:
            raise ValueError(f"Missing targets for formats: {', '.join(missing)}")
        return self

    def target_for(self, fmt: ArtifactFormat) -> ArtifactTarget:
        for target in self.targets:
            if target.format == fmt:
                return target
        raise ConfigurationError(f"No target configured for format {fmt.value}")

    @property
    def source_targets(self) -> List[ArtifactTarget]:
        return [t for t in self.targets if t.format.is_source_constant]

    @property
    def verification_targets(self) -> List[ArtifactTarget]:
        return [t for t in self.targets if t.verify]

    def resolve(self, path: Path) -> Path:
        """Absolute location of a workspace-relative path."""
        return self.root / path

    def policy_for(self, build_type: BuildType) -> BuildTypePolicy:
        return self.policy[build_type]


def _lower_keys(d: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize dictionary keys to lowercase."""
    return {k.lower(): v for k, v in d.items()}


def _apply_env_overrides(cfg: Dict[str, Any], env: Dict[str, str], prefix: str) -> None:
    """Apply simple env overrides using DOUBLE-UNDERSCORE path syntax.

    Example: VERSTAMP_LOGGING__LEVEL=DEBUG overrides logging.level
    """
    plen = len(prefix)
    for key, value in env.items():
        if not key.startswith(prefix):
            continue
        path = key[plen:].lower().split("__")
        cur: Any = cfg
        for part in path[:-1]:
            if part not in cur or not isinstance(cur[part], dict):
                cur[part] = {}
            cur = cur[part]
        leaf = path[-1]
        if value.lower() in {"true", "false"}:
            cur[leaf] = value.lower() == "true"
        else:
            try:
                cur[leaf] = int(value)
            except ValueError:
                cur[leaf] = value


def load_propagation_config(
    path: Optional[Path | str] = None,
    *,
    env_overrides: bool = True,
    env: Optional[Dict[str, str]] = None,
    env_prefix: str = "VERSTAMP_",
) -> PropagationConfig:
    """Load YAML config and return a typed `PropagationConfig`.

    - ``path=None`` starts from the built-in defaults
    - Optionally applies environment variable overrides
    """
    data: Dict[str, Any] = {}
    if path is not None:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {p}")

        try:
            with open(p, "r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Config file is not valid YAML: {e}", config_path=str(p), original_exception=e
            ) from e
        if not isinstance(raw, dict):
            raise ConfigurationError("Config file must contain a mapping", config_path=str(p))

        data = _lower_keys(raw)

    if env_overrides:
        import os as _os

        _apply_env_overrides(data, env if env is not None else dict(_os.environ), env_prefix)

    try:
        return PropagationConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid verstamp configuration: {e}",
            config_path=str(path) if path is not None else None,
            original_exception=e,
        ) from e
