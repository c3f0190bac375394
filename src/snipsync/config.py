"""Configuration loading for snipsync.

A ``snipsync.config.yaml`` looks like::

    origins:
      - owner: temporalio
        repo: samples-typescript
      - owner: temporalio
        repo: samples-go
        ref: v1.2.0
        files:
          - helloworld/helloworld.go
      - files:
          pattern: "./examples/**/*.py"
          owner: temporalio
          repo: docs
    targets:
      - docs
    features:
      enable_source_link: true
      enable_code_block: true
      enable_code_dedenting: false
      allowed_target_extensions: [.md]

Relative paths (targets, local patterns) are resolved against the directory
holding the configuration file.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .core.errors import ConfigError
from .core.markers import MarkerGrammar
from .core.overlay import Features


CONFIG_FILE = "snipsync.config.yaml"
DEFAULT_MAX_WORKERS = 8


class OriginKind(Enum):
    """Ways a source origin can be acquired."""
    REPOSITORY = "repository"  # Whole repository zipball
    REMOTE_FILES = "remote_files"  # Individual files over the GitHub API
    LOCAL = "local"  # Local glob pattern


@dataclass
class OriginSpec:
    """One entry of the ``origins`` list."""
    owner: Optional[str] = None
    repo: Optional[str] = None
    ref: Optional[str] = None
    files: List[str] = field(default_factory=list)
    pattern: Optional[str] = None

    @property
    def kind(self) -> OriginKind:
        if self.pattern:
            return OriginKind.LOCAL
        if self.files:
            return OriginKind.REMOTE_FILES
        return OriginKind.REPOSITORY

    @property
    def repo_ref(self) -> str:
        """Get the ``owner/repo`` string, or the pattern for local origins."""
        if self.owner and self.repo:
            return f"{self.owner}/{self.repo}"
        return self.pattern or "<unknown>"

    def __str__(self) -> str:
        if self.kind == OriginKind.LOCAL:
            return f"local:{self.pattern}"
        result = self.repo_ref
        if self.ref:
            result += f"#{self.ref}"
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "OriginSpec":
        """Parse one origin entry.

        Raises:
            ConfigError: If the entry is neither a repository nor a local pattern.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Each origin must be a mapping, got {type(data).__name__}")

        files = data.get("files")
        if isinstance(files, dict):
            # Local pattern: owner/repo/ref only feed the source link
            pattern = files.get("pattern")
            if not pattern:
                raise ConfigError("Local file origins need a 'files.pattern' entry")
            return cls(
                owner=_optional_str(files.get("owner")),
                repo=_optional_str(files.get("repo")),
                ref=_optional_str(files.get("ref")),
                pattern=str(pattern),
            )

        owner = _optional_str(data.get("owner"))
        repo = _optional_str(data.get("repo"))
        if not owner or not repo:
            raise ConfigError(f"Origin {data!r} needs both 'owner' and 'repo'")

        if files is None:
            file_list = []
        elif isinstance(files, list):
            file_list = [str(path).lstrip("/") for path in files]
        elif isinstance(files, str):
            file_list = [files.lstrip("/")]
        else:
            raise ConfigError(f"Origin {owner}/{repo}: 'files' must be a list of paths or a pattern mapping")

        return cls(owner=owner, repo=repo, ref=_optional_str(data.get("ref")), files=file_list)


@dataclass
class AuthConfig:
    """Credentials for the GitHub API."""
    token: Optional[str] = None


@dataclass
class SyncConfig:
    """Complete configuration for a sync or clear run."""
    origins: List[OriginSpec] = field(default_factory=list)
    targets: List[str] = field(default_factory=list)
    features: Features = field(default_factory=Features)
    markers: MarkerGrammar = field(default_factory=MarkerGrammar)
    auth: AuthConfig = field(default_factory=AuthConfig)
    max_workers: int = DEFAULT_MAX_WORKERS
    root_dir: Path = field(default_factory=Path.cwd)

    def target_paths(self) -> List[Path]:
        """Get the target roots resolved against the configuration directory."""
        return [self._resolve(target) for target in self.targets]

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.root_dir / candidate

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "SyncConfig":
        """Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ConfigError: If the file is not valid YAML or has the wrong shape.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML format in {config_path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path.name} must contain a YAML object, got {type(data).__name__}")

        return cls.from_dict(data, root_dir=config_path.resolve().parent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], root_dir: Optional[Path] = None) -> "SyncConfig":
        """Build configuration from already-parsed data, applying defaults field by field."""
        origins_data = data.get("origins") or []
        if not isinstance(origins_data, list):
            raise ConfigError("'origins' must be a list")
        origins = [OriginSpec.from_dict(entry) for entry in origins_data]

        # 'target' (single path) is the older spelling of 'targets'
        targets_data = data.get("targets", data.get("target"))
        if targets_data is None:
            targets = []
        elif isinstance(targets_data, str):
            targets = [targets_data]
        elif isinstance(targets_data, list):
            targets = [str(target) for target in targets_data]
        else:
            raise ConfigError("'targets' must be a path or a list of paths")

        max_workers = data.get("max_workers", DEFAULT_MAX_WORKERS)
        if not isinstance(max_workers, int) or isinstance(max_workers, bool) or max_workers < 1:
            raise ConfigError("'max_workers' must be a positive integer")

        auth_data = data.get("auth") or {}
        if not isinstance(auth_data, dict):
            raise ConfigError("'auth' must be a mapping")

        markers_data = data.get("markers")
        if markers_data is not None and not isinstance(markers_data, dict):
            raise ConfigError("'markers' must be a mapping")
        try:
            markers = MarkerGrammar.from_dict(markers_data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid 'markers' section: {e}")

        return cls(
            origins=origins,
            targets=targets,
            features=load_features(data.get("features")),
            markers=markers,
            auth=AuthConfig(token=_optional_str(auth_data.get("token"))),
            max_workers=max_workers,
            root_dir=root_dir or Path.cwd(),
        )


def load_features(data: Optional[Dict[str, Any]]) -> Features:
    """Build global features, defaulting every field that is absent or null."""
    if data is None:
        return Features()
    if not isinstance(data, dict):
        raise ConfigError("'features' must be a mapping")

    features = Features()
    for name in ("enable_source_link", "enable_code_block", "enable_code_dedenting"):
        value = data.get(name)
        if value is None:
            continue
        if not isinstance(value, bool):
            raise ConfigError(f"'features.{name}' must be true or false")
        setattr(features, name, value)

    extensions = data.get("allowed_target_extensions")
    if extensions is not None:
        if not isinstance(extensions, list):
            raise ConfigError("'features.allowed_target_extensions' must be a list")
        features.allowed_target_extensions = [_normalize_extension(ext) for ext in extensions]

    return features


def _normalize_extension(extension: Any) -> str:
    text = str(extension).strip()
    if text and not text.startswith("."):
        text = f".{text}"
    return text


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
