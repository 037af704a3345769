"""
Configuration Loader - Load and validate configuration from YAML.

Supports layered configuration:
- config/default.yaml - Shipped defaults
- an optional override file passed by the caller

Override settings win over defaults; unknown keys are ignored.
"""
import logging
import yaml
from pathlib import Path
from typing import Optional, Any, Dict, List
from dataclasses import dataclass, field, asdict
from copy import deepcopy


logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Puzzle engine settings."""
    slot_count: int = 5
    fire_interval: float = 0.2
    settle_on_load: bool = True
    instant_exit_boosters: int = 0
    extra_slot_boosters: int = 0


@dataclass
class LevelConfig:
    """Default level dimensions."""
    wall_width: int = 6
    wall_height: int = 8
    grid_rows: int = 8
    grid_cols: int = 6


@dataclass
class GeneratorConfig:
    """Level generator settings."""
    fill_fraction: float = 0.8
    colors: List[int] = field(default_factory=lambda: [0, 1, 2, 3, 4, 5])
    lengths: List[int] = field(default_factory=lambda: [1, 2, 3, 4])
    max_cluster_span: int = 3
    max_arrows: Optional[int] = None
    seed: int = 12345


@dataclass
class RewardsConfig:
    """Reward shaping for AI players."""
    block_destroyed: float = 0.1
    arrow_collected: float = 0.5
    blocked_attempt: float = -0.5
    slots_full: float = -0.5
    win: float = 10.0
    loss: float = -10.0
    step_penalty: float = -0.01


@dataclass
class SessionConfig:
    """Game/environment session settings."""
    step_dt: float = 0.2
    max_steps: int = 2000


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class Config:
    """Complete application configuration."""
    engine: EngineConfig = field(default_factory=EngineConfig)
    level: LevelConfig = field(default_factory=LevelConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    rewards: RewardsConfig = field(default_factory=RewardsConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = {
    'engine': EngineConfig,
    'level': LevelConfig,
    'generator': GeneratorConfig,
    'rewards': RewardsConfig,
    'session': SessionConfig,
    'logging': LoggingConfig,
}


def _dict_to_dataclass(data: dict, cls: type) -> Any:
    """Convert a dictionary to a dataclass instance."""
    if not data:
        return cls()

    # Get the fields that the dataclass expects
    field_names = {f.name for f in cls.__dataclass_fields__.values()}

    # Filter to only include valid fields
    filtered_data = {k: v for k, v in data.items() if k in field_names}

    return cls(**filtered_data)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override values taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        Merged dictionary
    """
    result = deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def _find_config_dir() -> Path:
    """Find the config directory."""
    possible_paths = [
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
        Path.cwd() / "config",
    ]

    for path in possible_paths:
        if path.exists() and path.is_dir():
            return path

    # Fallback to project root config folder
    return Path(__file__).parent.parent.parent / "config"


def _load_yaml_file(path: Path) -> Dict:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data if data else {}


def config_from_dict(data: Dict) -> Config:
    """Build a Config from a (possibly partial) nested dictionary."""
    config = Config()
    for section, cls in _SECTIONS.items():
        if section in data:
            setattr(config, section, _dict_to_dataclass(data[section], cls))
    return config


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration.

    Merges config/default.yaml with the optional override file.

    Args:
        config_path: Path to an override YAML file

    Returns:
        Config object with merged settings
    """
    default_data = _load_yaml_file(_find_config_dir() / "default.yaml")

    override_data = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        override_data = _load_yaml_file(path)

    merged_data = _deep_merge(default_data, override_data)

    if not merged_data:
        logger.info("[Config] No config file found, using defaults")
        return Config()

    return config_from_dict(merged_data)


def save_config(config: Config, config_path: str):
    """
    Save configuration to a YAML file.

    Args:
        config: Config object to save
        config_path: Path to save to
    """
    data = asdict(config)

    with open(config_path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
