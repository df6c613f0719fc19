"""Configuration helpers for the style engine."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_ROOM_TYPE = "living"
DEFAULT_MAX_CANDIDATES = 200
DEFAULT_MAX_COLORS_PER_ITEM = 16


@dataclass
class EngineConfig:
    """Configuration values for the style engine.

    Candidate pools and color lists are capped before scoring because color
    compatibility is quadratic in palette size.
    """

    environment: Optional[str] = None
    log_level: str = "INFO"
    default_room_type: str = DEFAULT_ROOM_TYPE
    max_candidates: int = DEFAULT_MAX_CANDIDATES
    max_colors_per_item: int = DEFAULT_MAX_COLORS_PER_ITEM
    max_workers: int = 1

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is overridden by environment variables of the same name in
        upper case.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("ENGINE_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        return cls(
            environment=env_name,
            log_level=str(get_value("log_level", "INFO") or "INFO").upper(),
            default_room_type=str(get_value("default_room_type", DEFAULT_ROOM_TYPE) or DEFAULT_ROOM_TYPE),
            max_candidates=cls._positive_int(get_value("max_candidates"), DEFAULT_MAX_CANDIDATES),
            max_colors_per_item=cls._positive_int(get_value("max_colors_per_item"), DEFAULT_MAX_COLORS_PER_ITEM),
            max_workers=cls._positive_int(get_value("max_workers"), 1),
        )

    @staticmethod
    def _positive_int(raw: Optional[str], default: int) -> int:
        if raw is None or str(raw).strip() == "":
            return default
        try:
            value = int(str(raw).strip())
        except ValueError as exc:
            raise ValueError(f"Expected an integer config value, got {raw!r}") from exc
        if value < 1:
            raise ValueError(f"Config value must be positive, got {value}")
        return value

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
