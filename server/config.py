"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Reads a .env file at the project root using python-dotenv.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from feed_engine.models.config import PRESETS, FeedConfig

root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)

KNOWN_SOURCES = ("thecatapi", "cataas", "shibe", "json")


def _bool_env(key: str, default: bool) -> bool:
    v = os.getenv(key)
    if v is None or not v.strip():
        return default
    return v.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Blob store directory for the liked history
    data_dir: Path = Path(__file__).parent.parent / "data"

    # Feed
    feed_preset: str = "default"
    # Content sources to query on every refill: thecatapi | cataas | shibe | json
    content_sources: List[str] = field(default_factory=lambda: ["thecatapi", "cataas"])
    # When "json" is among the sources: catalogue file of items
    content_json_path: Optional[Path] = None
    embeddings_enabled: bool = True
    viewport_width: float = 390.0
    random_seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        sources_raw = os.getenv("CONTENT_SOURCES", "thecatapi,cataas")
        sources = [s.strip().lower() for s in sources_raw.split(",") if s.strip()]
        seed = os.getenv("RANDOM_SEED", "").strip()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            data_dir=_path_env("DATA_DIR", base_dir / "data"),
            feed_preset=os.getenv("FEED_PRESET", "default").strip().lower() or "default",
            content_sources=sources,
            content_json_path=_path_env("CONTENT_JSON_PATH"),
            embeddings_enabled=_bool_env("EMBEDDINGS_ENABLED", True),
            viewport_width=float(os.getenv("VIEWPORT_WIDTH", "390")),
            random_seed=int(seed) if seed else None,
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.feed_preset not in PRESETS:
            errors.append(f"Unknown FEED_PRESET '{self.feed_preset}', expected one of {sorted(PRESETS)}")

        unknown = [s for s in self.content_sources if s not in KNOWN_SOURCES]
        if unknown:
            errors.append(f"Unknown content sources: {unknown}")
        if not self.content_sources:
            errors.append("CONTENT_SOURCES is empty")

        if "json" in self.content_sources:
            if not self.content_json_path:
                errors.append("CONTENT_JSON_PATH is required when CONTENT_SOURCES includes 'json'")
            elif not self.content_json_path.exists():
                errors.append(f"Content JSON not found: {self.content_json_path}")

        return len(errors) == 0, errors

    def feed_config(self) -> FeedConfig:
        """FeedConfig for the selected preset, sized for the configured viewport."""
        preset = PRESETS.get(self.feed_preset, PRESETS["default"])
        return preset.with_viewport(self.viewport_width)

    def ensure_directories(self):
        """Create required directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
        _config.ensure_directories()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
