"""
Configuration management for photo-organizer.

Loads configuration from a YAML file and environment variables. Every
setting has a default, so a config file is optional.

Example config (photo_organizer.yaml):

    media:
      image_extensions: [jpg, jpeg, png, gif, bmp, tif, tiff]
      video_extensions: [mp4, mov, avi, mkv, vob, mpg, wmv, heic]
    store:
      directory_name: media_index
    layout:
      duplicate_prefix: duplication
    logging:
      level: WARNING
      file: ~/.local/state/photo-organizer/po.log
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from photo_organizer.models.enums import IMAGE_EXTENSIONS, VIDEO_EXTENSIONS, normalize_extensions
from photo_organizer.paths import DUPLICATE_PREFIX
from photo_organizer.utils.logging import DEFAULT_FORMAT

logger = logging.getLogger(__name__)

# Default locations to search for a config file
CONFIG_SEARCH_PATHS = [
    Path("photo_organizer.yaml"),
    Path.home() / ".config" / "photo-organizer" / "config.yaml",
]


@dataclass
class MediaConfig:
    """Extension allowlists; the two lists must not overlap."""
    image_extensions: List[str] = field(default_factory=lambda: sorted(IMAGE_EXTENSIONS))
    video_extensions: List[str] = field(default_factory=lambda: sorted(VIDEO_EXTENSIONS))

    def __post_init__(self):
        images = normalize_extensions(self.image_extensions)
        videos = normalize_extensions(self.video_extensions)
        overlap = images & videos
        if overlap:
            raise ValueError(
                f"Extensions listed as both image and video: {', '.join(sorted(overlap))}"
            )
        self.image_extensions = sorted(images)
        self.video_extensions = sorted(videos)

    @property
    def all_extensions(self) -> frozenset:
        return frozenset(self.image_extensions) | frozenset(self.video_extensions)


@dataclass
class StoreConfig:
    """Where the dedup store lives under the target directory."""
    directory_name: str = "media_index"


@dataclass
class LayoutConfig:
    """Target tree naming."""
    duplicate_prefix: str = DUPLICATE_PREFIX


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "WARNING"
    format: str = DEFAULT_FORMAT
    file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""
    media: MediaConfig = field(default_factory=MediaConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary; missing sections keep their defaults."""
        return cls(
            media=MediaConfig(**(data.get("media") or {})),
            store=StoreConfig(**(data.get("store") or {})),
            layout=LayoutConfig(**(data.get("layout") or {})),
            logging=LoggingConfig(**(data.get("logging") or {})),
        )

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> "Config":
        """
        Load configuration from a YAML file.

        Args:
            config_path: Specific config file. If None, searches the default
                         locations and falls back to built-in defaults.

        Returns:
            Config instance with environment overrides applied

        Raises:
            FileNotFoundError: If config_path is given but does not exist
        """
        if config_path:
            config_file = Path(config_path).expanduser()
            if not config_file.exists():
                raise FileNotFoundError(f"Config file not found: {config_file}")
        else:
            config_file = next((path for path in CONFIG_SEARCH_PATHS if path.exists()), None)

        if config_file:
            logger.info("Loading config from %s", config_file)
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            config = cls.from_dict(data)
        else:
            config = cls()

        config._apply_env_overrides()
        return config

    def store_dir(self, target_dir: Union[str, Path]) -> Path:
        """Store directory for a target directory."""
        return Path(target_dir) / self.store.directory_name

    def _apply_env_overrides(self):
        """Apply environment variable overrides."""
        if env_level := os.getenv("PHOTO_ORGANIZER_LOG_LEVEL"):
            self.logging.level = env_level

        if env_store_dir := os.getenv("PHOTO_ORGANIZER_STORE_DIR"):
            self.store.directory_name = env_store_dir
