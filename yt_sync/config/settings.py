"""
Configuration management for yt-sync

This module handles loading, validation, and bootstrapping of application
settings from a TOML file. It provides a centralized configuration system
shared by the lister, the downloader and the synchronizer.

The configuration is organized into logical sections using dataclasses:
- Playlist entries ([[items]]: remote id and local location)
- Download preferences (format selector, audio codec, match mode, URLs)
- Sync behavior (whether a failing playlist stops the run)
- Logging options (level, file output, rotation, console formatting)

The configuration file lives at ~/.config/yt-sync/config.toml unless an
explicit path is given. When the file does not exist a default one with two
placeholder playlists is written, so the user has something to edit.
"""

from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, asdict

import tomli
import tomli_w

from ..exceptions import ConfigError
from ..utils.helpers import ACODECS, audio_extension
from ..utils.logger import get_logger, parse_size


logger = get_logger(__name__)

# Default configuration location, relative to the user's home directory
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "yt-sync" / "config.toml"

# Membership policies understood by the synchronizer
MATCH_MODES = ('exact', 'contains')


@dataclass(frozen=True)
class PlaylistRef:
    """
    A remote playlist and the local directory it syncs to

    Loaded once from configuration at process start and never modified
    during a run.

    Attributes:
        id: Remote playlist identifier
        location: Target directory as written in the configuration
    """
    id: str
    location: str

    @property
    def path(self) -> Path:
        """Target directory with user home expansion applied"""
        return Path(self.location).expanduser()


@dataclass
class DownloadConfig:
    """
    Download configuration settings and preferences

    Controls how items are listed and fetched through yt-dlp and how
    already-downloaded files are recognized on disk.
    """
    format: str = "bestaudio"
    audio_format: str = "opus"
    embed_thumbnail: bool = True
    quiet: bool = True
    match_mode: str = "exact"  # exact, contains
    playlist_url_template: str = "https://www.youtube.com/playlist?list={id}"
    video_url_template: str = "https://www.youtube.com/watch?v={id}"


@dataclass
class SyncConfig:
    """
    Synchronization behavior across configured playlists

    continue_on_error keeps processing remaining playlists when one of
    them cannot be listed or its directory cannot be created.
    """
    continue_on_error: bool = False


@dataclass
class LoggingConfig:
    """
    Logging configuration and output settings

    Controls application logging behavior including log levels, file output,
    rotation, and console formatting.
    """
    level: str = "INFO"
    file: str = ""
    max_size: str = "10MB"
    backup_count: int = 3
    console_output: bool = True
    colored_output: bool = True


def create_default_items() -> List[Dict[str, str]]:
    """
    Build the placeholder playlist entries written on first run

    Returns:
        List of two item tables with dummy ids and locations
    """
    return [
        {
            'id': "a" * 34,
            'location': "/home/user/Downloads/file_output",
        },
        {
            'id': "b" * 34,
            'location': "/home/user/Downloads/file_output2",
        },
    ]


class Settings:
    """
    Main settings class that manages all configuration

    Loads the TOML file (creating a default one if needed), validates the
    playlist entries and applies the optional sections on top of the
    dataclass defaults.

    The class handles:
    - Seeding a default configuration file on first run
    - Parsing TOML into playlist references and config sections
    - Validating entries and values
    - Saving configuration back to a file
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize settings from a config file

        Args:
            config_path: Path to the config file, if None uses DEFAULT_CONFIG_PATH

        Raises:
            ConfigError: If the file cannot be created, read, parsed or validated
        """
        self.config_path = Path(config_path).expanduser() if config_path else DEFAULT_CONFIG_PATH
        self.created_default = False

        # Initialize all configuration objects with default values
        self.items: List[PlaylistRef] = []
        self.download = DownloadConfig()
        self.sync = SyncConfig()
        self.logging = LoggingConfig()

        if not self.config_path.exists():
            self._write_default_config()
            self.created_default = True

        self._load_config()
        self.validate()

    def _write_default_config(self) -> None:
        """
        Write a configuration file containing placeholder playlists

        Raises:
            ConfigError: If the directory or file cannot be written
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'wb') as f:
                tomli_w.dump({'items': create_default_items()}, f)
        except OSError as e:
            raise ConfigError(
                f"Failed to create default config at {self.config_path}: {e}",
                details={'file_path': str(self.config_path), 'original_error': e}
            ) from e

        logger.console_info(f"Created default config at {self.config_path}")

    def _load_config(self) -> None:
        """
        Load configuration from the TOML file

        Raises:
            ConfigError: If the file cannot be read or is not valid TOML
        """
        try:
            with open(self.config_path, 'rb') as f:
                config_data = tomli.load(f)
        except OSError as e:
            raise ConfigError(
                f"Failed to read config from {self.config_path}: {e}",
                details={'file_path': str(self.config_path), 'original_error': e}
            ) from e
        except tomli.TOMLDecodeError as e:
            raise ConfigError(
                f"Invalid TOML in {self.config_path}: {e}",
                details={'file_path': str(self.config_path), 'original_error': e}
            ) from e

        self.items = self._parse_items(config_data.get('items', []))
        self._apply_config(config_data)

        logger.console_info(f"Loaded config at {self.config_path}")

    def _parse_items(self, raw_items: Any) -> List[PlaylistRef]:
        """
        Convert the [[items]] array into playlist references

        Args:
            raw_items: Value of the 'items' key

        Returns:
            List of PlaylistRef in file order

        Raises:
            ConfigError: If the array or one of its entries is malformed
        """
        if not isinstance(raw_items, list):
            raise ConfigError(
                f"'items' must be an array of tables in {self.config_path}",
                details={'file_path': str(self.config_path)}
            )

        playlists = []
        for index, entry in enumerate(raw_items, 1):
            if not isinstance(entry, dict):
                raise ConfigError(
                    f"Entry {index} in 'items' is not a table",
                    details={'file_path': str(self.config_path), 'index': index}
                )

            # Both keys are required and must be non-empty strings
            for key in ('id', 'location'):
                value = entry.get(key)
                if not isinstance(value, str) or not value.strip():
                    raise ConfigError(
                        f"Entry {index} in 'items' is missing '{key}'",
                        details={'file_path': str(self.config_path), 'index': index}
                    )

            playlists.append(PlaylistRef(id=entry['id'].strip(), location=entry['location']))

        return playlists

    def _apply_config(self, config_data: Dict[str, Any]) -> None:
        """
        Apply optional sections to dataclass instances

        Only attributes that exist on the corresponding dataclass are
        updated; unknown keys are ignored with a debug message.

        Args:
            config_data: Dictionary containing configuration sections
        """
        config_mapping = {
            'download': self.download,
            'sync': self.sync,
            'logging': self.logging,
        }

        for section_name, section_data in config_data.items():
            if section_name in config_mapping and isinstance(section_data, dict):
                config_obj = config_mapping[section_name]
                for key, value in section_data.items():
                    if hasattr(config_obj, key):
                        setattr(config_obj, key, value)
                    else:
                        logger.debug(f"Ignoring unknown setting {section_name}.{key}")

    def validate(self) -> None:
        """
        Validate current configuration

        Collects every problem before raising so the user can fix the file
        in one go.

        Raises:
            ConfigError: If any value is invalid
        """
        errors = []

        if self.download.match_mode not in MATCH_MODES:
            errors.append(f"Invalid match_mode: {self.download.match_mode} (expected one of {', '.join(MATCH_MODES)})")

        # 'best' keeps the source extension, so downloaded names are unpredictable
        try:
            audio_extension(self.download.audio_format)
        except ValueError:
            errors.append(
                f"Invalid audio_format: {self.download.audio_format} "
                f"(expected one of {', '.join(ACODECS)})"
            )

        for key in ('playlist_url_template', 'video_url_template'):
            template = getattr(self.download, key)
            if not isinstance(template, str) or '{id}' not in template:
                errors.append(f"{key} must contain an {{id}} placeholder")

        if not isinstance(self.sync.continue_on_error, bool):
            errors.append("continue_on_error must be true or false")

        try:
            parse_size(str(self.logging.max_size))
        except ValueError:
            errors.append(f"Invalid logging max_size: {self.logging.max_size}")

        if errors:
            raise ConfigError(
                "Configuration validation errors:\n" + "\n".join(f"  - {e}" for e in errors),
                details={'file_path': str(self.config_path), 'errors': errors}
            )

    def get_config_directory(self) -> Path:
        """
        Get the directory holding the configuration file

        Returns:
            Path object for the configuration directory
        """
        return self.config_path.parent

    def save_config(self, path: Optional[Union[str, Path]] = None) -> None:
        """
        Save current configuration to file

        Args:
            path: Custom path to save config, defaults to the loaded config path

        Raises:
            ConfigError: If the configuration cannot be saved
        """
        path = Path(path) if path else self.config_path

        config_data = {
            'items': [asdict(item) for item in self.items],
            'download': asdict(self.download),
            'sync': asdict(self.sync),
            'logging': asdict(self.logging),
        }

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'wb') as f:
                tomli_w.dump(config_data, f)
        except OSError as e:
            raise ConfigError(
                f"Failed to save config to {path}: {e}",
                details={'file_path': str(path), 'original_error': e}
            ) from e

    def __str__(self) -> str:
        """
        String representation of settings

        Returns:
            String summary of configuration
        """
        sections = [
            f"Playlists: {len(self.items)}",
            f"Audio: {self.download.audio_format}",
            f"Match: {self.download.match_mode}",
            f"Continue on error: {self.sync.continue_on_error}",
        ]
        return f"Settings({', '.join(sections)})"


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from a configuration file

    Args:
        config_path: Optional path to a specific config file

    Returns:
        Settings instance built from that file
    """
    return Settings(config_path)
