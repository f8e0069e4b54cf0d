"""Configuration loader and dataclasses for voyage tracker settings."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union, get_args, get_origin, get_type_hints

import yaml

from voyage_tracker.core.errors import InvalidInputError


DEFAULT_CONFIG_FILE = Path("config.yml")


@dataclass
class StorageConfig:
    """Where the voyage data file lives."""
    data_file: str = "data.yml"


@dataclass
class MailConfig:
    """IMAP account that receives tracker and relay mail."""
    server: Optional[str] = None
    port: Optional[int] = None
    use_ssl: bool = True
    account: Optional[str] = None
    password: Optional[str] = None
    mailbox: str = "INBOX"
    tracker_address: Optional[str] = None
    relay_address: Optional[str] = None


@dataclass
class ForwardConfig:
    """SMTP settings for forwarding tracker and relay mail to followers."""
    smtp_server: Optional[str] = None
    smtp_port: int = 25
    from_address: Optional[str] = None
    to_address: Optional[str] = None


@dataclass
class RenderConfig:
    """Defaults for generated map documents."""
    time_info: bool = False
    leg_folders: bool = False


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class TrackerConfig:
    """Complete voyage tracker configuration."""
    storage: StorageConfig = field(default_factory=StorageConfig)
    mail: MailConfig = field(default_factory=MailConfig)
    forward: ForwardConfig = field(default_factory=ForwardConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackerConfig":
        data = data or {}
        try:
            return cls(
                storage=StorageConfig(**(data.get('storage') or {})),
                mail=MailConfig(**(data.get('mail') or {})),
                forward=ForwardConfig(**(data.get('forward') or {})),
                render=RenderConfig(**(data.get('render') or {})),
                logging=LoggingConfig(**(data.get('logging') or {})),
            )
        except TypeError as exc:
            raise InvalidInputError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def from_yaml(cls, path: Path) -> "TrackerConfig":
        """Load configuration from a YAML file."""
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        if data is not None and not isinstance(data, dict):
            raise InvalidInputError(f"Configuration file {path} does not hold a mapping")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_yaml(self, path: Path) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)

    def set_value(self, key: str, raw: str) -> None:
        """Set a dotted ``section.field`` key, coercing ``raw`` to the field's type.

        Args:
            key: e.g. ``mail.server`` or ``render.time_info``.
            raw: Value as typed on the command line.
        """
        section_name, _, field_name = key.partition('.')
        section = getattr(self, section_name, None) if field_name else None
        if section is None or not hasattr(section, '__dataclass_fields__'):
            raise InvalidInputError(f"Unknown configuration key {key!r}")
        if field_name not in {f.name for f in fields(section)}:
            raise InvalidInputError(f"Unknown configuration key {key!r}")
        annotation = get_type_hints(type(section))[field_name]
        setattr(section, field_name, _coerce(raw, annotation, key))


_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


def _coerce(raw: str, annotation: Any, key: str) -> Any:
    optional = get_origin(annotation) is Union and type(None) in get_args(annotation)
    if optional:
        if raw.lower() in {'', 'none', 'null'}:
            return None
        annotation = next(arg for arg in get_args(annotation) if arg is not type(None))
    if annotation is bool:
        lowered = raw.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise InvalidInputError(f"{key} expects a boolean, got {raw!r}")
    if annotation is int:
        try:
            return int(raw)
        except ValueError:
            raise InvalidInputError(f"{key} expects an integer, got {raw!r}") from None
    return raw


def load_config(config_path: Optional[Path] = None) -> TrackerConfig:
    """Load configuration from ``config_path``, falling back to defaults.

    Args:
        config_path: Path to the config file. If None, uses ``config.yml`` in
            the working directory.

    Returns:
        The TrackerConfig instance.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_FILE
    if config_path.exists():
        return TrackerConfig.from_yaml(config_path)
    return TrackerConfig()
