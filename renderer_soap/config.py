"""Configuration loader for renderer-soap."""

from __future__ import annotations

from configparser import ConfigParser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from . import constants

DEFAULT_DEVICE_URL = (
    f"http://{constants.DEFAULT_DEVICE_HOST}:{constants.DEFAULT_DEVICE_PORT}"
)


@dataclass(slots=True)
class DeviceConfig:
    url: str = DEFAULT_DEVICE_URL
    rendering_control_path: str = constants.RENDERING_CONTROL_PATH
    av_transport_path: str = constants.AV_TRANSPORT_PATH
    instance_id: int = constants.DEFAULT_INSTANCE_ID
    channel: str = constants.DEFAULT_CHANNEL
    request_timeout_seconds: Optional[float] = None  # None keeps the aiohttp default


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    path: Optional[Path] = None
    log_network: bool = False


@dataclass(slots=True)
class RendererConfig:
    device: DeviceConfig
    logging: LoggingConfig
    raw: ConfigParser = field(default_factory=ConfigParser)
    path: Path = constants.DEFAULT_CONFIG_PATH


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        timeout = float(value)
    except ValueError:
        return None
    return timeout if timeout > 0 else None


def load_config(path: Optional[Path] = None) -> RendererConfig:
    """Load configuration from disk, applying defaults where necessary."""

    config_path = path or constants.DEFAULT_CONFIG_PATH
    parser = ConfigParser()
    parser.read_dict(
        {
            "device": {
                "url": DEFAULT_DEVICE_URL,
                "rendering_control_path": constants.RENDERING_CONTROL_PATH,
                "av_transport_path": constants.AV_TRANSPORT_PATH,
                "instance_id": str(constants.DEFAULT_INSTANCE_ID),
                "channel": constants.DEFAULT_CHANNEL,
                "request_timeout_seconds": "",
            },
            "logging": {
                "level": "INFO",
                "path": "",
                "log_network": "false",
            },
        }
    )

    if config_path.exists():
        parser.read(config_path)

    device_defaults = DeviceConfig()

    try:
        instance_id = parser.getint(
            "device", "instance_id", fallback=device_defaults.instance_id
        )
    except ValueError:
        instance_id = device_defaults.instance_id

    device = DeviceConfig(
        url=parser.get("device", "url").strip(),
        rendering_control_path=parser.get("device", "rendering_control_path").strip(),
        av_transport_path=parser.get("device", "av_transport_path").strip(),
        instance_id=max(0, instance_id),
        channel=parser.get("device", "channel", fallback=device_defaults.channel),
        request_timeout_seconds=_parse_timeout(
            parser.get("device", "request_timeout_seconds", fallback=None)
        ),
    )

    log_path_value = parser.get("logging", "path", fallback="").strip()
    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback="INFO"),
        path=Path(log_path_value).expanduser() if log_path_value else None,
        log_network=parser.getboolean("logging", "log_network", fallback=False),
    )

    return RendererConfig(
        device=device,
        logging=logging_config,
        raw=parser,
        path=config_path,
    )


def save_config(config: RendererConfig) -> None:
    """Persist the current configuration to disk."""

    config_path = config.path
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as stream:
        config.raw.write(stream)
