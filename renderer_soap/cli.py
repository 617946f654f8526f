"""Command-line interface for renderer-soap."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from . import constants
from .adapters import MediaRendererClient
from .config import RendererConfig, load_config
from .errors import RendererSoapError
from .logging import configure_logging
from .services import SeekUnit

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="renderer-soap", description="Control a UPnP media renderer over SOAP"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=constants.DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {constants.DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--url", help="Device base URL, overriding [device] url from the config"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    volume_parser = subparsers.add_parser(
        "volume", help="Print the volume, or set it when LEVEL is given"
    )
    volume_parser.add_argument("level", type=int, nargs="?", help="New volume (0-100)")

    subparsers.add_parser("play", help="Start or resume playback")
    subparsers.add_parser("pause", help="Pause playback")

    seek_parser = subparsers.add_parser("seek", help="Seek within the current media")
    seek_parser.add_argument("target", help="H:MM:SS position or track number")
    seek_parser.add_argument(
        "--unit",
        choices=[unit.value for unit in SeekUnit],
        default=SeekUnit.REL_TIME.value,
        help="Seek unit (default: REL_TIME)",
    )

    uri_parser = subparsers.add_parser("play-uri", help="Load a URI and start playback")
    uri_parser.add_argument("uri")
    uri_parser.add_argument("--metadata", default="", help="DIDL-Lite metadata")

    subparsers.add_parser("state", help="Print the transport state")
    subparsers.add_parser("position", help="Print the current position")
    subparsers.add_parser("media", help="Print the current media information")

    subparsers.add_parser(
        "show-config", help="Print the resolved configuration and exit"
    )

    return parser


async def run_command(args: argparse.Namespace, config: RendererConfig) -> int:
    async with MediaRendererClient(config.device) as client:
        if args.command == "volume":
            if args.level is None:
                print(await client.get_volume())
            else:
                await client.set_volume(args.level)
            return 0

        if args.command == "play":
            await client.play()
            return 0

        if args.command == "pause":
            await client.pause()
            return 0

        if args.command == "seek":
            await client.seek(args.target, SeekUnit(args.unit))
            return 0

        if args.command == "play-uri":
            await client.set_av_transport_uri(args.uri, args.metadata)
            await client.play()
            return 0

        if args.command == "state":
            info = await client.get_transport_info()
            print(f"{info.current_transport_state} ({info.current_transport_status})")
            return 0

        if args.command == "position":
            position = await client.get_position_info()
            print(f"track {position.track}: {position.rel_time} / {position.track_duration}")
            if position.track_uri:
                print(position.track_uri)
            return 0

        if args.command == "media":
            media = await client.get_media_info()
            print(f"tracks: {media.nr_tracks}")
            print(f"current: {media.current_uri}")
            if media.next_uri:
                print(f"next: {media.next_uri}")
            return 0

    LOGGER.error("Unknown command: %s", args.command)
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.url:
        config.device.url = args.url
        config.raw.set("device", "url", args.url)

    configure_logging(
        config.logging.level,
        log_path=config.logging.path,
        log_network=config.logging.log_network,
    )

    if args.command == "show-config":
        print(f"Configuration loaded from {config.path!s}\n")
        for section in config.raw.sections():
            print(f"[{section}]")
            for key, value in config.raw[section].items():
                print(f"{key} = {value}")
            print()
        return 0

    try:
        return asyncio.run(run_command(args, config))
    except (RendererSoapError, ValueError) as exc:
        LOGGER.error("%s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
