#!/usr/bin/env python3
"""Command line host for the voice music player playback engine.

Each invocation runs a single engine call for one user, prints the outcome as
JSON on stdout and exits. Logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from voice_music_player.domain.playback.value_objects import TrackReference
from voice_music_player.domain.shared.exceptions import DomainError
from voice_music_player.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from voice_music_player.config.container import Container

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"

CommandHandler = Callable[["Container", argparse.Namespace], Awaitable[dict[str, Any]]]


def _track_reference(value: str) -> TrackReference:
    try:
        return TrackReference(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _offset_ms(value: str) -> int:
    try:
        offset = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid offset: {value!r}") from e
    if offset < 0:
        raise argparse.ArgumentTypeError(ErrorMessages.NEGATIVE_OFFSET)
    return offset


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger(__name__).warning(
            "Could not load %s, falling back to basic config", _LOGGING_CONFIG_PATH
        )

    logging.getLogger().setLevel(resolved_level)


# === Subcommands ===


async def _start_favorites(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    from voice_music_player.application.commands.start_playback import StartFavoritesCommand

    result = await container.start_playback_handler.handle(
        StartFavoritesCommand(user_id=args.user, access_token=args.token)
    )
    return result.as_dict()


async def _start_stream(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    from voice_music_player.application.commands.start_playback import StartStreamCommand

    result = await container.start_playback_handler.handle(
        StartStreamCommand(user_id=args.user, access_token=args.token)
    )
    return result.as_dict()


async def _next(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    result = await container.playback_session.next_track(args.user, auth_token=args.token)
    return result.as_dict()


async def _previous(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    result = await container.playback_session.previous_track(args.user)
    return result.as_dict()


async def _loop(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    enabled = args.state == "on"
    await container.playback_session.set_loop(args.user, enabled)
    return {"user_id": args.user, "looping": enabled}


async def _shuffle(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    enabled = args.state == "on"
    await container.playback_session.set_shuffle(args.user, enabled)
    return {"user_id": args.user, "shuffle": enabled}


async def _resume(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    point = await container.playback_session.resume(args.user)
    if point is None:
        return {"status": "empty_queue"}
    return {"status": "resumed", **point.model_dump(mode="json")}


async def _start_over(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    result = await container.playback_session.start_over(args.user)
    return result.as_dict()


async def _played(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    position = await container.playback_session.update_position(args.user, args.reference)
    return {"status": "position_updated", "track": str(args.reference), "position": position}


async def _pause(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    position = await container.playback_session.remember_offset_and_position(
        args.user, args.reference, args.offset_ms
    )
    return {
        "status": "offset_remembered",
        "track": str(args.reference),
        "position": position,
        "offset_ms": args.offset_ms,
    }


async def _status(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    state = await container.playback_session.get_state(args.user)
    return state.model_dump(mode="json")


async def _playable(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    from voice_music_player.application.queries.resolve_playable import ResolvePlayableQuery

    track = await container.resolve_playable_handler.handle(
        ResolvePlayableQuery(reference=args.reference, offset_ms=args.offset_ms)
    )
    return track.model_dump(mode="json")


async def _like(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    from voice_music_player.application.commands.like_track import LikeTrackCommand

    result = await container.like_track_handler.handle(
        LikeTrackCommand(user_id=args.user, reference=args.reference, access_token=args.token)
    )
    return result.as_dict()


async def _follow(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    from voice_music_player.application.commands.follow_artist import FollowArtistCommand

    result = await container.follow_artist_handler.handle(
        FollowArtistCommand(user_id=args.user, reference=args.reference, access_token=args.token)
    )
    return result.as_dict()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voice-music-player",
        description="Drive a listener's playback session from the command line.",
    )
    parser.add_argument("--user", required=True, help="voice platform user ID")
    parser.add_argument("--token", default=None, help="catalog OAuth access token of the user")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("favorites", help="start playing the user's liked tracks").set_defaults(
        handler=_start_favorites, needs_token=True
    )
    sub.add_parser("stream", help="start playing the user's activity stream").set_defaults(
        handler=_start_stream, needs_token=True
    )
    sub.add_parser("next", help="advance to the next track").set_defaults(handler=_next)
    sub.add_parser("previous", help="step back one track").set_defaults(handler=_previous)

    loop = sub.add_parser("loop", help="turn looping on or off")
    loop.add_argument("state", choices=("on", "off"))
    loop.set_defaults(handler=_loop)

    shuffle = sub.add_parser("shuffle", help="turn the shuffle flag on or off")
    shuffle.add_argument("state", choices=("on", "off"))
    shuffle.set_defaults(handler=_shuffle)

    sub.add_parser("resume", help="show the bookmarked track and offset").set_defaults(
        handler=_resume
    )
    sub.add_parser("start-over", help="jump back to the first track").set_defaults(
        handler=_start_over
    )
    sub.add_parser("status", help="print the stored playback session").set_defaults(
        handler=_status
    )

    playable = sub.add_parser("playable", help="resolve a track reference to a stream URL")
    playable.add_argument("reference", type=_track_reference, help="track reference (catalog URI)")
    playable.add_argument("--offset-ms", type=_offset_ms, default=0)
    playable.set_defaults(handler=_playable)

    played = sub.add_parser("played", help="record that the player started a queued track")
    played.add_argument("reference", type=_track_reference)
    played.set_defaults(handler=_played)

    pause = sub.add_parser("pause", help="bookmark the playing track and the offset inside it")
    pause.add_argument("reference", type=_track_reference)
    pause.add_argument("--offset-ms", type=_offset_ms, required=True)
    pause.set_defaults(handler=_pause)

    like = sub.add_parser("like", help="add a track to the user's favorites")
    like.add_argument("reference", type=_track_reference)
    like.set_defaults(handler=_like, needs_token=True)

    follow = sub.add_parser("follow", help="follow the uploader of a track")
    follow.add_argument("reference", type=_track_reference)
    follow.set_defaults(handler=_follow, needs_token=True)

    return parser


async def run(container: Container, args: argparse.Namespace) -> dict[str, Any]:
    """Run one subcommand against an initialized container and release it afterwards."""
    handler: CommandHandler = args.handler
    await container.initialize()
    try:
        return await handler(container, args)
    finally:
        await container.shutdown()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "needs_token", False) and not args.token:
        parser.error(f"'{args.command}' requires --token")

    from voice_music_player.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info(LogTemplates.CLI_STARTING, args.command, args.user, settings.environment)

    from voice_music_player.config.container import create_container

    container = create_container(settings)

    try:
        result = asyncio.run(run(container, args))
    except DomainError as e:
        logger.error(LogTemplates.CLI_DOMAIN_ERROR, e.message, e.code)
        print(json.dumps({"error": e.as_dict()}, indent=2))
        return 1
    except Exception as e:
        logger.exception(LogTemplates.CLI_FATAL_ERROR, e)
        return 1

    print(json.dumps(result, indent=2))
    return 0


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
