"""
Flashka CLI - Command-line interface for the kiosk.

Usage:
    flashka play [--variant classic]    Play a game in the terminal
    flashka serve [--port 3000]         Run the static/admin server
    flashka shuffle-images              Shuffle image_1..image_N.png in place
    flashka reset-device                Clear this device's lock flag
    flashka stats                       Show this device's play count
"""

import argparse
import logging
import random
import sys
import time

from .config import Config, configure_logging

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Flashka - Memory Match Kiosk",
        prog="flashka",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: FLASHKA_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--variant", default=Config.VARIANT, help="Game variant")
    play_parser.add_argument("--store", default=Config.STORE_PATH, help="Device record file")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible deck")
    play_parser.add_argument("--track-url", default=Config.TRACK_URL, help="Tracking server base URL")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the static/admin server")
    serve_parser.add_argument("--host", default=Config.HOST)
    serve_parser.add_argument("--port", type=int, default=Config.PORT)

    # Shuffle command
    shuffle_parser = subparsers.add_parser("shuffle-images", help="Shuffle numbered images")
    shuffle_parser.add_argument("--public-dir", default=Config.PUBLIC_DIR)
    shuffle_parser.add_argument("--count", type=int, default=Config.SHUFFLE_IMAGE_COUNT)

    # Device commands
    reset_parser = subparsers.add_parser("reset-device", help="Clear the lock flag")
    reset_parser.add_argument("--variant", default=Config.VARIANT)
    reset_parser.add_argument("--store", default=Config.STORE_PATH)
    reset_parser.add_argument("--clear-plays", action="store_true", help="Also zero the play counter")

    stats_parser = subparsers.add_parser("stats", help="Show the device record")
    stats_parser.add_argument("--variant", default=Config.VARIANT)
    stats_parser.add_argument("--store", default=Config.STORE_PATH)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    commands = {
        "play": cmd_play,
        "serve": cmd_serve,
        "shuffle-images": cmd_shuffle_images,
        "reset-device": cmd_reset_device,
        "stats": cmd_stats,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        command(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


def _device_record(args):
    from .games.variants import get_variant
    from .storage import DeviceRecord, JsonFileStore

    variant = get_variant(args.variant)
    return DeviceRecord(JsonFileStore(args.store), prefix=variant.storage_prefix)


def cmd_play(args, input_fn=input, sleep=time.sleep):
    """Interactive console game."""
    from .games.variants import get_variant
    from .session import BlockingScheduler, ConsoleRenderer, GameController
    from .storage import JsonFileStore
    from .tracking import HttpNotificationSink, NullSink

    variant = get_variant(args.variant)
    sink = (
        HttpNotificationSink(args.track_url, timeout=Config.TRACK_TIMEOUT_SEC)
        if args.track_url else NullSink()
    )
    controller = GameController(
        variant,
        store=JsonFileStore(args.store),
        sink=sink,
        scheduler=BlockingScheduler(sleep=sleep),
        rng=random.Random(args.seed),
        sms_recipient=Config.SMS_TO,
    )
    renderer = ConsoleRenderer(variant, share_link=lambda: controller.sms_link)
    controller.subscribe(renderer.handle)

    print(f"Flashka Memory Match - {variant.pair_count} pairs, {variant.max_attempts} attempts")
    try:
        if controller.start() is not None:
            _play_loop(controller, variant, input_fn)
    finally:
        sink.close(timeout=Config.TRACK_TIMEOUT_SEC)


def _play_loop(controller, variant, input_fn):
    while not controller.state.terminated:
        try:
            raw = input_fn("Card number (q to quit): ").strip()
        except EOFError:
            break
        if raw.lower() in ("q", "quit", "exit"):
            print("Bye!")
            break
        try:
            position = int(raw)
        except ValueError:
            print(f"Enter a number between 0 and {variant.card_count - 1}")
            continue
        result = controller.flip(position)
        if not result.success:
            print(result.error)


def cmd_serve(args):
    """Run the server with uvicorn."""
    import uvicorn

    uvicorn.run(
        "flashka.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
    )


def cmd_shuffle_images(args):
    """Shuffle numbered images on disk."""
    from .api.service import AdminService

    service = AdminService(public_dir=args.public_dir, image_count=args.count)
    try:
        order = service.shuffle_images()
    except OSError as e:
        print(f"Failed to shuffle image positions: {e}")
        sys.exit(1)

    print("Image positions shuffled successfully!")
    for index, name in enumerate(order, start=1):
        print(f"  image_{index}.png <- {name}")


def cmd_reset_device(args):
    """Clear the lock flag so the device can play again."""
    record = _device_record(args)
    record.reset(clear_plays=args.clear_plays)
    print(f"Device reset ({args.store})")


def cmd_stats(args):
    """Show the device record."""
    record = _device_record(args)
    print(f"Plays: {record.play_count()}")
    print(f"Locked: {'yes' if record.is_locked() else 'no'}")


if __name__ == "__main__":
    main()
