"""
Tests for the CLI and console renderer.
"""

import argparse
import io
import random
import time

import pytest

from .. import tracking
from ..cli import build_parser, cmd_play, main
from ..engine_core.deck import deal
from ..engine_core.events import EventType, GameEvent
from ..games.variants import get_variant
from ..session import ConsoleRenderer, letter_faces
from ..storage import DeviceRecord, JsonFileStore
from .conftest import make_board


def play_args(store, variant="mini", seed=1, track_url=""):
    return argparse.Namespace(variant=variant, store=str(store), seed=seed, track_url=track_url)


def dealt_pairs(pair_count, seed):
    """identifier -> [position, position] for the deck cmd_play deals with this seed."""
    positions = {}
    for card in deal(pair_count, random.Random(seed)):
        positions.setdefault(card.identifier, []).append(str(card.position))
    return positions


class OkResponse:
    status_code = 200

    def raise_for_status(self):
        pass


class SlowSession:
    """Records tracked URLs only after a network-like delay."""

    def __init__(self, delay=0.2):
        self.delay = delay
        self.posts = []

    def post(self, url, json=None, timeout=None):
        time.sleep(self.delay)
        self.posts.append(url)
        return OkResponse()


class TestConsoleRenderer:

    def test_board_grid(self):
        variant = get_variant("mini")
        out = io.StringIO()
        renderer = ConsoleRenderer(variant, out=out)
        state = make_board([1, 2, 1, 2, 3, 4, 3, 4])

        renderer.handle(GameEvent(EventType.DECK_DEALT, state=state))

        lines = out.getvalue().splitlines()
        assert lines[0].split() == ["0", "1", "2", "3"]
        assert lines[1].split() == ["4", "5", "6", "7"]
        assert "Attempts: 0" in lines[2]

    def test_result_banner(self):
        variant = get_variant("classic")
        out = io.StringIO()
        renderer = ConsoleRenderer(variant, out=out, share_link=lambda: "sms:?&body=hi")
        state = make_board([1, 1])._copy_with(terminated=True, won=True, attempts=1, matched_pairs=1)

        renderer.handle(GameEvent(EventType.GAME_WON, state=state))

        text = out.getvalue()
        assert variant.win_title in text
        assert variant.win_message in text
        assert "Share: sms:?&body=hi" in text

    def test_locked_screen(self):
        variant = get_variant("mini")
        out = io.StringIO()
        ConsoleRenderer(variant, out=out).handle(GameEvent(EventType.DEVICE_LOCKED))

        assert variant.locked_message in out.getvalue()

    def test_letter_faces(self):
        faces = letter_faces(10)
        assert faces[1] == "A"
        assert faces[10] == "J"
        assert len(set(faces.values())) == 10


class TestPlayCommand:

    def test_quit(self, tmp_path, capsys):
        inputs = iter(["abc", "0", "q"])
        cmd_play(play_args(tmp_path / "device.json"), input_fn=lambda _: next(inputs))

        out = capsys.readouterr().out
        assert "Enter a number" in out
        assert "Bye!" in out

    def test_locked_device(self, tmp_path, capsys):
        store_path = tmp_path / "device.json"
        DeviceRecord(JsonFileStore(store_path)).lock()

        def no_input(_):
            raise AssertionError("locked device should not prompt")

        cmd_play(play_args(store_path), input_fn=no_input)

        assert get_variant("mini").locked_message in capsys.readouterr().out

    def test_eof_ends_game(self, tmp_path):
        def eof(_):
            raise EOFError

        cmd_play(play_args(tmp_path / "device.json"), input_fn=eof)


class TestFullConsoleGames:
    """Complete games through cmd_play."""

    def test_win_delivers_tracking_before_exit(self, tmp_path, capsys, monkeypatch):
        session = SlowSession()
        monkeypatch.setattr(tracking.requests, "Session", lambda: session)
        moves = iter([p for pair in dealt_pairs(8, 3).values() for p in pair])

        cmd_play(
            play_args(tmp_path / "device.json", variant="classic", seed=3, track_url="http://kiosk.test"),
            input_fn=lambda _: next(moves),
            sleep=lambda _: None,
        )

        out = capsys.readouterr().out
        classic = get_variant("classic")
        assert classic.win_title in out
        assert "8/8 pairs in 8 attempts" in out
        assert "Share: sms:" in out
        assert session.posts == ["http://kiosk.test/api/track/win"]

    def test_loss_locks_device(self, tmp_path, capsys, monkeypatch):
        session = SlowSession()
        monkeypatch.setattr(tracking.requests, "Session", lambda: session)
        pairs = dealt_pairs(4, 1)
        a, b = pairs[1][0], pairs[2][0]
        moves = iter([a, b] * 6)
        delays = []
        store_path = tmp_path / "device.json"

        cmd_play(
            play_args(store_path, variant="mini", seed=1, track_url="http://kiosk.test"),
            input_fn=lambda _: next(moves),
            sleep=delays.append,
        )

        out = capsys.readouterr().out
        mini = get_variant("mini")
        assert mini.lose_title in out
        assert mini.lose_message in out
        assert "Share:" not in out
        assert delays == [mini.mismatch_delay] * 6
        assert session.posts == ["http://kiosk.test/api/track/play"]
        assert DeviceRecord(JsonFileStore(store_path)).is_locked()


class TestDeviceCommands:

    def test_stats_and_reset(self, tmp_path, capsys):
        store_path = tmp_path / "device.json"
        record = DeviceRecord(JsonFileStore(store_path))
        record.increment_play_count()
        record.lock()

        main(["stats", "--variant", "mini", "--store", str(store_path)])
        out = capsys.readouterr().out
        assert "Plays: 1" in out
        assert "Locked: yes" in out

        main(["reset-device", "--variant", "mini", "--store", str(store_path)])
        assert not record.is_locked()

    def test_unknown_variant_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["stats", "--variant", "mega", "--store", str(tmp_path / "d.json")])

    def test_no_command_exits(self):
        with pytest.raises(SystemExit):
            main([])

    def test_parser_defaults(self):
        args = build_parser().parse_args(["serve", "--port", "8080"])
        assert args.port == 8080
