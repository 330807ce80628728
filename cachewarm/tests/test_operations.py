import contextlib
import logging
from unittest import mock

import pytest

from cachewarm.args import Arguments
from cachewarm.config import Config, WarmupConfig
from cachewarm.errors import NotMountedError, RemoteFailure
from cachewarm.operations import WarmupOperations
from cachewarm.protocol import FillCacheRequest


class FakeChannel:
    def __init__(self, status=b"\x00"):
        self.frames = []
        self.closed = False
        self._status = status

    def write(self, data):
        self.frames.append(data)
        return len(data)

    def read(self, size):
        return self._status

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True


@contextlib.contextmanager
def mounted(root, channel):
    with mock.patch("cachewarm.operations.resolve_mount_root") as mock_resolve:
        mock_resolve.return_value = root

        with mock.patch("cachewarm.operations.ControlChannel.open") as mock_open:
            mock_open.return_value = channel

            yield mock_resolve, mock_open


def test_nothing_to_warm_up(caplog):
    caplog.set_level(logging.INFO, logger="cachewarm")

    ops = WarmupOperations(Arguments.parse([]), Config())

    with mock.patch("cachewarm.operations.resolve_mount_root") as mock_resolve:
        assert ops.run() == 0

    assert not mock_resolve.called
    assert "nothing to warm up" in caplog.text


def test_warm_up_paths(caplog):
    caplog.set_level(logging.INFO, logger="cachewarm")

    channel = FakeChannel()
    args = Arguments.parse(["-p", "8", "/mnt/jfs/x", "/mnt/jfs/y", "/other/z"])

    with mounted("/mnt/jfs", channel) as (mock_resolve, mock_open):
        assert WarmupOperations(args, Config()).run() == 0

    mock_resolve.assert_called_once_with("/mnt/jfs/x")
    mock_open.assert_called_once_with("/mnt/jfs")

    assert [FillCacheRequest.decode(f) for f in channel.frames] == [
        FillCacheRequest(("x", "y"), 8, False)
    ]
    assert channel.closed

    assert "warmed up 2 paths" in caplog.text
    assert "skipped 1 paths" in caplog.text


def test_paths_from_file(tmp_path):
    (tmp_path / "list").write_text("/mnt/jfs/a\n\n/mnt/jfs/b\n")

    channel = FakeChannel()
    args = Arguments.parse(["--file", str(tmp_path / "list")])

    with mounted("/mnt/jfs", channel):
        WarmupOperations(args, Config()).run()

    assert FillCacheRequest.decode(channel.frames[0]).paths == ("a", "b")


def test_config_defaults_used():
    channel = FakeChannel()
    config = Config(warmup=WarmupConfig(threads=3, background=True, batch_size=1))

    with mounted("/mnt/jfs", channel):
        WarmupOperations(Arguments.parse(["/mnt/jfs/a", "/mnt/jfs/b"]), config).run()

    requests = [FillCacheRequest.decode(f) for f in channel.frames]

    assert requests == [
        FillCacheRequest(("a",), 3, True),
        FillCacheRequest(("b",), 3, True),
    ]


def test_arguments_override_config():
    channel = FakeChannel()
    config = Config(warmup=WarmupConfig(threads=3))

    with mounted("/mnt/jfs", channel):
        args = Arguments.parse(["-p", "7", "-b", "/mnt/jfs/a"])
        WarmupOperations(args, config).run()

    assert FillCacheRequest.decode(channel.frames[0]) == FillCacheRequest(
        ("a",), 7, True
    )


def test_channel_closed_on_failure():
    channel = FakeChannel(status=b"\x03")

    with mounted("/mnt/jfs", channel):
        with pytest.raises(RemoteFailure):
            WarmupOperations(Arguments.parse(["/mnt/jfs/a"]), Config()).run()

    assert channel.closed


def test_not_mounted_is_fatal():
    error = NotMountedError("path /x is not inside a mounted instance")

    with mock.patch("cachewarm.operations.resolve_mount_root", side_effect=error):
        with mock.patch("cachewarm.operations.ControlChannel.open") as mock_open:
            with pytest.raises(NotMountedError):
                args = Arguments.parse(["/x"])
                WarmupOperations(args, Config()).run()

    assert not mock_open.called


def test_real_control_file_background(tmp_path):
    (tmp_path / "dir").mkdir()
    (tmp_path / ".jfs.control").touch()

    args = Arguments.parse(["-b", str(tmp_path / "dir"), str(tmp_path / "file")])

    with mock.patch("cachewarm.operations.resolve_mount_root") as mock_resolve:
        mock_resolve.return_value = str(tmp_path)

        assert WarmupOperations(args, Config()).run() == 0

    frame = (tmp_path / ".jfs.control").read_bytes()

    assert FillCacheRequest.decode(frame) == FillCacheRequest(
        ("dir", "file"), 50, True
    )


@pytest.mark.mount
def test_warm_up_real_mount(mount_point):
    args = Arguments.parse([mount_point])

    assert WarmupOperations(args, Config()).run() == 0


def test_no_background_overrides_config():
    channel = FakeChannel()
    config = Config(warmup=WarmupConfig(background=True))

    with mounted("/mnt/jfs", channel):
        args = Arguments.parse(["--no-background", "/mnt/jfs/a"])
        WarmupOperations(args, config).run()

    assert not FillCacheRequest.decode(channel.frames[0]).background
