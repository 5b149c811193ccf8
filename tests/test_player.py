"""
Tests for PlayerProcess and NullPlayerProcess.

PlayerProcess tests run real short-lived processes (`sleep`, `true`)
in place of the decoder.
"""
import shutil
import time
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from gsfbox.api.player import PlayerProcess, NullPlayerProcess
from conftest import FakeClock

requires_coreutils = pytest.mark.skipif(
    not (shutil.which('sleep') and shutil.which('true')),
    reason='needs sleep and true executables'
)


def wait_for_exit(player, timeout=5.0):
    """Poll until the process exit is observed."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if player.poll_exit():
            return True
        time.sleep(0.01)
    return False


@requires_coreutils
class TestPlayerProcess:
    """Tests for the decoder process lifecycle."""

    def test_spawn_and_terminate(self):
        player = PlayerProcess('sleep', ())
        assert player.spawn('30')
        assert player.is_running
        assert player.current_file == '30'

        player.terminate()

        assert not player.is_running
        assert player.current_file is None

    def test_second_spawn_refused(self):
        """Only one decoder process at a time."""
        with PlayerProcess('sleep', ()) as player:
            assert player.spawn('30')
            assert not player.spawn('45')
            assert player.current_file == '30'

    def test_spawn_allowed_after_terminate(self):
        with PlayerProcess('sleep', ()) as player:
            player.spawn('30')
            player.terminate()
            assert player.spawn('30')

    def test_terminated_exit_reported_once(self):
        player = PlayerProcess('sleep', ())
        player.spawn('30')
        player.terminate()

        assert player.poll_exit()
        assert not player.poll_exit()

    def test_natural_exit_reported_once(self):
        player = PlayerProcess('true', ())
        player.spawn('track.minigsf')

        assert wait_for_exit(player)
        assert not player.is_running
        assert not player.poll_exit()

    def test_running_process_has_no_exit(self):
        with PlayerProcess('sleep', ()) as player:
            player.spawn('30')
            assert not player.poll_exit()

    def test_pause_and_resume(self):
        with PlayerProcess('sleep', ()) as player:
            player.spawn('30')

            assert player.toggle_pause() is True
            assert player.paused
            assert not player.poll_exit()

            assert player.toggle_pause() is False
            assert not player.paused

    def test_terminate_paused_process(self):
        player = PlayerProcess('sleep', ())
        player.spawn('30')
        player.pause()

        player.terminate()

        assert not player.is_running
        assert not player.paused

    def test_pause_without_process(self):
        player = PlayerProcess('sleep', ())
        assert not player.pause()
        assert not player.resume()
        assert player.toggle_pause() is False

    def test_missing_executable(self, temp_dir):
        player = PlayerProcess(str(temp_dir / 'no-such-decoder'), ())
        assert not player.spawn('track.minigsf')
        assert not player.is_running
        assert not player.poll_exit()

    def test_failed_spawn_clears_pending_exit(self, temp_dir):
        """A failed spawn after a kill does not leave an exit to react to."""
        player = PlayerProcess('sleep', ())
        player.spawn('30')
        player.terminate()

        player.executable = str(temp_dir / 'no-such-decoder')
        assert not player.spawn('track.minigsf')
        assert not player.poll_exit()

    def test_close_drops_exit_notification(self):
        player = PlayerProcess('sleep', ())
        player.spawn('30')
        player.close()
        assert not player.is_running
        assert not player.poll_exit()

    def test_terminate_without_process_is_noop(self):
        player = PlayerProcess('sleep', ())
        player.terminate()
        assert not player.poll_exit()


class TestNullPlayerProcess:
    """Tests for the simulated decoder used in mock mode."""

    def test_track_finishes_after_length(self):
        clock = FakeClock()
        player = NullPlayerProcess(track_seconds=20, clock=clock)
        player.spawn('a.minigsf')

        clock.advance(19)
        assert not player.poll_exit()
        clock.advance(1)
        assert player.poll_exit()
        assert not player.is_running
        assert not player.poll_exit()

    def test_paused_time_does_not_count(self):
        clock = FakeClock()
        player = NullPlayerProcess(track_seconds=20, clock=clock)
        player.spawn('a.minigsf')

        clock.advance(10)
        player.pause()
        clock.advance(100)
        assert not player.poll_exit()
        player.resume()
        clock.advance(9)
        assert not player.poll_exit()
        clock.advance(1)
        assert player.poll_exit()

    def test_refuses_second_spawn(self):
        player = NullPlayerProcess(clock=FakeClock())
        assert player.spawn('a.minigsf')
        assert not player.spawn('b.minigsf')
        assert player.current_file == 'a.minigsf'

    def test_terminate_reports_exit_once(self):
        player = NullPlayerProcess(clock=FakeClock())
        player.spawn('a.minigsf')
        player.terminate()
        assert player.poll_exit()
        assert not player.poll_exit()
