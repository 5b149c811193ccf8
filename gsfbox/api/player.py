"""
Player Process - Lifecycle of the external playgsf decoder.

At most one decoder process is held at a time. Pause/resume use
SIGSTOP/SIGCONT; termination is SIGKILL followed by a blocking reap.
"""
import time
import signal
import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from ..config import DECODER_PATH, DECODER_ARGS, MOCK_TRACK_SECONDS

logger = logging.getLogger(__name__)


class PlayerProcess:
    """Owns zero or one decoder process."""

    def __init__(self, executable: str = DECODER_PATH, args: Sequence[str] = DECODER_ARGS):
        self.executable = executable
        self.args = tuple(args)
        self.current_file: Optional[str] = None
        self.paused = False
        self._proc: Optional[subprocess.Popen] = None
        # Set by terminate(), reported once by poll_exit()
        self._unobserved_exit = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def is_running(self) -> bool:
        """True while a process handle is held (running or paused)."""
        return self._proc is not None

    def spawn(self, path) -> bool:
        """Start decoding `path`. Refused if a process is already held."""
        if self._proc is not None:
            logger.warning(f'Spawn refused, decoder already running (pid {self._proc.pid})')
            return False

        self._unobserved_exit = False
        cmd = [self.executable, *self.args, str(path)]
        try:
            self._proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.error(f'Failed to start decoder {self.executable}: {e}')
            return False

        self.current_file = str(path)
        self.paused = False
        logger.info(f'Started decoder (pid {self._proc.pid}): {Path(path).name}')
        return True

    def pause(self) -> bool:
        """Suspend the decoder."""
        if self._proc is None or self.paused:
            return False
        if not self._signal(signal.SIGSTOP):
            return False
        self.paused = True
        logger.info('Paused')
        return True

    def resume(self) -> bool:
        """Continue a suspended decoder."""
        if self._proc is None or not self.paused:
            return False
        if not self._signal(signal.SIGCONT):
            return False
        self.paused = False
        logger.info('Resumed')
        return True

    def toggle_pause(self) -> bool:
        """Pause or resume. Returns the new paused state."""
        if self.paused:
            self.resume()
        else:
            self.pause()
        return self.paused

    def terminate(self):
        """Kill the decoder and reap it. No-op when nothing is held."""
        proc = self._proc
        if proc is None:
            return

        try:
            proc.kill()
        except ProcessLookupError:
            pass
        except OSError as e:
            logger.warning(f'Could not kill decoder (pid {proc.pid}): {e}')
        # SIGKILL cannot be caught, the reap returns promptly
        proc.wait()
        logger.debug(f'Decoder killed (pid {proc.pid}, code {proc.returncode})')

        self._clear()
        self._unobserved_exit = True

    def poll_exit(self) -> bool:
        """
        Non-blocking exit check.

        Returns True exactly once per exit, whether the decoder finished on
        its own or was terminated.
        """
        if self._unobserved_exit:
            self._unobserved_exit = False
            return True

        if self._proc is None:
            return False

        code = self._proc.poll()
        if code is None:
            return False

        logger.info(f'Decoder exited (pid {self._proc.pid}, code {code})')
        self._clear()
        return True

    def close(self):
        """Terminate any held process and drop the exit notification."""
        self.terminate()
        self._unobserved_exit = False

    def _signal(self, sig) -> bool:
        try:
            self._proc.send_signal(sig)
            return True
        except OSError as e:
            logger.warning(f'Could not signal decoder: {e}')
            return False

    def _clear(self):
        self._proc = None
        self.paused = False
        self.current_file = None


class NullPlayerProcess:
    """Stand-in decoder for mock mode: tracks 'finish' after a fixed time."""

    def __init__(self, track_seconds: float = MOCK_TRACK_SECONDS, clock=time.monotonic):
        self.track_seconds = track_seconds
        self._clock = clock
        self.current_file: Optional[str] = None
        self.paused = False
        self._started_at: Optional[float] = None
        self._paused_at: Optional[float] = None
        self._unobserved_exit = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    def spawn(self, path) -> bool:
        if self.is_running:
            logger.warning('Mock spawn refused, track already playing')
            return False
        self.current_file = str(path)
        self.paused = False
        self._started_at = self._clock()
        self._paused_at = None
        self._unobserved_exit = False
        logger.info(f'Mock playback: {Path(path).name}')
        return True

    def pause(self) -> bool:
        if not self.is_running or self.paused:
            return False
        self.paused = True
        self._paused_at = self._clock()
        return True

    def resume(self) -> bool:
        if not self.is_running or not self.paused:
            return False
        # Shift the start so paused time does not count
        self._started_at += self._clock() - self._paused_at
        self._paused_at = None
        self.paused = False
        return True

    def toggle_pause(self) -> bool:
        if self.paused:
            self.resume()
        else:
            self.pause()
        return self.paused

    def terminate(self):
        if not self.is_running:
            return
        self._clear()
        self._unobserved_exit = True

    def poll_exit(self) -> bool:
        if self._unobserved_exit:
            self._unobserved_exit = False
            return True
        if not self.is_running or self.paused:
            return False
        if self._clock() - self._started_at >= self.track_seconds:
            self._clear()
            return True
        return False

    def close(self):
        self.terminate()
        self._unobserved_exit = False

    def _clear(self):
        self._started_at = None
        self._paused_at = None
        self.paused = False
        self.current_file = None
