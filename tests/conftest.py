"""
Pytest configuration and shared fixtures for GsfBox tests.
"""
import struct
import sys
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory

sys.path.insert(0, str(Path(__file__).parent.parent))

from gsfbox.api.player import NullPlayerProcess
from gsfbox.models import TrackMetadata


def build_psf(tags: str = None, reserved: bytes = b'', program: bytes = b'\x78\x9c\x03\x00\x00\x00\x00\x01') -> bytes:
    """Assemble a minimal PSF file with an optional [TAG] block."""
    header = b'PSF' + bytes([0x22]) + struct.pack('<III', len(reserved), len(program), 0)
    data = header + reserved + program
    if tags is not None:
        data += b'[TAG]' + tags.encode('utf-8')
    return data


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakePlayer(NullPlayerProcess):
    """Simulated decoder that records spawns and can be told to fail or finish."""

    def __init__(self, clock):
        super().__init__(track_seconds=10 ** 9, clock=clock)
        self.spawned = []
        self.fail_spawn = False
        self.terminate_count = 0

    def spawn(self, path) -> bool:
        if self.fail_spawn and not self.is_running:
            self._unobserved_exit = False
            return False
        self.track_seconds = 10 ** 9
        ok = super().spawn(path)
        if ok:
            self.spawned.append(Path(path).name)
        return ok

    def terminate(self):
        if self.is_running:
            self.terminate_count += 1
        super().terminate()

    def finish(self):
        """Make the current track end on its own."""
        self.track_seconds = 0


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after each test."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def music_root(temp_dir):
    """
    Music tree:
        A/inner.minigsf
        a.minigsf, b.minigsf, c.MINIGSF, notes.txt
    """
    root = temp_dir / 'music'
    root.mkdir()
    (root / 'A').mkdir()
    (root / 'A' / 'inner.minigsf').write_bytes(build_psf('title=Inner\n'))
    (root / 'a.minigsf').write_bytes(build_psf('title=Alpha\nlength=0:30\n'))
    (root / 'b.minigsf').write_bytes(build_psf('title=Bravo\nlength=1:00\n'))
    (root / 'c.MINIGSF').write_bytes(build_psf('title=Charlie\n'))
    (root / 'notes.txt').write_text('not music')
    return root


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def player(clock):
    return FakePlayer(clock)


@pytest.fixture
def lengths():
    """Track name -> length tag used by the fake metadata reader."""
    return {'a.minigsf': '0:30', 'b.minigsf': '1:00'}


@pytest.fixture
def metadata_reader(lengths):
    """Reads metadata from a dict instead of the file; 'bad' in the name means unreadable."""
    def read(path):
        path = Path(path)
        if 'bad' in path.name:
            return None
        return TrackMetadata(path=str(path), title=path.stem, length_text=lengths.get(path.name))
    return read
