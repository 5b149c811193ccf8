"""
Tests for run_async.
"""
import threading
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from gsfbox.utils import run_async


class TestRunAsync:
    """Tests for background execution."""

    def test_runs_with_arguments(self):
        done = threading.Event()
        seen = []

        def task(a, b):
            seen.append((a, b))
            done.set()

        run_async(task, 1, 2)

        assert done.wait(2)
        assert seen == [(1, 2)]

    def test_exception_does_not_escape(self):
        done = threading.Event()

        def boom():
            done.set()
            raise RuntimeError('no display')

        run_async(boom)

        assert done.wait(2)
