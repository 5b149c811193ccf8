"""
GsfBox Utilities - Shared helper functions.
"""
import threading
import logging

logger = logging.getLogger(__name__)


def run_async(fn, *args):
    """Run `fn(*args)` in a daemon thread, logging instead of raising.

    Used for slow shell side effects that must not stall the tick loop.
    """
    def runner():
        try:
            fn(*args)
        except Exception as e:
            logger.warning(f'Background call {fn.__name__} failed: {e}', exc_info=True)

    threading.Thread(target=runner, name=f'gsfbox-{fn.__name__}', daemon=True).start()
