"""
Shutdown coordination for Terminal Radio.

Guarantees no player process outlives the application: termination
signals, uncaught exceptions (main thread or worker threads) and normal
interpreter exit all end in a forced stop of the player and a sweep for
orphaned player processes.
"""

import atexit
import os
import signal
import sys
import threading
import time
from enum import Enum
from typing import Callable, Optional, TextIO

from loguru import logger

from terminal_radio.core.output import log
from terminal_radio.domain.playback import RadioPlayer

SHUTDOWN_SIGNALS = tuple(
    sig
    for sig in (
        getattr(signal, "SIGINT", None),
        getattr(signal, "SIGTERM", None),
        getattr(signal, "SIGHUP", None),  # Not available on Windows
    )
    if sig is not None
)


class ShutdownState(Enum):
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    EXITED = "exited"


class ShutdownCoordinator:
    """Owns the process-wide hooks that tear down playback on exit.

    Args:
        player: The application's player session
        exit_delay: Seconds to wait after cleanup before exiting on a signal
        stdin: Input stream to close so a pending prompt is abandoned
        exit_func: Called with the exit status after a signal
        hard_exit: Called with the exit status after a worker thread crash
        sleep: Delay function
    """

    def __init__(
        self,
        player: RadioPlayer,
        exit_delay: float = 0.1,
        stdin: Optional[TextIO] = None,
        exit_func: Callable[[int], None] = sys.exit,
        hard_exit: Callable[[int], None] = os._exit,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.player = player
        self.exit_delay = exit_delay
        self._stdin = stdin
        self._exit = exit_func
        self._hard_exit = hard_exit
        self._sleep = sleep

        self._state = ShutdownState.RUNNING
        self._state_lock = threading.RLock()
        self._installed = False
        self._previous_handlers: dict[int, object] = {}
        self._previous_excepthook = None
        self._previous_threading_excepthook = None

    @property
    def state(self) -> ShutdownState:
        return self._state

    def install(self) -> None:
        """Register signal handlers, exception hooks and the exit hook.

        Must be called from the main thread.
        """
        if self._installed:
            return

        for sig in SHUTDOWN_SIGNALS:
            self._previous_handlers[sig] = signal.signal(sig, self.handle_signal)

        self._previous_excepthook = sys.excepthook
        sys.excepthook = self.handle_uncaught_exception
        self._previous_threading_excepthook = threading.excepthook
        threading.excepthook = self.handle_thread_exception

        atexit.register(self.handle_exit)
        self._installed = True
        logger.debug(
            f"Shutdown hooks installed for {[signal.Signals(s).name for s in SHUTDOWN_SIGNALS]}"
        )

    def uninstall(self) -> None:
        """Restore the hooks that were active before install()."""
        if not self._installed:
            return

        for sig, handler in self._previous_handlers.items():
            signal.signal(sig, handler)
        self._previous_handlers.clear()

        sys.excepthook = self._previous_excepthook
        threading.excepthook = self._previous_threading_excepthook
        atexit.unregister(self.handle_exit)
        self._installed = False

    def handle_signal(self, signum: int, frame=None) -> None:
        """Termination signal: force stop, abandon input, exit cleanly."""
        if not self._begin_shutdown():
            return

        # Kill first; output may wait on the print lock
        self.player.force_stop()
        name = signal.Signals(signum).name
        log(f"\n🔇 Received {name}, stopping radio...", "warning")
        log("👋 Radio stopped. Thanks for listening!", "success")

        self._close_stdin()
        self._sleep(self.exit_delay)
        self._exit(0)

    def handle_uncaught_exception(self, exc_type, exc_value, exc_traceback) -> None:
        """sys.excepthook: clean up, then let the interpreter exit with status 1."""
        if self._begin_shutdown():
            self.player.force_stop()
            logger.opt(exception=(exc_type, exc_value, exc_traceback)).error(
                "Uncaught exception"
            )
            log(f"❌ Uncaught exception: {exc_value!r}", "error")

        hook = self._previous_excepthook or sys.__excepthook__
        hook(exc_type, exc_value, exc_traceback)

    def handle_thread_exception(self, args: threading.ExceptHookArgs) -> None:
        """threading.excepthook: a worker crashed, clean up and exit with status 1."""
        if issubclass(args.exc_type, SystemExit):
            return

        first = self._begin_shutdown()
        if first:
            self.player.force_stop()

        thread_name = args.thread.name if args.thread else "unknown"
        logger.opt(exception=(args.exc_type, args.exc_value, args.exc_traceback)).error(
            f"Unhandled exception in thread {thread_name}"
        )
        if not first:
            return

        log(f"❌ Unhandled error in {thread_name}: {args.exc_value!r}", "error")
        self._hard_exit(1)

    def handle_exit(self) -> None:
        """atexit hook: last chance cleanup, synchronous work only."""
        with self._state_lock:
            if self._state is ShutdownState.EXITED:
                return
            self._state = ShutdownState.EXITED
        self.player.force_stop()

    def _begin_shutdown(self) -> bool:
        """Move RUNNING -> SHUTTING_DOWN. False if shutdown already started."""
        with self._state_lock:
            if self._state is not ShutdownState.RUNNING:
                return False
            self._state = ShutdownState.SHUTTING_DOWN
            return True

    def _close_stdin(self) -> None:
        stream = self._stdin if self._stdin is not None else sys.stdin
        if stream is None:
            return
        try:
            stream.close()
        except (OSError, ValueError):
            pass
