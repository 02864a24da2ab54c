"""Tests for shutdown coordination."""

import io
import signal
import sys
import threading
from unittest.mock import MagicMock, patch

import pytest

from terminal_radio.core import output
from terminal_radio.lifecycle import ShutdownCoordinator, ShutdownState


@pytest.fixture
def player() -> MagicMock:
    return MagicMock()


@pytest.fixture
def mock_log():
    with patch("terminal_radio.lifecycle.log") as mock:
        yield mock


@pytest.fixture
def coordinator(player):
    return ShutdownCoordinator(
        player,
        exit_delay=0.1,
        stdin=io.StringIO(),
        exit_func=MagicMock(),
        hard_exit=MagicMock(),
        sleep=MagicMock(),
    )


def thread_exception_args(exc: BaseException) -> threading.ExceptHookArgs:
    try:
        raise exc
    except BaseException:
        pass
    return threading.ExceptHookArgs(
        (type(exc), exc, exc.__traceback__, threading.current_thread())
    )


class TestSignalHandling:
    """Tests for handle_signal()."""

    def test_signal_stops_and_exits_cleanly(self, coordinator, player, mock_log) -> None:
        """SIGTERM force-stops playback, closes input and exits with 0."""
        coordinator.handle_signal(signal.SIGTERM)

        player.force_stop.assert_called_once()
        assert coordinator._stdin.closed
        coordinator._sleep.assert_called_once_with(0.1)
        coordinator._exit.assert_called_once_with(0)
        assert coordinator.state is ShutdownState.SHUTTING_DOWN
        messages = [call.args[0] for call in mock_log.call_args_list]
        assert "\n🔇 Received SIGTERM, stopping radio..." in messages
        assert "👋 Radio stopped. Thanks for listening!" in messages

    def test_second_signal_ignored(self, coordinator, player, mock_log) -> None:
        """A repeated Ctrl+C during shutdown does not run cleanup twice."""
        coordinator.handle_signal(signal.SIGINT)
        coordinator.handle_signal(signal.SIGINT)

        player.force_stop.assert_called_once()
        coordinator._exit.assert_called_once_with(0)


class TestExceptionHooks:
    """Tests for the uncaught exception hooks."""

    def test_uncaught_exception_cleans_up_and_chains(
        self, coordinator, player, mock_log
    ) -> None:
        """Playback is killed and the previous excepthook still runs."""
        previous = MagicMock()
        coordinator._previous_excepthook = previous
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()

        coordinator.handle_uncaught_exception(*exc_info)

        player.force_stop.assert_called_once()
        previous.assert_called_once_with(*exc_info)
        assert coordinator.state is ShutdownState.SHUTTING_DOWN

    def test_thread_exception_exits_with_failure(
        self, coordinator, player, mock_log
    ) -> None:
        """A crashed worker thread ends the application with status 1."""
        coordinator.handle_thread_exception(thread_exception_args(ValueError("bad")))

        player.force_stop.assert_called_once()
        coordinator._hard_exit.assert_called_once_with(1)

    def test_thread_system_exit_ignored(self, coordinator, player, mock_log) -> None:
        coordinator.handle_thread_exception(thread_exception_args(SystemExit(0)))

        player.force_stop.assert_not_called()
        coordinator._hard_exit.assert_not_called()
        assert coordinator.state is ShutdownState.RUNNING

    def test_exception_during_shutdown_skips_cleanup(
        self, coordinator, player, mock_log
    ) -> None:
        """Once shutdown started, later errors do not re-run cleanup."""
        coordinator.handle_signal(signal.SIGTERM)
        coordinator.handle_thread_exception(thread_exception_args(ValueError("late")))

        player.force_stop.assert_called_once()
        coordinator._hard_exit.assert_not_called()


class TestExitHook:
    """Tests for handle_exit()."""

    def test_exit_hook_force_stops_once(self, coordinator, player) -> None:
        coordinator.handle_exit()
        coordinator.handle_exit()

        player.force_stop.assert_called_once()
        assert coordinator.state is ShutdownState.EXITED

    def test_exit_hook_runs_after_signal(self, coordinator, player, mock_log) -> None:
        """The exit hook still sweeps after a signal-driven shutdown."""
        coordinator.handle_signal(signal.SIGINT)
        coordinator.handle_exit()

        assert player.force_stop.call_count == 2
        assert coordinator.state is ShutdownState.EXITED


class TestInstall:
    """Tests for install() and uninstall()."""

    def test_install_and_restore(self, coordinator) -> None:
        """Hooks are registered on install and the originals restored after."""
        original_excepthook = sys.excepthook
        original_threading_hook = threading.excepthook

        with patch("terminal_radio.lifecycle.signal.signal") as mock_signal, patch(
            "terminal_radio.lifecycle.atexit"
        ) as mock_atexit:
            mock_signal.return_value = signal.SIG_DFL
            coordinator.install()
            try:
                assert sys.excepthook == coordinator.handle_uncaught_exception
                assert threading.excepthook == coordinator.handle_thread_exception
                mock_signal.assert_any_call(signal.SIGINT, coordinator.handle_signal)
                mock_signal.assert_any_call(signal.SIGTERM, coordinator.handle_signal)
                mock_atexit.register.assert_called_once_with(coordinator.handle_exit)
            finally:
                coordinator.uninstall()

            mock_atexit.unregister.assert_called_once_with(coordinator.handle_exit)
            mock_signal.assert_any_call(signal.SIGINT, signal.SIG_DFL)

        assert sys.excepthook is original_excepthook
        assert threading.excepthook is original_threading_hook

    def test_install_twice_is_noop(self, coordinator) -> None:
        with patch("terminal_radio.lifecycle.signal.signal") as mock_signal, patch(
            "terminal_radio.lifecycle.atexit"
        ) as mock_atexit:
            coordinator.install()
            coordinator.install()
            coordinator.uninstall()

        mock_atexit.register.assert_called_once()


class TestCleanupBeforeOutput:
    """The player is killed before any console output in every hook."""

    @pytest.fixture
    def calls(self, player, mock_log) -> list[str]:
        calls: list[str] = []
        player.force_stop.side_effect = lambda: calls.append("force_stop")
        mock_log.side_effect = lambda *args, **kwargs: calls.append("log")
        return calls

    def test_signal(self, coordinator, calls) -> None:
        coordinator.handle_signal(signal.SIGINT)
        assert calls[0] == "force_stop"
        assert "log" in calls

    def test_uncaught_exception(self, coordinator, calls) -> None:
        coordinator._previous_excepthook = MagicMock()
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            coordinator.handle_uncaught_exception(*sys.exc_info())
        assert calls == ["force_stop", "log"]

    def test_thread_exception(self, coordinator, calls) -> None:
        coordinator.handle_thread_exception(thread_exception_args(ValueError("bad")))
        assert calls == ["force_stop", "log"]

    def test_signal_while_printing(self, coordinator, player) -> None:
        """A signal arriving mid-print on the same thread still completes."""
        finished = threading.Event()

        def interrupted_print() -> None:
            with output._print_lock:
                coordinator.handle_signal(signal.SIGINT)
            finished.set()

        with patch("terminal_radio.core.output.get_console"):
            worker = threading.Thread(target=interrupted_print, daemon=True)
            worker.start()
            worker.join(timeout=2.0)

        assert finished.is_set()
        player.force_stop.assert_called_once()
        coordinator._exit.assert_called_once_with(0)
