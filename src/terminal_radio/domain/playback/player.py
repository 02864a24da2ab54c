"""
External player integration for Terminal Radio.

RadioPlayer owns at most one playback subprocess at a time. It launches
mpv (falling back to VLC), watches the process for unexpected exits, and
tears it down gracefully on stop or immediately on shutdown.
"""

import subprocess
import threading
import time
from typing import Callable, Optional

from loguru import logger

from terminal_radio.core.config import DirectoryConfig, PlayerConfig
from terminal_radio.core.output import log
from terminal_radio.domain.radio import directory
from terminal_radio.domain.radio.models import Station

from . import process_control
from .backends import build_command
from .exceptions import InvalidStationError, PlayerLaunchError, PlayerNotFoundError

INSTALL_HINTS = (
    "  macOS: brew install mpv  or  brew install vlc",
    "  Linux: sudo apt install mpv  or  sudo apt install vlc",
)


class RadioPlayer:
    """Playback session: current station, primary process, tracked pids.

    Construct one per application and pass it to whoever needs it. Every
    launched process is recorded until a termination sweep is issued for
    it; `generation` increments on each play so deferred kills can be tied
    to the session that scheduled them.
    """

    def __init__(
        self,
        player_config: Optional[PlayerConfig] = None,
        directory_config: Optional[DirectoryConfig] = None,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._config = player_config or PlayerConfig()
        self._directory = directory_config or DirectoryConfig()
        self._popen = popen
        self._sleep = sleep

        self._lock = threading.RLock()
        self._station: Optional[Station] = None
        self._process: Optional[subprocess.Popen] = None
        self._backend: Optional[str] = None
        self._tracked: dict[int, subprocess.Popen] = {}
        self._generation = 0
        self._pending_kills: dict[int, threading.Timer] = {}
        self._watchers: list[threading.Thread] = []

    @property
    def config(self) -> PlayerConfig:
        return self._config

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def backend(self) -> Optional[str]:
        """Binary of the running player (e.g. 'mpv'), None when stopped."""
        with self._lock:
            return self._backend if self._process is not None else None

    @property
    def tracked_pids(self) -> list[int]:
        """Process ids awaiting a termination sweep (may include dead ones)."""
        with self._lock:
            return list(self._tracked)

    def play(self, station: Station) -> bool:
        """Stop current playback and start streaming station.

        Returns after the configured startup delay; does not wait for the
        stream to buffer. Launch failures are reported to the user, not
        raised.

        Args:
            station: Station to play

        Returns:
            True if the player process is still alive after the delay

        Raises:
            InvalidStationError: If the station has no stream URL
        """
        if not station.url or not station.url.strip():
            raise InvalidStationError(f"Station '{station.name}' has no stream URL")

        self.stop()

        with self._lock:
            self._generation += 1
            self._station = station
            logger.info(
                f"Playing station {station.name} ({station.url}), generation {self._generation}"
            )
            try:
                process = self._launch(station)
            except PlayerNotFoundError as e:
                self._station = None
                logger.warning(str(e))
                log(
                    f"❌ Neither {self._config.primary} nor {self._config.secondary} found. "
                    "Please install one of them:",
                    "error",
                )
                for hint in INSTALL_HINTS:
                    log(hint, "warning")
                return False
            except PlayerLaunchError as e:
                self._station = None
                log(f"❌ Playback error: {e}", "error")
                return False

        # Give the player a moment to start (or to fail)
        self._sleep(self._config.startup_delay)

        with self._lock:
            alive = process is self._process and process.poll() is None
        if alive:
            log("✅ Now playing!", "success")
        return alive

    def stop(self) -> None:
        """Stop playback: SIGTERM now, SIGKILL after the grace period.

        Returns immediately; state is cleared without waiting for the
        player to exit. No-op when nothing is playing.
        """
        with self._lock:
            self._station = None
            targets = self._take_targets()
            if not targets:
                return
            generation = self._generation

        logger.info(f"Stopping playback (pids: {list(targets)})")
        for pid in targets:
            process_control.terminate_process_group(pid)

        self._schedule_forced_kill(generation, list(targets.values()))

    def force_stop(self) -> int:
        """Kill playback immediately and sweep orphaned player processes.

        For shutdown paths only: the orphan sweep also kills same-named
        players this session never started. Never raises.

        Returns:
            Number of player processes killed by the orphan sweep
        """
        try:
            with self._lock:
                for timer in self._pending_kills.values():
                    timer.cancel()
                self._pending_kills.clear()
                targets = self._take_targets()
                self._station = None

            for pid in targets:
                process_control.terminate_process_group(pid, force=True)

            return process_control.kill_orphaned_players(
                (self._config.primary, self._config.secondary)
            )
        except Exception:
            logger.exception("Forced stop failed")
            return 0

    def get_current_station(self) -> Optional[Station]:
        """Get the station of the active session, or None."""
        with self._lock:
            return self._station

    def is_playing(self) -> bool:
        """Check whether the player process exists and has not exited."""
        with self._lock:
            return self._process is not None and self._process.poll() is None

    def search_stations(self, query: str, limit: Optional[int] = None) -> list[Station]:
        """Search the online directory by station name."""
        return directory.search_stations(
            query,
            limit=limit if limit is not None else self._directory.default_limit,
            base_url=self._directory.base_url,
            timeout=self._directory.timeout,
        )

    def search_by_genre(self, genre: str, limit: Optional[int] = None) -> list[Station]:
        """Search the online directory by genre tag."""
        return directory.search_by_genre(
            genre,
            limit=limit if limit is not None else self._directory.default_limit,
            base_url=self._directory.base_url,
            timeout=self._directory.timeout,
        )

    def _launch(self, station: Station) -> subprocess.Popen:
        """Start the primary player, falling back to the secondary once."""
        try:
            return self._spawn(self._config.primary, station)
        except FileNotFoundError:
            logger.info(
                f"{self._config.primary} not found, falling back to {self._config.secondary}"
            )

        try:
            return self._spawn(self._config.secondary, station)
        except FileNotFoundError as e:
            raise PlayerNotFoundError(
                (self._config.primary, self._config.secondary)
            ) from e

    def _spawn(self, binary: str, station: Station) -> subprocess.Popen:
        try:
            command = build_command(binary, station.url, self._config)
        except ValueError as e:
            raise PlayerLaunchError(binary, e) from e

        try:
            process = self._popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                **process_control.new_process_group_kwargs(),
            )
        except FileNotFoundError:
            raise
        except OSError as e:
            raise PlayerLaunchError(binary, e) from e

        self._process = process
        self._backend = binary
        self._tracked[process.pid] = process
        logger.info(f"{binary} started with PID {process.pid}")

        watcher = threading.Thread(
            target=self._watch,
            args=(process, binary),
            daemon=True,
            name=f"PlayerWatcher-{process.pid}",
        )
        self._watchers = [t for t in self._watchers if t.is_alive()]
        self._watchers.append(watcher)
        watcher.start()
        return process

    def _watch(self, process: subprocess.Popen, binary: str) -> None:
        """Wait for process to exit and report unexpected failures."""
        try:
            returncode = process.wait()
        except Exception:
            logger.exception(f"Error waiting for {binary} (PID {process.pid})")
            return

        with self._lock:
            is_current = process is self._process

        logger.info(f"{binary} (PID {process.pid}) exited with code {returncode}")
        # Negative codes mean killed by a signal: a requested stop, not a failure
        if is_current and returncode is not None and returncode > 0:
            log("🔇 Playback stopped", "warning")

    def _take_targets(self) -> dict[int, subprocess.Popen]:
        """Detach the current process and tracked pids from the session.

        Caller must hold the lock.
        """
        targets = dict(self._tracked)
        if self._process is not None:
            targets.setdefault(self._process.pid, self._process)
        self._tracked.clear()
        self._process = None
        self._backend = None
        return targets

    def _schedule_forced_kill(
        self, generation: int, processes: list[subprocess.Popen]
    ) -> None:
        timer = threading.Timer(
            self._config.stop_grace_period,
            self._forced_kill,
            args=(generation, processes),
        )
        timer.daemon = True
        with self._lock:
            self._pending_kills[generation] = timer
        timer.start()

    def _forced_kill(self, generation: int, processes: list[subprocess.Popen]) -> None:
        """SIGKILL processes from a stopped session that are still alive.

        Only the captured handles are touched, never the current session,
        and only while poll() shows them alive, so a reused pid is never hit.
        """
        with self._lock:
            self._pending_kills.pop(generation, None)

        for process in processes:
            if process.poll() is None:
                logger.info(
                    f"PID {process.pid} ignored SIGTERM (generation {generation}), killing"
                )
                process_control.terminate_process_group(process.pid, force=True)
