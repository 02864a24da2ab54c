"""
Process-group signalling and the orphaned-player sweep.

Players are launched as process group leaders so that a stop reaches the
player and anything it spawned. Every termination here is best effort:
targets that already exited, or that we may not signal, are ignored.
"""

import os
import signal
import subprocess
from typing import Any, Iterable

import psutil
from loguru import logger

from .backends import player_name

HAS_PROCESS_GROUPS = hasattr(os, "killpg")


def new_process_group_kwargs() -> dict[str, Any]:
    """Popen keyword arguments that detach the child into its own group."""
    if HAS_PROCESS_GROUPS:
        return {"start_new_session": True}
    return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}


def terminate_process_group(pid: int, force: bool = False) -> bool:
    """Send SIGTERM (or SIGKILL when force) to the process group led by pid.

    Falls back to terminating the process tree on platforms without
    process groups.

    Returns:
        True if the signal was delivered, False if the target was gone or
        could not be signalled
    """
    if not HAS_PROCESS_GROUPS:
        return terminate_process_tree(pid, force=force)

    sig = signal.SIGKILL if force else signal.SIGTERM
    try:
        os.killpg(pid, sig)
        logger.debug(f"Sent {sig.name} to process group {pid}")
        return True
    except ProcessLookupError:
        return False  # Already exited
    except PermissionError:
        logger.debug(f"Not permitted to signal process group {pid}")
        return False


def terminate_process_tree(pid: int, force: bool = False) -> bool:
    """Terminate pid and all of its descendants.

    Returns:
        True if the root process was signalled
    """
    try:
        root = psutil.Process(pid)
        children = root.children(recursive=True)
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return False

    delivered = False
    for proc in [*children, root]:
        try:
            if force:
                proc.kill()
            else:
                proc.terminate()
            if proc.pid == pid:
                delivered = True
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass
    return delivered


def find_player_processes(names: Iterable[str]) -> list[psutil.Process]:
    """Find running processes whose name matches one of the player binaries.

    Matches regardless of who started the process; the current process is
    never included.
    """
    wanted = {player_name(name) for name in names}
    own_pid = os.getpid()
    matches = []

    for proc in psutil.process_iter(["pid", "name"]):
        try:
            name = proc.info.get("name")
            if not name or proc.info.get("pid") == own_pid:
                continue
            if player_name(name) in wanted:
                matches.append(proc)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue

    return matches


def kill_orphaned_players(names: Iterable[str]) -> int:
    """Force-kill every running player process with one of the given names.

    Defensive cleanup for shutdown paths: it also reaches players left over
    from a crashed earlier run, and players started outside this tool.

    Returns:
        Number of processes killed
    """
    killed = 0
    try:
        processes = find_player_processes(names)
    except psutil.Error as e:
        logger.warning(f"Could not enumerate processes for orphan sweep: {e}")
        return 0

    for proc in processes:
        try:
            proc.kill()
            killed += 1
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass

    if killed:
        logger.info(f"Orphan sweep killed {killed} player process(es)")
    return killed
