"""Process helpers for running the compiler.

`tsc` is usually a launcher script (tsc.cmd, or a node shebang script), so
the process we start is often only the root of a small process tree. On
timeout the whole tree has to go, otherwise the node child keeps running and
keeps our stderr pipe open.
"""

import logging
import subprocess
import sys

import psutil


def hidden_window_flags() -> int:
    """Get creation flags that keep the compiler from opening a console window.

    Returns:
        CREATE_NO_WINDOW on Windows, 0 elsewhere
    """
    if sys.platform == "win32":
        return subprocess.CREATE_NO_WINDOW
    return 0


def kill_process_tree(pid: int, timeout: float = 3.0) -> int:
    """Kill a process and all of its descendants.

    Children are terminated before their parents. Processes still alive
    after `timeout` seconds are force killed.

    Args:
        pid: PID of the root process
        timeout: Seconds to wait for graceful termination

    Returns:
        Number of processes that were signalled
    """
    try:
        root_proc = psutil.Process(pid)
    except psutil.NoSuchProcess:
        logging.debug(f"Process {pid} already exited")
        return 0

    try:
        children = root_proc.children(recursive=True)
    except psutil.NoSuchProcess:
        children = []

    # Children first (bottom-up to avoid orphans)
    processes_to_kill = list(reversed(children)) + [root_proc]

    killed_count = 0
    for proc in processes_to_kill:
        try:
            proc.terminate()
            killed_count += 1
            logging.debug(f"Terminated process {proc.pid}")
        except psutil.NoSuchProcess:
            pass  # Already dead
        except psutil.AccessDenied as e:
            logging.warning(f"Failed to terminate process {proc.pid}: {e}")

    _gone, alive = psutil.wait_procs(processes_to_kill, timeout=timeout)

    for proc in alive:
        try:
            proc.kill()
            logging.warning(f"Force killed stubborn process {proc.pid}")
        except psutil.NoSuchProcess:
            pass
        except psutil.AccessDenied as e:
            logging.warning(f"Failed to force kill process {proc.pid}: {e}")

    return killed_count
