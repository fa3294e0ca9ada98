"""Control socket discovery for OVS-style daemons.

A daemon started with ``--pidfile`` publishes two files in its runtime
directory:

- ``{rundir}/{target}.pid``: the daemon's process id, as decimal text;
- ``{rundir}/{target}.{pid}.ctl``: its unixctl control socket.

Discovery reads the former to find the latter. Nothing is cached; every
call looks at the filesystem again.
"""

from __future__ import annotations

from pathlib import Path

from unixctl.config import resolve_rundir
from unixctl.core.logging import get_logger
from unixctl.exceptions import DaemonNotRunningError, SocketNotFoundError

_logger = get_logger("discovery")


def pidfile_path(target: str, rundir: str | Path) -> Path:
    """Path of the pid file published by *target*."""
    return Path(rundir) / f"{target}.pid"


def find_socket_at(target: str, rundir: str | Path) -> Path:
    """Locate the control socket of *target* inside *rundir*.

    Raises:
        DaemonNotRunningError: the pid file is missing, unreadable or empty.
        SocketNotFoundError: no socket exists for the published pid.
    """
    pid_path = pidfile_path(target, rundir)
    try:
        pid = pid_path.read_text().strip()
    except (OSError, UnicodeDecodeError) as exc:
        _logger.debug("pidfile_unreadable", target=target, path=str(pid_path), error=str(exc))
        raise DaemonNotRunningError(target) from exc

    if not pid:
        _logger.debug("pidfile_empty", target=target, path=str(pid_path))
        raise DaemonNotRunningError(target)

    sock_path = Path(rundir) / f"{target}.{pid}.ctl"
    if not sock_path.exists():
        raise SocketNotFoundError(str(sock_path))

    _logger.debug("socket_found", target=target, path=str(sock_path))
    return sock_path


def find_socket(target: str, rundir: str | Path | None = None) -> Path:
    """Locate the control socket of *target*.

    *rundir* defaults to ``OVS_RUNDIR`` or, failing that, ``/var/run/openvswitch``.
    """
    if rundir is None:
        rundir = resolve_rundir()
    return find_socket_at(target, rundir)


__all__ = ["find_socket", "find_socket_at", "pidfile_path"]
