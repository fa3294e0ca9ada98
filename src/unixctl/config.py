"""Configuration models for unixctl clients.

Defines the Pydantic v2 model holding connection settings (target daemon,
runtime directory, socket timeout, explicit socket path) and the runtime
directory resolution that honours the ``OVS_RUNDIR`` environment variable.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from unixctl.core.logging import get_logger

_logger = get_logger("config")

DEFAULT_RUNDIR = "/var/run/openvswitch"
RUNDIR_ENV = "OVS_RUNDIR"
DEFAULT_TARGET = "ovs-vswitchd"
DEFAULT_TIMEOUT = 1.0


def resolve_rundir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the runtime directory holding pid files and control sockets.

    Reads ``OVS_RUNDIR`` from *environ* (``os.environ`` by default). When the
    variable is unset, or holds bytes that cannot be represented as UTF-8
    text, the default ``/var/run/openvswitch`` is used. Never raises.
    """
    env = os.environ if environ is None else environ
    value = env.get(RUNDIR_ENV)
    if value is None:
        return Path(DEFAULT_RUNDIR)
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        _logger.debug("rundir_env_unrepresentable", env=RUNDIR_ENV, default=DEFAULT_RUNDIR)
        return Path(DEFAULT_RUNDIR)
    return Path(value)


class UnixCtlConfig(BaseModel):
    """Connection settings for a unixctl control session.

    When ``socket_path`` is set, discovery is skipped and ``target``/``rundir``
    are ignored.
    """

    target: str = Field(
        default=DEFAULT_TARGET,
        min_length=1,
        description="Daemon name used to derive the pid and socket file names",
    )
    rundir: Path = Field(
        default_factory=resolve_rundir,
        description="Runtime directory where the daemon publishes its pid file and socket",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Read and write deadline on the control socket, in seconds",
    )
    socket_path: Path | None = Field(
        default=None,
        description="Explicit control socket path; bypasses pid-file discovery",
    )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> UnixCtlConfig:
        """Build a config whose rundir comes from *environ*, then apply overrides.

        Overrides equal to None are ignored so CLI options can be passed through
        unfiltered.
        """
        values: dict[str, Any] = {"rundir": resolve_rundir(environ)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = [
    "DEFAULT_RUNDIR",
    "DEFAULT_TARGET",
    "DEFAULT_TIMEOUT",
    "RUNDIR_ENV",
    "UnixCtlConfig",
    "resolve_rundir",
]
