"""Shared test helpers for unixctl tests."""

from __future__ import annotations

import json
import socket
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

# Returned by a handler to make the server drop the connection.
CLOSE = object()

Handler = Callable[[dict[str, Any]], Any]


class FakeUnixCtlServer:
    """Threaded unixctl server bound to a real Unix socket.

    Requests are decoded with ``json.JSONDecoder.raw_decode`` so the server
    does not share framing code with the client under test. Each request is
    passed to *handler*, whose return value decides the reply:

    - a dict is sent as JSON;
    - bytes are sent as-is;
    - None sends nothing;
    - ``CLOSE`` closes the connection.

    Without a handler, requests are dispatched to *commands* (method name to
    result, or to a callable taking the params list), answering unknown
    methods with an error the way ovs-vswitchd does.
    """

    def __init__(
        self,
        path: Path,
        handler: Handler | None = None,
        commands: Mapping[str, Any] | None = None,
    ) -> None:
        self.path = path
        self.requests: list[dict[str, Any]] = []
        self._handler = handler or self._dispatch
        self._commands = dict(commands or {})
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []
        self._listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self._listener.bind(str(path))
        self._listener.listen(5)
        self._listener.settimeout(0.05)

    def start(self) -> FakeUnixCtlServer:
        thread = threading.Thread(target=self._serve, daemon=True)
        thread.start()
        self._threads.append(thread)
        return self

    def stop(self) -> None:
        self._stop.set()
        for thread in self._threads:
            thread.join(timeout=2)
        self._listener.close()
        self.path.unlink(missing_ok=True)

    def _dispatch(self, request: dict[str, Any]) -> dict[str, Any]:
        method = request.get("method")
        if method not in self._commands:
            return {
                "result": None,
                "error": f'"{method}" is not a valid command',
                "id": request.get("id"),
            }
        result = self._commands[method]
        if callable(result):
            result = result(request.get("params", []))
        return {"result": result, "error": None, "id": request.get("id")}

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._listener.accept()
            except TimeoutError:
                continue
            except OSError:
                return
            thread = threading.Thread(target=self._handle, args=(conn,), daemon=True)
            thread.start()
            self._threads.append(thread)

    def _handle(self, conn: socket.socket) -> None:
        decoder = json.JSONDecoder()
        buffer = ""
        conn.settimeout(0.05)
        with conn:
            while not self._stop.is_set():
                try:
                    chunk = conn.recv(65536)
                except TimeoutError:
                    continue
                except OSError:
                    return
                if not chunk:
                    return
                buffer += chunk.decode("utf-8")
                while buffer.strip():
                    buffer = buffer.lstrip()
                    try:
                        request, end = decoder.raw_decode(buffer)
                    except json.JSONDecodeError:
                        break
                    buffer = buffer[end:]
                    self.requests.append(request)
                    reply = self._handler(request)
                    if reply is CLOSE:
                        return
                    if reply is None:
                        continue
                    if isinstance(reply, bytes):
                        conn.sendall(reply)
                    else:
                        conn.sendall(json.dumps(reply).encode("utf-8"))


def reply_to(request: dict[str, Any], result: Any = None, error: Any = None) -> dict[str, Any]:
    """Build a well-formed response for *request*."""
    return {"result": result, "error": error, "id": request["id"]}


def write_pidfile(rundir: Path, target: str, content: str) -> Path:
    """Write ``{rundir}/{target}.pid`` holding *content*."""
    path = rundir / f"{target}.pid"
    path.write_text(content)
    return path
