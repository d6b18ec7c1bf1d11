from __future__ import annotations
import os
import signal
import threading
from typing import BinaryIO, Callable, List, Optional

_CHUNK = 64 * 1024


# -----------------------
# Output capture
# -----------------------
class OutputSink:
    """Append-only byte buffer with a capacity ceiling.

    Bytes past the ceiling are counted but not stored, so the pipe keeps
    draining and memory stays bounded.
    """

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        self.size = 0
        self._parts: List[bytes] = []

    @property
    def overflowed(self) -> bool:
        return self.size >= self.max_bytes

    def write(self, data: bytes) -> int:
        if not self.overflowed:
            self._parts.append(data)
        self.size += len(data)
        return len(data)

    def getvalue(self) -> bytes:
        return b"".join(self._parts)

    def text(self) -> str:
        return self.getvalue().decode("utf-8", errors="replace")


class StreamCopier(threading.Thread):
    """Copy a child's pipe into a sink until EOF."""

    def __init__(self, stream: BinaryIO, sink: OutputSink):
        super().__init__(name="shellrun-copier", daemon=True)
        self.stream = stream
        self.sink = sink
        self.error: Optional[OSError] = None

    def run(self) -> None:
        try:
            with self.stream:
                while True:
                    chunk = self.stream.read1(_CHUNK)
                    if not chunk:
                        break
                    self.sink.write(chunk)
        except OSError as e:
            self.error = e


# -----------------------
# One-shot timer
# -----------------------
_ARMED = "armed"
_FIRED = "fired"
_STOPPED = "stopped"


class TimeoutTimer:
    """One-shot deferred action whose stop() reports who won the race.

    stop() returns True only if it cancelled an armed timer; once the
    action has started, stop() returns False. The action runs at most once.
    """

    def __init__(self, interval: float, action: Callable[[], None]):
        self._action = action
        self._lock = threading.Lock()
        self._state = _ARMED
        self._timer = threading.Timer(interval, self._fire)
        self._timer.daemon = True

    def start(self) -> "TimeoutTimer":
        self._timer.start()
        return self

    @property
    def fired(self) -> bool:
        with self._lock:
            return self._state == _FIRED

    def _fire(self) -> None:
        with self._lock:
            if self._state != _ARMED:
                return
            self._state = _FIRED
        self._action()

    def stop(self) -> bool:
        with self._lock:
            if self._state != _ARMED:
                return False
            self._state = _STOPPED
        self._timer.cancel()
        return True


# -----------------------
# Process group signalling
# -----------------------
def terminate_group(pgid: int, sig: int = signal.SIGTERM) -> None:
    """Signal every process in the group (kill(-pgid, sig)).

    Raises OSError if delivery fails, e.g. the group is already reaped.
    """
    os.killpg(pgid, sig)


def describe_returncode(returncode: int) -> str:
    if returncode < 0:
        try:
            name = signal.strsignal(-returncode) or signal.Signals(-returncode).name
        except ValueError:
            name = f"signal {-returncode}"
        return f"signal: {name.lower()}"
    return f"exit status {returncode}"
