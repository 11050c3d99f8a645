# tcpping/prober/tcp.py
import errno
import logging
import os
import select
import socket
import time
from typing import Callable

from tcpping.prober.base import Prober, SocketCreationError
from tcpping.schemas import ProbeOutcome

log = logging.getLogger(__name__)

# connect_ex() results meaning "handshake started, come back later"
IN_PROGRESS = {errno.EINPROGRESS, errno.EWOULDBLOCK, errno.EALREADY}
if hasattr(errno, "WSAEWOULDBLOCK"):
    IN_PROGRESS.add(errno.WSAEWOULDBLOCK)


class TcpProber(Prober):
    """
    Times a single TCP three-way handshake with a non-blocking connect.

    The socket is put in non-blocking mode, connect_ex() kicks off the SYN and
    we wait (bounded by the timeout) for the socket to turn writable, then read
    SO_ERROR to tell a completed handshake from a refused one. Every probe uses
    a fresh socket which is closed before probe_once() returns.
    """

    def __init__(self,
                 socket_factory: Callable[..., socket.socket] = socket.socket,
                 clock: Callable[[], float] = time.perf_counter):
        self.socket_factory = socket_factory
        self.clock = clock

    def _open_socket(self) -> socket.socket:
        try:
            return self.socket_factory(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as e:
            raise SocketCreationError(f"socket creation failed: {e}") from e

    def _wait_writable(self, sock: socket.socket, timeout: float) -> bool:
        # select() reports a failed async connect as writable as well; SO_ERROR sorts it out
        _, writable, exceptional = select.select([], [sock], [sock], timeout)
        return bool(writable or exceptional)

    def _await_handshake(self, sock: socket.socket, deadline: float) -> ProbeOutcome | None:
        """Block until the pending connect resolves. Returns None on success."""
        while True:
            remaining = deadline - self.clock()
            if remaining <= 0:
                return ProbeOutcome.timeout()
            try:
                ready = self._wait_writable(sock, remaining)
            except InterruptedError:
                # select() retries EINTR itself (PEP 475); this covers waits that do not
                # and keeps waiting on whatever budget is left
                continue
            except (OSError, ValueError) as e:
                log.debug("wait for writability failed: %s", e)
                return ProbeOutcome.error(getattr(e, "errno", None), str(e))

            if not ready:
                return ProbeOutcome.timeout()

            try:
                so_error = sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)
            except OSError as e:
                log.debug("reading SO_ERROR failed: %s", e)
                return ProbeOutcome.error(e.errno, str(e))
            if so_error != 0:
                return ProbeOutcome.error(so_error, os.strerror(so_error))
            return None

    def probe_once(self, address: str, port: int, timeout: float) -> ProbeOutcome:
        sock = self._open_socket()
        try:
            sock.setblocking(False)

            t0 = self.clock()
            try:
                status = sock.connect_ex((address, port))
            except OSError as e:
                # bad address, unreachable network reported synchronously, ...
                log.debug("connect to %s:%d raised: %s", address, port, e)
                return ProbeOutcome.error(e.errno, str(e))

            if status != 0:
                if status not in IN_PROGRESS:
                    log.debug("connect to %s:%d failed immediately: %s",
                              address, port, os.strerror(status))
                    return ProbeOutcome.error(status, os.strerror(status))

                failed = self._await_handshake(sock, t0 + timeout)
                if failed is not None:
                    log.debug("probe %s:%d -> %s (%s)", address, port, failed.status, failed.detail)
                    return failed

            # SYN/SYN-ACK done; stop the clock before tearing the socket down
            t1 = self.clock()
        finally:
            sock.close()

        return ProbeOutcome.success((t1 - t0) * 1000.0)
