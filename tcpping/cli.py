# tcpping/cli.py
# Usage examples:
#   tcpping example.com
#   tcpping -p 22 -c 5 10.0.0.1
#   tcpping -c 20 -s 2 -m csv example.com
#   python3 -m tcpping.cli --help

import argparse
import logging
import signal
import socket

from tcpping.config import MODES, VERSION, Settings
from tcpping.driver.controller import CancelToken, PingController
from tcpping.logger import setup_logger
from tcpping.output import Presenter
from tcpping.prober.base import TcpPingError
from tcpping.prober.tcp import TcpProber

log = logging.getLogger(__name__)


def build_argparser():
    ap = argparse.ArgumentParser(prog="tcpping", description="Ping a host by timing TCP handshakes")
    ap.add_argument("hostname", help="Destination host name or IPv4 address")
    ap.add_argument("-p", "--port", type=int, default=443, help="TCP port number (default: 443)")
    ap.add_argument("-c", "--count", type=int, default=None,
                    help="Number of tcp pings (default: unlimited)")
    ap.add_argument("-t", "--timeout", type=float, default=3.0,
                    help="Seconds to wait for each handshake (default: 3)")
    ap.add_argument("-i", "--interval", type=float, default=1.0,
                    help="Seconds between pings (default: 1)")
    ap.add_argument("-s", "--skip", type=int, default=0,
                    help="Leading pings left out of the statistics (default: 0)")
    ap.add_argument("-m", "--mode", default="normal", choices=MODES, help="Output mode")
    ap.add_argument("-a", "--bell", action="store_true", help="Ring the terminal bell on every reply")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log verbosity (stderr)")
    ap.add_argument("-V", "--version", action="version", version=f"tcpping {VERSION}")
    return ap


def settings_from_args(args) -> Settings:
    return Settings(
        port=args.port,
        timeout=args.timeout,
        count=args.count,
        interval=args.interval,
        skip=args.skip,
        mode=args.mode,
        bell=args.bell,
        log_level=args.log_level,
    ).validate()


def resolve(hostname: str) -> str:
    """IPv4 only; raises socket.gaierror when the lookup fails."""
    return socket.gethostbyname(hostname)


def install_signal_handlers(cancel: CancelToken) -> dict:
    def _handler(signum, frame):
        log.info("received signal %d, stopping after the current probe", signum)
        cancel.cancel()

    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        previous[sig] = signal.signal(sig, _handler)
    return previous


def main(argv=None, prober=None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    try:
        s = settings_from_args(args)
    except ValueError as e:
        ap.error(str(e))

    setup_logger("tcpping", s.log_level)

    try:
        address = resolve(args.hostname)
    except (socket.gaierror, UnicodeError) as e:
        log.debug("lookup for %r failed: %s", args.hostname, e)
        print(f"Lookup for '{args.hostname}' failed.")
        return 1

    presenter = Presenter(mode=s.mode, bell=s.bell)
    ctrl = PingController(prober or TcpProber(), s, presenter)
    cancel = CancelToken()
    previous = install_signal_handlers(cancel)

    presenter.header(args.hostname, address, s.port)
    try:
        result = ctrl.run(address, cancel, target=args.hostname)
    except TcpPingError as e:
        log.error("%s", e)
        return 2
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    presenter.summary(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
