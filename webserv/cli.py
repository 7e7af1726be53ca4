"""Command line entry point: load a configuration and serve it."""

from __future__ import annotations

import argparse
import os
import signal
from pathlib import Path

from .config import Config
from .listener import Listener
from .logger import get_logger
from .netutils import shutdown_event
from .searcher import Searcher
from .tokenizer import Tokenizer

DEFAULT_CONFIG = "configFile/searchTest.config"
DUMP_ENV = "WEBSERV_CONF_FILE"


def _request_shutdown(signum, frame) -> None:
    shutdown_event().set()


def main(argv=None) -> int:
    """Run the server; return 0 after a clean stop and 1 on any failure.

    If the environment variable WEBSERV_CONF_FILE names a file, the parsed
    configuration is written there as JSON before serving starts.
    """
    parser = argparse.ArgumentParser(prog="webserv", description="Serve a configuration.")
    parser.add_argument(
        "config", nargs="?", default=DEFAULT_CONFIG, help="configuration file to load"
    )
    args = parser.parse_args(argv)

    previous = signal.signal(signal.SIGINT, _request_shutdown)
    try:
        tokenizer = Tokenizer(args.config)
        config = Config(tokenizer.tokens)
        searcher = Searcher(config)
        with Listener(searcher.addresses, searcher) as listener:
            dump = os.environ.get(DUMP_ENV)
            if dump:
                Path(dump).write_text(config.to_json(0) + "\n", encoding="utf-8")
            listener.run()
    except Exception as exc:
        get_logger().critical(str(exc))
        return 1
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)
    return 0