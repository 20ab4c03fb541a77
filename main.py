#!/usr/bin/env python3
"""Main entry point for the nvidia-smi exporter"""
import argparse
import sys
from typing import List, Optional, Tuple
import uvicorn
from prometheus_client import REGISTRY
from config import Config
from app.server import MetricsServer
from logging_config import setup_structured_logging, get_logger, log_server_startup, log_error


VERBOSITY_LEVELS = {1: "INFO", 2: "DEBUG"}


def parse_listen_address(value: str) -> Tuple[str, int]:
    """Split HOST:PORT, accepting bracketed IPv6 hosts"""
    host, sep, port = value.rpartition(":")
    if not sep or not host:
        raise argparse.ArgumentTypeError(f"expected HOST:PORT, got {value!r}")
    try:
        port_number = int(port)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port in {value!r}")
    if not 1 <= port_number <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range in {value!r}")
    return host.strip("[]"), port_number


def verbosity_to_level(verbose: int) -> Optional[str]:
    """Map -v occurrences to a log level; None keeps the configured level"""
    if verbose <= 0:
        return None
    return VERBOSITY_LEVELS.get(verbose, "DEBUG")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Nvidia SMI Exporter")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Sets the level of verbosity")
    parser.add_argument("-l", "--listen", type=parse_listen_address, help="Listen address, HOST:PORT (default 0.0.0.0:9101)")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Load configuration from the environment, then apply command line overrides"""
    overrides = {}
    if args.listen:
        overrides["metrics_host"], overrides["metrics_port"] = args.listen
    level = verbosity_to_level(args.verbose)
    if level:
        overrides["log_level"] = level
    return Config(**overrides)


def main(argv: Optional[List[str]] = None):
    """Main application entry point"""
    args = parse_args(argv)
    try:
        config = build_config(args)

        setup_structured_logging(config)
        logger = get_logger(__name__)
        log_server_startup(logger, config)

        server = MetricsServer(config, registry=REGISTRY)

        uvicorn.run(
            server.get_app(),
            host=config.metrics_host,
            port=config.metrics_port,
            log_config=None  # We handle logging ourselves
        )

    except Exception as e:
        logger = get_logger(__name__)
        log_error(logger, e, {"component": "main", "phase": "startup"})
        sys.exit(1)


if __name__ == '__main__':
    main()
