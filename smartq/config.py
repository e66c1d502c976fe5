from __future__ import annotations

# Command-line configuration shared by every entrypoint.
#
# Every process (server, customer client, owner client) needs the same broker
# coordinates and namespace, so the flags are declared once here.

import argparse
import logging

from .mqtt_topics import DEFAULT_NAMESPACE

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def add_mqtt_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--mqtt-host", default="127.0.0.1")
    p.add_argument("--mqtt-port", type=int, default=1883)
    p.add_argument("--namespace", default=DEFAULT_NAMESPACE)
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="root logger level",
    )


def mqtt_argv(args: argparse.Namespace) -> list[str]:
    """Turn parsed MQTT flags back into argv (for dispatching to a module main)."""
    return [
        "--mqtt-host",
        args.mqtt_host,
        "--mqtt-port",
        str(args.mqtt_port),
        "--namespace",
        args.namespace,
        "--log-level",
        args.log_level,
    ]


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
