from __future__ import annotations

# Single-entrypoint runner.
#
#     python -m smartq.app server [--mqtt-host H] [--namespace NS]
#     python -m smartq.app customer --user-id U join --salon-id S --service-id SV
#     python -m smartq.app owner --user-id O status --entry-id E --status in-progress
#
# `customer` and `owner` forward everything after the subcommand to the
# respective client, so `python -m smartq.app customer -h` shows its help.

import argparse

from .config import add_mqtt_args, mqtt_argv


def main() -> None:
    parser = argparse.ArgumentParser(description="SmartQ salon queue (MQTT) - main entrypoint")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_srv = sub.add_parser("server", help="Start the salon queue server")
    add_mqtt_args(p_srv)

    sub.add_parser("customer", help="Customer actions: join, leave, position, watch, ...", add_help=False)
    sub.add_parser("owner", help="Salon owner actions: services, offers, status, analytics", add_help=False)

    args, rest = parser.parse_known_args()

    if args.cmd == "server":
        if rest:
            parser.error(f"unrecognized arguments: {' '.join(rest)}")
        from .manager import main as run

        _dispatch_to_module_main(run, mqtt_argv(args))
        return

    if args.cmd == "customer":
        from .customer import main as run

        _dispatch_to_module_main(run, rest)
        return

    if args.cmd == "owner":
        from .owner import main as run

        _dispatch_to_module_main(run, rest)
        return


def _dispatch_to_module_main(module_main, argv: list[str]) -> None:
    import sys

    old_argv = sys.argv[:]
    try:
        sys.argv = [old_argv[0], *argv]
        module_main()
    finally:
        sys.argv = old_argv


if __name__ == "__main__":
    main()
