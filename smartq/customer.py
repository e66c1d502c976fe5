from __future__ import annotations

# Customer client.
#
# One subcommand per customer action. Each run sends a single request and
# prints the answer; `watch` stays connected and prints live queue updates.

import argparse
import json
from typing import Any

from .client import send_request, watch_updates
from .config import add_mqtt_args, configure_logging


def _print_response(name: str, resp: dict[str, Any]) -> None:
    if resp.get("type") == "error":
        print(f"[customer {name}] error {resp.get('code')}: {resp.get('message')}")
        return
    mtype = resp.get("type")
    if mtype == "joined":
        entry = resp["entry"]
        print(f"[customer {name}] joined salon {entry['salon_id']} (ticket {entry['position']}, entry {entry['id']})")
    elif mtype == "position":
        pos = resp.get("position")
        if pos is None:
            print(f"[customer {name}] not in queue at {resp['salon_id']}")
        elif pos["rank"] == 0:
            print(f"[customer {name}] being served now ({pos['waiting_count']} waiting)")
        else:
            print(f"[customer {name}] position {pos['rank']} of {pos['waiting_count']}")
    elif mtype == "left":
        print(f"[customer {name}] left queue (entry {resp['entry_id']})")
    else:
        print(json.dumps(resp, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Customer client (MQTT)")
    add_mqtt_args(parser)
    parser.add_argument("--user-id", required=True, help="customer identity")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_salons = sub.add_parser("salons", help="list salons with live queue length")
    p_salons.add_argument("--location", default=None)

    p_salon = sub.add_parser("salon", help="show one salon")
    p_salon.add_argument("--salon-id", required=True)

    p_join = sub.add_parser("join", help="join a salon's queue")
    p_join.add_argument("--salon-id", required=True)
    p_join.add_argument("--service-id", required=True)

    p_leave = sub.add_parser("leave", help="leave a queue while still waiting")
    p_leave.add_argument("--entry-id", required=True)

    p_pos = sub.add_parser("position", help="live position at a salon")
    p_pos.add_argument("--salon-id", required=True)

    sub.add_parser("queues", help="all my queue entries")

    p_review = sub.add_parser("review", help="rate a salon 1-5")
    p_review.add_argument("--salon-id", required=True)
    p_review.add_argument("--rating", type=int, required=True)
    p_review.add_argument("--comment", default=None)

    p_watch = sub.add_parser("watch", help="stream queue updates for salons")
    p_watch.add_argument("--salon-id", action="append", required=True)

    args = parser.parse_args()
    configure_logging(args.log_level)

    conn = {"mqtt_host": args.mqtt_host, "mqtt_port": args.mqtt_port, "namespace": args.namespace}

    if args.cmd == "watch":
        print(f"[customer {args.user_id}] watching {', '.join(args.salon_id)} (Ctrl+C to stop)")
        watch_updates(
            **conn,
            user_id=args.user_id,
            salon_ids=args.salon_id,
            on_update=lambda msg: print(json.dumps(msg)),
        )
        return

    if args.cmd == "salons":
        message: dict[str, Any] = {"type": "list_salons", "location": args.location}
    elif args.cmd == "salon":
        message = {"type": "get_salon", "salon_id": args.salon_id}
    elif args.cmd == "join":
        message = {"type": "join_queue", "salon_id": args.salon_id, "service_id": args.service_id}
    elif args.cmd == "leave":
        message = {"type": "leave_queue", "entry_id": args.entry_id}
    elif args.cmd == "position":
        message = {"type": "my_position", "salon_id": args.salon_id}
    elif args.cmd == "queues":
        message = {"type": "my_queues"}
    else:
        message = {
            "type": "add_review",
            "salon_id": args.salon_id,
            "rating": args.rating,
            "comment": args.comment,
        }

    resp = send_request(**conn, user_id=args.user_id, role="customer", message=message)
    _print_response(args.user_id, resp)


if __name__ == "__main__":
    main()
