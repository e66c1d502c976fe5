from __future__ import annotations

# Salon owner client.
#
# Owners create their salon, its services and offers, move queue entries
# forward (in-progress, completed, no-show) and read analytics.

import argparse
import json

from .client import send_request
from .config import add_mqtt_args, configure_logging
from .models import QueueStatus


def main() -> None:
    parser = argparse.ArgumentParser(description="Salon owner client (MQTT)")
    add_mqtt_args(parser)
    parser.add_argument("--user-id", required=True, help="owner identity")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_salon = sub.add_parser("create-salon", help="register a salon")
    p_salon.add_argument("--name", required=True)
    p_salon.add_argument("--location", required=True)
    p_salon.add_argument("--description", default=None)

    p_update = sub.add_parser("update-salon", help="edit a salon's name, location or description")
    p_update.add_argument("--salon-id", required=True)
    p_update.add_argument("--name", default=None)
    p_update.add_argument("--location", default=None)
    p_update.add_argument("--description", default=None)

    p_service = sub.add_parser("add-service", help="add a service to a salon")
    p_service.add_argument("--salon-id", required=True)
    p_service.add_argument("--name", required=True)
    p_service.add_argument("--duration", type=int, required=True, help="minutes")
    p_service.add_argument("--price", required=True)
    p_service.add_argument("--description", default=None)

    p_offer = sub.add_parser("create-offer", help="publish a discount")
    p_offer.add_argument("--salon-id", required=True)
    p_offer.add_argument("--title", required=True)
    p_offer.add_argument("--discount", required=True, help="percentage")
    p_offer.add_argument("--valid-until", required=True, help="ISO timestamp")
    p_offer.add_argument("--description", default="")

    p_deactivate = sub.add_parser("deactivate-offer", help="hide an offer without deleting it")
    p_deactivate.add_argument("--offer-id", required=True)

    p_activate = sub.add_parser("activate-offer", help="show a deactivated offer again")
    p_activate.add_argument("--offer-id", required=True)

    p_offers = sub.add_parser("offers", help="all offers of a salon, inactive ones included")
    p_offers.add_argument("--salon-id", required=True)

    p_delete = sub.add_parser("delete-offer", help="delete an offer")
    p_delete.add_argument("--offer-id", required=True)

    p_queue = sub.add_parser("queue", help="list a salon's queue entries")
    p_queue.add_argument("--salon-id", required=True)

    p_status = sub.add_parser("status", help="move a queue entry forward")
    p_status.add_argument("--entry-id", required=True)
    p_status.add_argument(
        "--status",
        required=True,
        choices=[s.value for s in QueueStatus if s != QueueStatus.WAITING],
    )

    p_analytics = sub.add_parser("analytics", help="salon performance snapshot")
    p_analytics.add_argument("--salon-id", required=True)

    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.cmd == "create-salon":
        message = {
            "type": "create_salon",
            "name": args.name,
            "location": args.location,
            "description": args.description,
        }
    elif args.cmd == "update-salon":
        message = {"type": "update_salon", "salon_id": args.salon_id}
        for key in ("name", "location", "description"):
            if getattr(args, key) is not None:
                message[key] = getattr(args, key)
    elif args.cmd == "add-service":
        message = {
            "type": "add_service",
            "salon_id": args.salon_id,
            "name": args.name,
            "duration": args.duration,
            "price": args.price,
            "description": args.description,
        }
    elif args.cmd == "create-offer":
        message = {
            "type": "create_offer",
            "salon_id": args.salon_id,
            "title": args.title,
            "discount": args.discount,
            "valid_until": args.valid_until,
            "description": args.description,
        }
    elif args.cmd == "deactivate-offer":
        message = {"type": "update_offer", "offer_id": args.offer_id, "is_active": False}
    elif args.cmd == "activate-offer":
        message = {"type": "update_offer", "offer_id": args.offer_id, "is_active": True}
    elif args.cmd == "offers":
        message = {"type": "salon_offers", "salon_id": args.salon_id}
    elif args.cmd == "delete-offer":
        message = {"type": "delete_offer", "offer_id": args.offer_id}
    elif args.cmd == "queue":
        message = {"type": "salon_queue", "salon_id": args.salon_id}
    elif args.cmd == "status":
        message = {"type": "update_status", "entry_id": args.entry_id, "status": args.status}
    else:
        message = {"type": "analytics", "salon_id": args.salon_id}

    resp = send_request(
        mqtt_host=args.mqtt_host,
        mqtt_port=args.mqtt_port,
        namespace=args.namespace,
        user_id=args.user_id,
        role="salon_owner",
        message=message,
    )
    if resp.get("type") == "error":
        print(f"[owner {args.user_id}] error {resp.get('code')}: {resp.get('message')}")
    else:
        print(json.dumps(resp, indent=2))


if __name__ == "__main__":
    main()
