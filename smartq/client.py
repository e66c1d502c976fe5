from __future__ import annotations

# Client-side helpers shared by the customer and owner CLIs.
#
# Clients are short-lived processes:
# - connect to broker
# - publish one request carrying the caller's identity
# - wait for the correlated response and exit
#
# `watch_updates` is the long-lived exception: it performs the channel
# handshake and prints queue updates until interrupted.

import time
from typing import Any, Callable

from .mqtt_client import MqttClient
from .mqtt_topics import channel_requests, queue_requests, queue_responses, user_updates


def _client_id(user_id: str) -> str:
    # Unique per process so several clients of one user can run concurrently.
    return f"client-{user_id}-{int(time.time() * 1000)}"


def send_request(
    *,
    mqtt_host: str,
    mqtt_port: int,
    namespace: str,
    user_id: str,
    role: str,
    message: dict[str, Any],
    timeout: float = 5.0,
) -> dict[str, Any]:
    client_id = _client_id(user_id)
    mqtt = MqttClient(client_id=client_id, host=mqtt_host, port=mqtt_port)
    mqtt.start()

    reply_topic = queue_responses(client_id, namespace)
    mqtt.subscribe(reply_topic)

    try:
        return mqtt.request(
            request_topic=queue_requests(namespace),
            response_topic=reply_topic,
            message={**message, "user_id": user_id, "role": role},
            timeout=timeout,
        )
    finally:
        mqtt.stop()


def watch_updates(
    *,
    mqtt_host: str,
    mqtt_port: int,
    namespace: str,
    user_id: str,
    salon_ids: list[str],
    on_update: Callable[[dict[str, Any]], None],
    timeout: float = 5.0,
) -> None:
    """Authenticate on the channel, subscribe to salons and stream updates.

    Blocks until KeyboardInterrupt. Updates published before the subscription
    are not replayed; fetch the current list with a request first.
    """
    client_id = _client_id(user_id)
    mqtt = MqttClient(client_id=client_id, host=mqtt_host, port=mqtt_port)
    mqtt.start()

    reply_topic = queue_responses(client_id, namespace)
    updates_topic = user_updates(user_id, namespace)
    mqtt.subscribe(reply_topic)
    mqtt.subscribe(updates_topic)

    def handle(topic: str, msg: dict[str, Any]) -> None:
        if topic == updates_topic and msg.get("type") == "queue_update":
            on_update(msg)

    mqtt.add_handler(handle)

    def channel(message: dict[str, Any]) -> dict[str, Any]:
        return mqtt.request(
            request_topic=channel_requests(namespace),
            response_topic=reply_topic,
            message={**message, "user_id": user_id},
            timeout=timeout,
        )

    try:
        resp = channel({"type": "authenticate"})
        if resp.get("type") != "authenticated":
            raise RuntimeError(f"Channel handshake failed: {resp}")
        for salon_id in salon_ids:
            resp = channel({"type": "subscribe", "salon_id": salon_id})
            if resp.get("type") != "subscribed":
                raise RuntimeError(f"Subscription to {salon_id} failed: {resp}")
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        try:
            mqtt.publish(channel_requests(namespace), {"type": "disconnect", "user_id": user_id})
        except ConnectionError:
            pass
        mqtt.stop()
