"""MQTT topic helpers.

We keep topic construction in one place so server and clients agree on naming.

Topic layout under a configurable namespace (default: `smartq/v1`):

Request/response:
- `<ns>/queue/requests`
- `<ns>/queue/responses/<client_id>`

Real-time channel:
- `<ns>/channel/requests`
    authenticate / subscribe / unsubscribe / disconnect handshakes.
- `<ns>/users/<user_id>/updates`
    Queue updates for the salons a user subscribed to.

Several independent deployments can share a broker by changing the
`namespace` parameter (e.g. `--namespace demo/alice`).
"""

from __future__ import annotations

DEFAULT_NAMESPACE = "smartq/v1"


def queue_requests(namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/queue/requests"


def queue_responses(client_id: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/queue/responses/{client_id}"


def channel_requests(namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/channel/requests"


def user_updates(user_id: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Per-user stream of `queue_update` messages.

    The server publishes here once per subscribed salon mutation.
    """
    return f"{namespace}/users/{user_id}/updates"
