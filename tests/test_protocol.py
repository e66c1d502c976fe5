from smartq.mqtt_topics import channel_requests, queue_requests, queue_responses, user_updates


def test_topic_helpers():
    ns = "demo/v1"
    assert queue_requests(ns) == "demo/v1/queue/requests"
    assert queue_responses("c1", ns) == "demo/v1/queue/responses/c1"
    assert channel_requests(ns) == "demo/v1/channel/requests"
    assert user_updates("u1", ns) == "demo/v1/users/u1/updates"


def test_default_namespace():
    assert queue_requests() == "smartq/v1/queue/requests"
