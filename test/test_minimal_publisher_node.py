import json

import pytest

rclpy = pytest.importorskip("rclpy")
pytest.importorskip("std_msgs")

from minimal_publisher.minimal_publisher_node import MinimalPublisher, format_message  # noqa: E402
from minimal_publisher.topic_names import sanitize_and_checksum  # noqa: E402


class FakePublisher:
    def __init__(self):
        self.sent = []

    def publish(self, msg):
        self.sent.append(msg.data)


@pytest.fixture
def ros_context():
    rclpy.init()
    yield
    rclpy.try_shutdown()


def test_format_message():
    assert format_message(0) == "Hello, world! 0"
    assert format_message(3) == "Hello, world! 3"


def test_node_uses_default_topic_without_configuration(monkeypatch, ros_context):
    monkeypatch.delenv("TOPICS", raising=False)
    node = MinimalPublisher()
    try:
        assert node.topic_name == "topic"
        assert node.pub.topic_name == "/topic"
    finally:
        node.destroy_node()


def test_node_uses_configured_topic(monkeypatch, ros_context):
    blob = {"topics": [{"topic_name": "OUTGOING_MESSAGE", "topic_key": "deploy/key-1"}]}
    monkeypatch.setenv("TOPICS", json.dumps(blob))
    node = MinimalPublisher()
    try:
        assert node.topic_name == sanitize_and_checksum("deploy/key-1")
    finally:
        node.destroy_node()


def test_timer_callback_publishes_counted_messages(monkeypatch, ros_context):
    monkeypatch.delenv("TOPICS", raising=False)
    node = MinimalPublisher()
    try:
        node.pub = FakePublisher()
        node.timer_callback()
        node.timer_callback()
        assert node.pub.sent == ["Hello, world! 0", "Hello, world! 1"]
        assert node.count == 2
    finally:
        node.destroy_node()


def test_node_honors_topics_env_var_parameter(monkeypatch, ros_context):
    from rclpy.parameter import Parameter

    monkeypatch.delenv("TOPICS", raising=False)
    blob = {"topics": [{"topic_name": "OUTGOING_MESSAGE", "topic_key": "site-a"}]}
    monkeypatch.setenv("SITE_TOPICS", json.dumps(blob))
    node = MinimalPublisher(
        parameter_overrides=[Parameter("topics_env_var", value="SITE_TOPICS")]
    )
    try:
        assert node.topic_name == sanitize_and_checksum("site-a")
    finally:
        node.destroy_node()
