#!/usr/bin/env python3
import rclpy
from rclpy.node import Node

from std_msgs.msg import String

from minimal_publisher.topic_names import environ_source, resolve_topic_name


def format_message(count: int) -> str:
    return f"Hello, world! {count}"


class MinimalPublisher(Node):
    """
    Publishes a counted "Hello, world!" String on a timer.

    The output topic is looked up in the deployment's topic configuration
    (TOPICS env var by default) under `logical_topic`, falling back to
    `default_topic` when no override is available.
    """

    def __init__(self, **kwargs):
        super().__init__("minimal_publisher", **kwargs)

        # Topics
        self.declare_parameter("logical_topic", "OUTGOING_MESSAGE")
        self.declare_parameter("default_topic", "topic")
        self.declare_parameter("topics_env_var", "TOPICS")

        # Rate / QoS
        self.declare_parameter("timer_period", 0.5)  # [s]
        self.declare_parameter("qos_depth", 10)

        self.count = 0

        self.topic_name = resolve_topic_name(
            str(self.get_parameter("logical_topic").value),
            str(self.get_parameter("default_topic").value),
            source=environ_source(str(self.get_parameter("topics_env_var").value)),
            logger=self.get_logger(),
        )

        self.pub = self.create_publisher(
            String, self.topic_name, int(self.get_parameter("qos_depth").value)
        )

        timer_period = float(self.get_parameter("timer_period").value)
        self.timer = self.create_timer(max(timer_period, 1e-3), self.timer_callback)

        self.get_logger().info(f"MinimalPublisher started on '{self.topic_name}'.")

    def timer_callback(self):
        msg = String()
        msg.data = format_message(self.count)
        self.get_logger().info(f"Publishing: '{msg.data}'")
        self.pub.publish(msg)
        self.count += 1


def main(args=None):
    rclpy.init(args=args)
    node = MinimalPublisher()
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        rclpy.try_shutdown()


if __name__ == "__main__":
    main()
