import os

from ament_index_python.packages import get_package_share_directory
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument, OpaqueFunction
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def launch_setup(context):
    params = LaunchConfiguration("params_file").perform(context)
    topics = LaunchConfiguration("topics").perform(context)

    # empty "topics" keeps whatever TOPICS the caller's environment has
    return [
        Node(
            package="minimal_publisher",
            executable="minimal_publisher",
            name="minimal_publisher",
            output="screen",
            parameters=[params],
            additional_env={"TOPICS": topics} if topics else None,
        )
    ]


def generate_launch_description():
    pkg_share = get_package_share_directory("minimal_publisher")

    return LaunchDescription([
        DeclareLaunchArgument(
            "params_file",
            default_value=os.path.join(pkg_share, "config", "minimal_publisher.yaml"),
        ),
        DeclareLaunchArgument(
            "topics",
            default_value="",
            description='Topic configuration JSON, e.g. {"topics": [...]}',
        ),
        OpaqueFunction(function=launch_setup),
    ])
