import os
from glob import glob
from setuptools import find_packages, setup

package_name = "minimal_publisher"

setup(
    name=package_name,
    version="0.0.0",
    packages=find_packages(exclude=["test"]),
    data_files=[
        ("share/ament_index/resource_index/packages", ["resource/" + package_name]),
        ("share/" + package_name, ["package.xml"]),
        (os.path.join("share", package_name, "launch"), glob("launch/*.launch.py")),
        (os.path.join("share", package_name, "config"), glob("config/*.yaml")),
    ],
    install_requires=["setuptools"],
    zip_safe=True,
    maintainer="Rudolf Krecht",
    maintainer_email="krecht.rudolf@ga.sze.hu",
    description="Counted hello-world publisher with deployment-configurable topic names.",
    license="Apache-2.0",
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "minimal_publisher = minimal_publisher.minimal_publisher_node:main",
        ],
    },
)
