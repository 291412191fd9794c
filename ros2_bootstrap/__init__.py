"""
ros2-bootstrap: prepare a local ROS 2 workspace from a private repository.

The package checks SSH access to the code host, clones the workspace
repository into ``ros2_ws/src`` and keeps the user's shell profile
sourcing ROS 2 and the workspace overlay.
"""

__version__ = "0.1.0"
