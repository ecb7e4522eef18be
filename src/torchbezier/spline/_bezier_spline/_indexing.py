"""Index arithmetic for the flat control point layout of a Bezier spline.

Control points are stored as ``joint, handle, handle, joint, ...``: point
``3 * j`` is joint ``j`` and segment ``s`` spans points ``3 * s`` to
``3 * s + 3``. The handles on either side of a joint share its mode, so the
joint governing any point ``i`` is ``(i + 1) // 3``.
"""

from typing import NewType

JointIndex = NewType("JointIndex", int)
SegmentIndex = NewType("SegmentIndex", int)


def is_joint(point_index: int) -> bool:
    """Return True if the point at ``point_index`` is a joint."""
    return point_index % 3 == 0


def joint_index(point_index: int) -> JointIndex:
    """Return the joint whose handle triple contains ``point_index``."""
    return JointIndex((point_index + 1) // 3)


def joint_point_index(joint: JointIndex) -> int:
    """Return the point index of ``joint``."""
    return joint * 3


def segment_point_index(segment: SegmentIndex) -> int:
    """Return the point index of the first control point of ``segment``."""
    return segment * 3


def segment_count(point_count: int) -> int:
    return (point_count - 1) // 3


def wrap_handle_index(index: int, point_count: int) -> int:
    """
    Wrap a handle index of a closed spline back into the point array.

    On a closed spline the first and last points are the same joint, so
    the handle before point 0 is point ``point_count - 2`` and the handle
    after the last point is point 1. Indices already in range are returned
    unchanged.
    """
    if index < 0:
        return index + point_count - 1

    if index >= point_count:
        return index - point_count + 1

    return index
