from enum import IntEnum


class ContinuityMode(IntEnum):
    """Relationship enforced between the two handles flanking a joint.

    - ``FREE``: handles move independently.
    - ``ALIGNED``: handles are collinear through the joint; each keeps its
      own distance from the joint.
    - ``MIRRORED``: handles are collinear through the joint and at the same
      distance from it.

    The integer values are the ones stored in ``BezierSpline.modes``.
    """

    FREE = 0
    ALIGNED = 1
    MIRRORED = 2
