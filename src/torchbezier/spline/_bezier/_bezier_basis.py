"""Bernstein-basis kernels for quadratic and cubic Bezier segments.

The kernels take the control points as separate tensors and broadcast them
against ``t``, so a batch of queries can be evaluated on a batch of segments
(one segment per query) in a single call. ``t`` is clamped into [0, 1].
"""

from torch import Tensor


def quadratic_bezier_position(
    p0: Tensor,
    p1: Tensor,
    p2: Tensor,
    t: Tensor,
) -> Tensor:
    """
    Evaluate a quadratic Bezier segment.

    B(t) = (1-t)² P0 + 2(1-t)t P1 + t² P2
    """
    t = t.clamp(0.0, 1.0)
    one_minus_t = 1.0 - t

    return (
        one_minus_t * one_minus_t * p0
        + 2.0 * one_minus_t * t * p1
        + t * t * p2
    )


def quadratic_bezier_tangent(
    p0: Tensor,
    p1: Tensor,
    p2: Tensor,
    t: Tensor,
) -> Tensor:
    """
    First derivative of a quadratic Bezier segment.

    B'(t) = 2(1-t)(P1 - P0) + 2t(P2 - P1)

    t is clamped into [0, 1] like the other kernels, so the tangent past
    either end is the end tangent rather than an extrapolation.
    """
    t = t.clamp(0.0, 1.0)

    return 2.0 * (1.0 - t) * (p1 - p0) + 2.0 * t * (p2 - p1)


def cubic_bezier_position(
    p0: Tensor,
    p1: Tensor,
    p2: Tensor,
    p3: Tensor,
    t: Tensor,
) -> Tensor:
    """
    Evaluate a cubic Bezier segment.

    B(t) = (1-t)³ P0 + 3(1-t)²t P1 + 3(1-t)t² P2 + t³ P3
    """
    t = t.clamp(0.0, 1.0)
    one_minus_t = 1.0 - t

    return (
        one_minus_t * one_minus_t * one_minus_t * p0
        + 3.0 * one_minus_t * one_minus_t * t * p1
        + 3.0 * one_minus_t * t * t * p2
        + t * t * t * p3
    )


def cubic_bezier_tangent(
    p0: Tensor,
    p1: Tensor,
    p2: Tensor,
    p3: Tensor,
    t: Tensor,
) -> Tensor:
    """
    First derivative of a cubic Bezier segment.

    B'(t) = 3(1-t)²(P1 - P0) + 6(1-t)t(P2 - P1) + 3t²(P3 - P2)

    The result is not normalized: its magnitude is the parametric speed.
    """
    t = t.clamp(0.0, 1.0)
    one_minus_t = 1.0 - t

    return (
        3.0 * one_minus_t * one_minus_t * (p1 - p0)
        + 6.0 * one_minus_t * t * (p2 - p1)
        + 3.0 * t * t * (p3 - p2)
    )
