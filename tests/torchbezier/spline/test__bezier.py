"""Tests for Bezier segment functions."""

import math

import pytest
import torch

from torchbezier.spline import (
    BezierCurve,
    DegreeError,
    bezier,
    bezier_derivative_evaluate,
    bezier_evaluate,
    bezier_length,
    cubic_bezier_position,
    cubic_bezier_tangent,
    quadratic_bezier_tangent,
)


def _straight_line():
    return torch.tensor(
        [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [2.0, 0.0, 0.0], [3.0, 0.0, 0.0]]
    )


def _quarter_circle(radius=10.0):
    k = 0.5522847498 * radius
    return torch.tensor(
        [
            [radius, 0.0, 0.0],
            [radius, k, 0.0],
            [k, radius, 0.0],
            [0.0, radius, 0.0],
        ],
        dtype=torch.float64,
    )


class TestBezierCurve:
    """Tests for BezierCurve tensorclass."""

    def test_degree_property(self):
        """Should return correct degree."""
        # Quadratic (degree 2)
        cp = torch.tensor([[0.0], [0.5], [1.0]])
        curve = BezierCurve(control_points=cp, batch_size=[])
        assert curve.degree == 2

        # Cubic (degree 3)
        cp = torch.tensor([[0.0], [0.25], [0.75], [1.0]])
        curve = BezierCurve(control_points=cp, batch_size=[])
        assert curve.degree == 3

    def test_convenience_function(self):
        """bezier() should return an evaluating callable."""
        curve = bezier(_straight_line())

        result = curve(torch.tensor([0.0, 0.5, 1.0]))

        expected = torch.tensor(
            [[0.0, 0.0, 0.0], [1.5, 0.0, 0.0], [3.0, 0.0, 0.0]]
        )
        assert torch.allclose(result, expected)


class TestBezierEvaluate:
    """Tests for bezier_evaluate function."""

    def test_evenly_spaced_cubic_is_linear(self):
        """Evenly spaced collinear control points move at constant speed."""
        curve = BezierCurve(control_points=_straight_line(), batch_size=[])

        t = torch.tensor([0.0, 0.25, 0.5, 0.75, 1.0])
        result = bezier_evaluate(curve, t)

        assert result.shape == (5, 3)
        assert torch.allclose(result[:, 0], 3.0 * t)
        assert torch.allclose(result[:, 1:], torch.zeros(5, 2))

    def test_quadratic_bezier_2d(self):
        """Quadratic Bezier in 2D."""
        control_points = torch.tensor([[0.0, 0.0], [0.5, 1.0], [1.0, 0.0]])
        curve = BezierCurve(control_points=control_points, batch_size=[])

        # At midpoint: B(0.5) = 0.25*P0 + 0.5*P1 + 0.25*P2 = [0.5, 0.5]
        result = bezier_evaluate(curve, torch.tensor(0.5))
        assert torch.allclose(result, torch.tensor([0.5, 0.5]))

    def test_cubic_endpoints(self):
        """Cubic Bezier passes through its end control points."""
        control_points = torch.tensor(
            [[0.0, 0.0], [0.0, 1.0], [1.0, 1.0], [1.0, 0.0]]
        )
        curve = BezierCurve(control_points=control_points, batch_size=[])

        assert torch.allclose(
            bezier_evaluate(curve, 0.0), torch.tensor([0.0, 0.0])
        )
        assert torch.allclose(
            bezier_evaluate(curve, 1.0), torch.tensor([1.0, 0.0])
        )
        # B(0.5) = 0.375*P1 + 0.375*P2 + 0.125*P3
        assert torch.allclose(
            bezier_evaluate(curve, 0.5), torch.tensor([0.5, 0.75])
        )

    def test_parameter_is_clamped(self):
        """Parameters outside [0, 1] are clamped, not rejected."""
        curve = BezierCurve(control_points=_straight_line(), batch_size=[])

        assert torch.allclose(
            bezier_evaluate(curve, torch.tensor(-0.5)),
            torch.tensor([0.0, 0.0, 0.0]),
        )
        assert torch.allclose(
            bezier_evaluate(curve, torch.tensor(1.5)),
            torch.tensor([3.0, 0.0, 0.0]),
        )

    def test_evaluate_scalar_query(self):
        """Should handle scalar parameter."""
        curve = BezierCurve(control_points=_straight_line(), batch_size=[])

        result = bezier_evaluate(curve, torch.tensor(0.5))

        assert result.shape == (3,)

    def test_evaluate_batch_query(self):
        """Should handle batched parameters."""
        curve = BezierCurve(control_points=_straight_line(), batch_size=[])

        t = torch.tensor([[0.0, 0.5], [0.75, 1.0]])
        result = bezier_evaluate(curve, t)

        assert result.shape == (2, 2, 3)

    def test_unsupported_degree(self):
        """Linear curves are not evaluated."""
        control_points = torch.tensor([[0.0], [1.0]])
        curve = BezierCurve(control_points=control_points, batch_size=[])

        with pytest.raises(DegreeError):
            bezier_evaluate(curve, torch.tensor(0.5))

    def test_gradient_flows_to_control_points(self):
        """Gradient check for Bezier evaluation."""
        control_points = _quarter_circle().requires_grad_(True)
        curve = BezierCurve(control_points=control_points, batch_size=[])

        t = torch.tensor([0.25, 0.5, 0.75], dtype=torch.float64)

        loss = bezier_evaluate(curve, t).sum()
        loss.backward()

        assert control_points.grad is not None


class TestBezierDerivativeEvaluate:
    """Tests for bezier_derivative_evaluate function."""

    def test_evenly_spaced_cubic_has_constant_tangent(self):
        """Tangent of a linear-speed cubic is 3 * (P1 - P0) everywhere."""
        curve = BezierCurve(control_points=_straight_line(), batch_size=[])

        t = torch.linspace(0.0, 1.0, 7)
        result = bezier_derivative_evaluate(curve, t)

        expected = torch.tensor([3.0, 0.0, 0.0]).expand(7, 3)
        assert torch.allclose(result, expected)

    def test_tangent_is_not_normalized(self):
        """The tangent magnitude is the parametric speed."""
        control_points = 2.0 * _straight_line()
        curve = BezierCurve(control_points=control_points, batch_size=[])

        result = bezier_derivative_evaluate(curve, 0.3)

        assert torch.allclose(
            torch.linalg.vector_norm(result), torch.tensor(6.0)
        )

    def test_quadratic_tangent_at_endpoints(self):
        """B'(0) = 2(P1 - P0), B'(1) = 2(P2 - P1)."""
        control_points = torch.tensor([[0.0, 0.0], [0.5, 1.0], [1.0, 0.0]])
        curve = BezierCurve(control_points=control_points, batch_size=[])

        assert torch.allclose(
            bezier_derivative_evaluate(curve, 0.0), torch.tensor([1.0, 2.0])
        )
        assert torch.allclose(
            bezier_derivative_evaluate(curve, 1.0), torch.tensor([1.0, -2.0])
        )

    def test_parameter_is_clamped(self):
        """Tangent beyond the end equals the tangent at the end."""
        control_points = _quarter_circle()
        curve = BezierCurve(control_points=control_points, batch_size=[])

        assert torch.allclose(
            bezier_derivative_evaluate(curve, 1.5),
            bezier_derivative_evaluate(curve, 1.0),
        )

    def test_matches_finite_difference(self):
        """Tangent should match a central finite difference."""
        control_points = _quarter_circle()
        curve = BezierCurve(control_points=control_points, batch_size=[])

        t = torch.tensor([0.2, 0.5, 0.8], dtype=torch.float64)
        h = 1e-6

        numeric = (
            bezier_evaluate(curve, t + h) - bezier_evaluate(curve, t - h)
        ) / (2 * h)

        assert torch.allclose(
            bezier_derivative_evaluate(curve, t), numeric, atol=1e-5
        )


class TestBezierKernels:
    """Tests for the broadcasting Bernstein kernels."""

    def test_one_segment_per_query(self):
        """Control points batched along the query dimension."""
        p0 = torch.tensor([[0.0, 0.0], [0.0, 1.0]])
        p1 = torch.tensor([[1.0, 0.0], [1.0, 1.0]])
        p2 = torch.tensor([[2.0, 0.0], [2.0, 1.0]])
        p3 = torch.tensor([[3.0, 0.0], [3.0, 1.0]])
        t = torch.tensor([[0.0], [1.0]])

        result = cubic_bezier_position(p0, p1, p2, p3, t)

        assert torch.allclose(result, torch.tensor([[0.0, 0.0], [3.0, 1.0]]))
        assert torch.allclose(
            cubic_bezier_tangent(p0, p1, p2, p3, t),
            torch.tensor([[3.0, 0.0], [3.0, 0.0]]),
        )

    def test_quadratic_tangent_clamps(self):
        p0 = torch.tensor([0.0])
        p1 = torch.tensor([1.0])
        p2 = torch.tensor([3.0])

        assert torch.allclose(
            quadratic_bezier_tangent(p0, p1, p2, torch.tensor(-1.0)),
            torch.tensor([2.0]),
        )


class TestBezierLength:
    """Tests for bezier_length function."""

    def test_straight_segment(self):
        """Length of a straight segment is its chord."""
        curve = BezierCurve(control_points=_straight_line(), batch_size=[])

        result = bezier_length(curve)

        assert result.dim() == 0
        assert torch.allclose(result, torch.tensor(3.0), atol=1e-5)

    def test_quarter_circle(self):
        """Cubic approximation of a quarter circle."""
        curve = BezierCurve(control_points=_quarter_circle(), batch_size=[])

        result = bezier_length(curve)

        assert abs(result.item() - 5.0 * math.pi) < 0.02

    def test_higher_precision_is_longer(self):
        """More chords can only increase the inscribed length."""
        curve = BezierCurve(control_points=_quarter_circle(), batch_size=[])

        coarse = bezier_length(curve, precision=1)
        fine = bezier_length(curve, precision=8)

        assert fine >= coarse

    def test_coincident_points(self):
        """A degenerate segment has zero length and does not fail."""
        control_points = torch.ones(4, 3)
        curve = BezierCurve(control_points=control_points, batch_size=[])

        result = bezier_length(curve)

        assert result.item() == 0.0

    def test_short_segment_uses_one_pass(self):
        """A rough length below 0.5 still yields a chord."""
        control_points = 0.1 * _straight_line()
        curve = BezierCurve(control_points=control_points, batch_size=[])

        result = bezier_length(curve)

        assert torch.allclose(result, torch.tensor(0.3), atol=1e-6)

    def test_requires_cubic(self):
        control_points = torch.tensor([[0.0, 0.0], [0.5, 1.0], [1.0, 0.0]])
        curve = BezierCurve(control_points=control_points, batch_size=[])

        with pytest.raises(DegreeError):
            bezier_length(curve)

    def test_invalid_precision(self):
        curve = BezierCurve(control_points=_straight_line(), batch_size=[])

        with pytest.raises(ValueError):
            bezier_length(curve, precision=0)
