"""Bezier segment representation and convenience function."""

from typing import Callable, Union

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from ._bezier_evaluate import bezier_evaluate


@tensorclass
class BezierCurve:
    """Single Bezier segment defined by its control points.

    Only quadratic (3 control points) and cubic (4 control points) segments
    are supported by the evaluators. The curve parameter t ranges from 0 to
    1, with:
    - t=0 corresponding to the first control point
    - t=1 corresponding to the last control point

    Attributes
    ----------
    control_points : Tensor
        Control points, shape (n+1, *value_shape) for degree n
    """

    control_points: Tensor

    @property
    def degree(self) -> int:
        """Return the degree of the Bezier curve."""
        return self.control_points.shape[0] - 1


def bezier(
    control_points: torch.Tensor,
) -> Callable[[Union[float, torch.Tensor]], torch.Tensor]:
    """Create a quadratic or cubic Bezier curve from control points.

    This is a convenience function that creates a BezierCurve and returns
    a callable that evaluates it. Parameters outside [0, 1] are clamped.

    Parameters
    ----------
    control_points : Tensor
        Control points, shape (3, *value_shape) or (4, *value_shape).
        For a 3D curve, shape would be (4, 3).

    Returns
    -------
    curve : Callable[[Tensor], Tensor]
        Function that evaluates the Bezier curve at given parameter values.

    Examples
    --------
    >>> import torch
    >>> control_points = torch.tensor(
    ...     [[0., 0., 0.], [1., 0., 0.], [2., 0., 0.], [3., 0., 0.]]
    ... )
    >>> curve = bezier(control_points)
    >>> curve(torch.tensor([0.0, 0.5, 1.0]))
    tensor([[0.0000, 0.0000, 0.0000],
            [1.5000, 0.0000, 0.0000],
            [3.0000, 0.0000, 0.0000]])
    """
    curve = BezierCurve(
        control_points=control_points,
        batch_size=[],
    )
    return lambda t: bezier_evaluate(curve, t)
