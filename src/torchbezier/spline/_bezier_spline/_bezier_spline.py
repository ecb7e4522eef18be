"""Composite cubic Bezier spline with per-joint continuity modes."""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Union

import torch
from torch import Tensor

from .._bezier import (
    DEFAULT_LENGTH_PRECISION,
    BezierCurve,
    bezier_derivative_evaluate,
    bezier_evaluate,
    bezier_length,
)
from .._control_point_index_error import ControlPointIndexError
from .._minimum_segment_count_error import MinimumSegmentCountError
from ._continuity_mode import ContinuityMode
from ._indexing import (
    is_joint,
    joint_index,
    joint_point_index,
    segment_count,
    segment_point_index,
    wrap_handle_index,
)
from ._vector import normalize

DEFAULT_SPACING = 3.0

Transform = Callable[[Tensor], Tensor]


class BezierSpline:
    """Chain of cubic Bezier segments sharing their end points.

    The spline stores ``3 * K + 1`` control points for ``K`` segments.
    Every third point, starting at index 0, is a joint; the two points
    between consecutive joints are the handles of that segment. Each joint
    has a :class:`ContinuityMode` that constrains its two flanking handles.

    Points and modes must be changed through :meth:`set_point`,
    :meth:`set_mode` and the structural edits so that the mode constraints
    and the loop closure hold. Segment lengths are a cached snapshot: call
    :meth:`recalculate_lengths` after editing points and before relying on
    :attr:`total_length` or on the uniform parameterization.

    Parameters
    ----------
    spacing : float
        Length of the default spline. :meth:`append_segment` steps its new
        points out by ``spacing / 3``, ``spacing - spacing / 3`` and
        ``spacing`` in turn. Default is 3.
    length_precision : int
        Chords per unit of rough length used by :func:`bezier_length`.
        Default is 2.
    loop : bool
        Close the spline. Default is False.
    transform : callable, optional
        Maps local positions, shape (..., D), to the host frame. Applied by
        the evaluation functions, never to the stored points.
    dtype : torch.dtype, optional
        Floating point type of the control points. Default is
        ``torch.get_default_dtype()``.
    device : torch.device, optional
        Device of the control points. Default is CPU.

    Examples
    --------
    >>> spline = BezierSpline()
    >>> spline.points
    tensor([[0., 0., 0.],
            [1., 0., 0.],
            [2., 0., 0.],
            [3., 0., 0.]])
    >>> spline.append_segment()
    >>> spline.segment_count
    2
    """

    def __init__(
        self,
        *,
        spacing: float = DEFAULT_SPACING,
        length_precision: int = DEFAULT_LENGTH_PRECISION,
        loop: bool = False,
        transform: Optional[Transform] = None,
        dtype: Optional[torch.dtype] = None,
        device: Optional[Union[str, torch.device]] = None,
    ):
        if length_precision < 1:
            raise ValueError(
                f"length_precision must be at least 1, got {length_precision}"
            )

        self.spacing = float(spacing)
        self.length_precision = length_precision
        self.transform = transform

        self._dtype = dtype if dtype is not None else torch.get_default_dtype()
        self._device = torch.device(device) if device is not None else None

        self.reset()

        if loop:
            self.loop = True

    @classmethod
    def from_control_points(
        cls,
        control_points: Union[Tensor, Sequence],
        modes: Optional[Union[Tensor, Sequence]] = None,
        *,
        loop: bool = False,
        spacing: float = DEFAULT_SPACING,
        length_precision: int = DEFAULT_LENGTH_PRECISION,
        transform: Optional[Transform] = None,
    ) -> BezierSpline:
        """
        Restore a spline from its raw point and mode arrays.

        The arrays are taken as they are: no mode is enforced and the loop is
        not closed, so a host can round-trip :attr:`points`, :attr:`modes`
        and :attr:`loop` unchanged. Lengths are computed.

        Parameters
        ----------
        control_points : Tensor or sequence
            Shape (3 * K + 1, D) with K >= 1.
        modes : Tensor or sequence, optional
            K + 1 :class:`ContinuityMode` values. Default is all ``FREE``.
        loop : bool
            Whether the spline is closed.

        Raises
        ------
        ValueError
            If the arrays do not describe a valid spline.
        """
        points = torch.as_tensor(control_points)

        if not points.is_floating_point():
            points = points.to(torch.get_default_dtype())

        if points.dim() != 2:
            raise ValueError(
                f"control_points must have shape (3 * K + 1, D), "
                f"got {tuple(points.shape)}"
            )

        count = points.shape[0]

        if count < 4 or (count - 1) % 3 != 0:
            raise ValueError(
                f"control_points must hold 3 * K + 1 points with K >= 1, "
                f"got {count}"
            )

        joint_count = segment_count(count) + 1

        if modes is None:
            modes = torch.full(
                (joint_count,),
                int(ContinuityMode.FREE),
                dtype=torch.int64,
                device=points.device,
            )
        else:
            modes = torch.as_tensor(modes, device=points.device).to(
                torch.int64
            )

        if modes.shape != (joint_count,):
            raise ValueError(
                f"modes must hold {joint_count} values, "
                f"got shape {tuple(modes.shape)}"
            )

        for mode in modes.tolist():
            ContinuityMode(mode)

        spline = cls(
            spacing=spacing,
            length_precision=length_precision,
            transform=transform,
            dtype=points.dtype,
            device=points.device,
        )
        spline._points = points.clone()
        spline._modes = modes.clone()
        spline._loop = bool(loop)
        spline.recalculate_lengths()

        return spline

    def reset(self) -> None:
        """Restore the default one-segment, open, mirrored spline."""
        s = self.spacing

        self._points = torch.tensor(
            [
                [0.0, 0.0, 0.0],
                [s / 3, 0.0, 0.0],
                [s - s / 3, 0.0, 0.0],
                [s, 0.0, 0.0],
            ],
            dtype=self._dtype,
            device=self._device,
        )
        self._modes = torch.tensor(
            [int(ContinuityMode.MIRRORED), int(ContinuityMode.MIRRORED)],
            dtype=torch.int64,
            device=self._points.device,
        )
        self._loop = False

        self.recalculate_lengths()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"segment_count={self.segment_count}, "
            f"loop={self._loop}, "
            f"total_length={self._total_length.item():.6g})"
        )

    # Accessors

    @property
    def dtype(self) -> torch.dtype:
        return self._points.dtype

    @property
    def device(self) -> torch.device:
        return self._points.device

    @property
    def points(self) -> Tensor:
        """Control points, shape (point_count, D). A copy."""
        return self._points.clone()

    @property
    def modes(self) -> Tensor:
        """Joint modes as int64 values, shape (segment_count + 1,). A copy."""
        return self._modes.clone()

    @property
    def loop(self) -> bool:
        return self._loop

    @loop.setter
    def loop(self, value: bool) -> None:
        self._loop = bool(value)

        if self._loop:
            self._modes[-1] = self._modes[0]
            self.set_point(0, self._points[0].clone())

    @property
    def point_count(self) -> int:
        return self._points.shape[0]

    @property
    def segment_count(self) -> int:
        return segment_count(self.point_count)

    @property
    def segment_lengths(self) -> Tensor:
        """Cached approximate length of every segment, shape (K,)."""
        return self._segment_lengths.clone()

    @property
    def total_length(self) -> Tensor:
        """Cached approximate length of the spline, a 0-dim tensor."""
        return self._total_length.clone()

    def get_segment(self, segment: int) -> BezierCurve:
        """Return a copy of ``segment`` as a cubic :class:`BezierCurve`."""
        if not 0 <= segment < self.segment_count:
            raise ControlPointIndexError(
                f"segment index {segment} out of range "
                f"[0, {self.segment_count})"
            )

        start = segment_point_index(segment)

        return BezierCurve(
            control_points=self._points[start : start + 4].clone(),
            batch_size=[],
        )

    # Control points

    def _check_point_index(self, index: int) -> None:
        if not 0 <= index < self.point_count:
            raise ControlPointIndexError(
                f"control point index {index} out of range "
                f"[0, {self.point_count})"
            )

    def _as_position(self, position: Union[Tensor, Sequence[float]]) -> Tensor:
        position = torch.as_tensor(
            position, dtype=self.dtype, device=self.device
        )

        if position.shape != self._points.shape[1:]:
            raise ValueError(
                f"position must have shape {tuple(self._points.shape[1:])}, "
                f"got {tuple(position.shape)}"
            )

        return position

    def get_point(self, index: int) -> Tensor:
        """Return a copy of the control point at ``index``."""
        self._check_point_index(index)

        return self._points[index].clone()

    def set_point(
        self,
        index: int,
        position: Union[Tensor, Sequence[float]],
    ) -> None:
        """
        Move the control point at ``index`` to ``position``.

        Moving a joint translates its handles by the same displacement. On a
        closed spline the first and last joints move together. The mode of
        the joint governing ``index`` is then enforced.

        Raises
        ------
        ControlPointIndexError
            If ``index`` is outside ``[0, point_count)``.
        """
        self._check_point_index(index)
        position = self._as_position(position)

        points = self._points
        last = self.point_count - 1

        if is_joint(index):
            delta = position - points[index]

            if self._loop:
                if index == 0:
                    points[1] += delta
                    points[last - 1] += delta
                    points[last] = position
                elif index == last:
                    points[0] = position
                    points[1] += delta
                    points[index - 1] += delta
                else:
                    points[index - 1] += delta
                    points[index + 1] += delta
            else:
                if index > 0:
                    points[index - 1] += delta
                if index < last:
                    points[index + 1] += delta

        points[index] = position

        self._enforce_mode(index)

    def get_point_direction(self, index: int) -> Tensor:
        """
        Unit vector leaving the control point at ``index``.

        This is the direction towards the next point, or from the previous
        point for the last one. Coincident points give a zero vector.
        """
        self._check_point_index(index)

        points = self._points

        if index >= self.point_count - 1:
            return normalize(points[index] - points[index - 1])

        return normalize(points[index + 1] - points[index])

    # Modes

    def get_mode(self, index: int) -> ContinuityMode:
        """Return the mode of the joint governing point ``index``."""
        self._check_point_index(index)

        return ContinuityMode(int(self._modes[joint_index(index)]))

    def get_joint_mode(self, joint: int) -> ContinuityMode:
        """Return the mode of joint ``joint``."""
        if not 0 <= joint < self._modes.shape[0]:
            raise ControlPointIndexError(
                f"joint index {joint} out of range [0, {self._modes.shape[0]})"
            )

        return ContinuityMode(int(self._modes[joint]))

    def set_mode(self, index: int, mode: Union[ContinuityMode, int]) -> None:
        """
        Set the mode of the joint governing point ``index``.

        On a closed spline the first and last joints share one mode. The
        new mode is enforced immediately, keeping the handle at ``index``
        fixed.

        Raises
        ------
        ControlPointIndexError
            If ``index`` is outside ``[0, point_count)``.
        ValueError
            If ``mode`` is not a :class:`ContinuityMode` value.
        """
        self._check_point_index(index)
        mode = ContinuityMode(mode)

        joint = joint_index(index)
        last_joint = self._modes.shape[0] - 1

        self._modes[joint] = int(mode)

        if self._loop:
            if joint == 0:
                self._modes[last_joint] = int(mode)
            elif joint == last_joint:
                self._modes[0] = int(mode)

        self._enforce_mode(index)

    def _enforce_mode(self, index: int) -> None:
        joint = joint_index(index)
        mode = ContinuityMode(int(self._modes[joint]))
        last_joint = self._modes.shape[0] - 1

        if mode == ContinuityMode.FREE:
            return

        # Boundary joints of an open spline have a single handle.
        if not self._loop and (joint == 0 or joint == last_joint):
            return

        middle_index = joint_point_index(joint)
        count = self.point_count

        # The handle on the side of ``index`` stays put.
        if index <= middle_index:
            fixed_index = wrap_handle_index(middle_index - 1, count)
            enforced_index = wrap_handle_index(middle_index + 1, count)
        else:
            fixed_index = wrap_handle_index(middle_index + 1, count)
            enforced_index = wrap_handle_index(middle_index - 1, count)

        points = self._points
        middle = points[middle_index].clone()
        tangent = middle - points[fixed_index]

        if mode == ContinuityMode.ALIGNED:
            enforced = points[enforced_index]
            distance = torch.linalg.vector_norm(middle - enforced)
            tangent = normalize(tangent) * distance

        points[enforced_index] = middle + tangent

    # Structural edits

    def _close_loop(self) -> None:
        self._points[-1] = self._points[0].clone()
        self._modes[-1] = self._modes[0]

        self._enforce_mode(0)

    def _check_joint_index(self, index: int) -> None:
        self._check_point_index(index)

        if not is_joint(index):
            raise ControlPointIndexError(
                f"control point index {index} is not a joint"
            )

    def append_segment(self) -> None:
        """
        Add a segment after the last joint.

        The new points continue the last handle-to-joint direction. Each one
        steps on from the previous new point by ``spacing / 3``,
        ``spacing - spacing / 3`` and ``spacing``, which puts them
        ``spacing / 3``, ``spacing`` and ``2 * spacing`` beyond the last
        point. The new joint copies the mode of the last joint.
        """
        points = self._points
        direction = normalize(points[-1] - points[-2])
        s = self.spacing

        extension = []
        point = points[-1]

        for step in (s / 3, s - s / 3, s):
            point = point + direction * step
            extension.append(point)

        extension = torch.stack(extension)

        self._points = torch.cat([points, extension])
        self._modes = torch.cat([self._modes, self._modes[-1:]])

        self._enforce_mode(self.point_count - 4)

        if self._loop:
            self._close_loop()

    def insert_segment(self, index: int) -> None:
        """
        Split the segment starting at joint ``index`` in two.

        A new joint is placed at the segment's parametric midpoint, with
        handles half a unit away along the unit tangent there. The new
        joint copies the mode of joint ``index``.

        Raises
        ------
        ControlPointIndexError
            If ``index`` is not a joint followed by a segment.
        """
        self._check_joint_index(index)

        if index == self.point_count - 1:
            raise ControlPointIndexError(
                f"control point index {index} is the last joint; "
                "no segment starts there"
            )

        segment = BezierCurve(
            control_points=self._points[index : index + 4],
            batch_size=[],
        )
        middle = bezier_evaluate(segment, 0.5)
        direction = normalize(bezier_derivative_evaluate(segment, 0.5))

        inserted = torch.stack(
            [middle - direction * 0.5, middle, middle + direction * 0.5]
        )

        points = self._points
        modes = self._modes
        joint = index // 3

        self._points = torch.cat(
            [points[: index + 2], inserted, points[index + 2 :]]
        )
        self._modes = torch.cat(
            [modes[:joint], modes[joint : joint + 1], modes[joint:]]
        )

        self._enforce_mode(index + 2)

        if self._loop:
            self._close_loop()

    def delete_segment(self, index: int) -> None:
        """
        Remove joint ``index`` together with two of its handles.

        The first joint takes the first segment with it, the last joint the
        last segment; an interior joint merges its two segments.

        Raises
        ------
        ControlPointIndexError
            If ``index`` is not a joint.
        MinimumSegmentCountError
            If the spline has a single segment.
        """
        self._check_joint_index(index)

        if self.segment_count <= 1:
            raise MinimumSegmentCountError(
                "cannot delete the only segment of a spline"
            )

        last = self.point_count - 1

        if index == 0:
            start = 0
        elif index == last:
            start = index - 2
        else:
            start = index - 1

        points = self._points
        modes = self._modes
        joint = index // 3

        self._points = torch.cat([points[:start], points[start + 3 :]])
        self._modes = torch.cat([modes[:joint], modes[joint + 1 :]])

        if self._loop:
            self._close_loop()

    # Lengths

    def recalculate_lengths(self) -> None:
        """Recompute the cached segment lengths and total length."""
        lengths = []

        for segment in range(self.segment_count):
            start = segment_point_index(segment)
            curve = BezierCurve(
                control_points=self._points[start : start + 4],
                batch_size=[],
            )
            lengths.append(bezier_length(curve, self.length_precision))

        self._segment_lengths = torch.stack(lengths)

        # Accumulated in segment order, as the uniform parameterization
        # scans the lengths.
        self._total_length = sum(self._segment_lengths.unbind(0))


def bezier_spline(
    control_points: Union[Tensor, Sequence],
    modes: Optional[Union[Tensor, Sequence]] = None,
    loop: bool = False,
    uniform: bool = False,
) -> Callable[[Union[float, Tensor]], Tensor]:
    """Create a Bezier spline from raw arrays.

    This is a convenience function that creates a BezierSpline and returns
    a callable that evaluates it.

    Parameters
    ----------
    control_points : Tensor or sequence
        Control points, shape (3 * K + 1, D).
    modes : Tensor or sequence, optional
        K + 1 joint modes. Default is all ``FREE``.
    loop : bool
        Whether the spline is closed.
    uniform : bool
        Evaluate with the arc-length-uniform parameterization instead of
        the segment-linear one.

    Returns
    -------
    spline : Callable[[Tensor], Tensor]
        Function that evaluates the spline at given parameter values.

    Examples
    --------
    >>> points = torch.tensor(
    ...     [[0., 0., 0.], [1., 0., 0.], [2., 0., 0.], [3., 0., 0.]]
    ... )
    >>> f = bezier_spline(points)
    >>> f(0.5)
    tensor([1.5000, 0.0000, 0.0000])
    """
    from ._bezier_spline_evaluate import bezier_spline_evaluate
    from ._bezier_spline_evaluate_uniform import (
        bezier_spline_evaluate_uniform,
    )

    spline = BezierSpline.from_control_points(
        control_points, modes, loop=loop
    )

    if uniform:
        return lambda t: bezier_spline_evaluate_uniform(spline, t)

    return lambda t: bezier_spline_evaluate(spline, t)
