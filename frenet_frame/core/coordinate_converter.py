"""High-level coordinate conversion against a reference line."""

from typing import Optional, Protocol
from loguru import logger

from .cartesian_frenet_conversion import CartesianFrenetConverter
from .data_structures import CartesianState, FrenetState, ReferencePoint
from ..config import ConversionConfig


class ReferencePathProvider(Protocol):
    """Anything that can supply reference points by arc length."""

    @property
    def length(self) -> float: ...

    def calc_reference_point(self, s: float) -> ReferencePoint: ...

    def find_nearest_s(self, x: float, y: float, samples: int = ..., window: float = ...,
                       hint: Optional[float] = ...) -> float: ...


class CoordinateConverter:
    """Coordinate conversion interface bound to one reference path.

    Resolves the matched reference point for each state and delegates the
    math to CartesianFrenetConverter.
    """

    def __init__(self, reference_line: ReferencePathProvider, config: Optional[ConversionConfig] = None):
        """Initialize converter with reference path.

        Args:
            reference_line: Provider of reference points, e.g. ReferenceLine
            config: Tolerances and search settings (defaults if None)
        """
        self.reference_line = reference_line
        self.config = config or ConversionConfig()
        self.converter = CartesianFrenetConverter()
        self._prev_s: Optional[float] = None
        logger.info(f"Coordinate converter initialized with reference path of length "
                    f"{reference_line.length:.2f}m")

    def match_point(self, x: float, y: float) -> ReferencePoint:
        """Reference point nearest to (x, y).

        The previous match of this converter seeds a local search window.
        """
        s = self.reference_line.find_nearest_s(
            x, y,
            samples=self.config.projection_samples,
            window=self.config.projection_window,
            hint=self._prev_s,
        )
        self._prev_s = s
        return self.reference_line.calc_reference_point(s)

    def to_frenet(self, state: CartesianState) -> FrenetState:
        """Convert a Cartesian state using its matched reference point."""
        ref = self.match_point(state.x, state.y)
        s_condition, d_condition = self.converter.cartesian_to_frenet(
            ref.s, ref.x, ref.y, ref.theta, ref.kappa, ref.dkappa,
            state.x, state.y, state.v, state.a, state.theta, state.kappa,
        )
        return FrenetState.from_conditions(s_condition, d_condition)

    def to_cartesian(self, state: FrenetState) -> CartesianState:
        """Convert a Frenet state using the reference point at state.s."""
        ref = self.reference_line.calc_reference_point(state.s)
        if ref.s != state.s:
            logger.warning(f"s={state.s:.3f} lies outside the reference line [0, {self.reference_line.length:.3f}]")
        x, y, theta, kappa, v, a = self.converter.frenet_to_cartesian(
            ref.s, ref.x, ref.y, ref.theta, ref.kappa, ref.dkappa,
            state.s_condition, state.d_condition,
            tolerance=self.config.reference_s_tolerance,
        )
        return CartesianState.from_array([x, y, theta, kappa, v, a])

    def lateral_kappa(self, s: float, l: float, dl: float, ddl: float) -> float:
        """Curvature of a lateral profile (l, l', l'') at arc length s."""
        ref = self.reference_line.calc_reference_point(s)
        return self.converter.calculate_kappa(
            ref.kappa, ref.dkappa, l, dl, ddl, epsilon=self.config.kappa_epsilon
        )
