"""
Ampere Analyzer - Loss Model
============================
Steady-state conduction and switching losses of a power transistor and the
resulting junction temperature.

Model (SI units):
    P_cond = I² · Rds(on)                       (resistive variant)
    P_cond = I · Vce(sat)                       (saturation variant)
    P_sw   = 0.5 · V · I · (t_r + t_f) · f_sw
    T_j    = T_amb + (P_cond + P_sw) · (Rth_jc + Rth_cooling)

Both loss terms are non-decreasing for I >= 0, which the bisection search
relies on. Every function accepts a float or a numpy array of currents.

Author: Ampere Analyzer Tool
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Union

import numpy as np

from ..core.constants import ConductionVariant
from ..core.parameters import SimulationParameters

Current = Union[float, np.ndarray]


@dataclass(frozen=True)
class LossBreakdown:
    """Losses and junction temperature at a single current."""
    current: float  # A
    conduction: float  # W
    switching: float  # W
    total: float  # W
    junction_temperature: float  # °C


def conduction_loss(params: SimulationParameters, current: Current) -> Current:
    """Conduction loss in watts."""
    model = params.conduction
    if model.variant is ConductionVariant.RESISTIVE:
        return current * current * model.value
    return current * model.value


def switching_loss(params: SimulationParameters, current: Current) -> Current:
    """Switching loss in watts, linear in current."""
    transition_time = params.rise_time_s + params.fall_time_s
    return 0.5 * params.max_voltage * current * transition_time * params.switching_frequency_hz


def total_loss(params: SimulationParameters, current: Current) -> Current:
    """Total dissipated power in watts."""
    return conduction_loss(params, current) + switching_loss(params, current)


def junction_temperature(params: SimulationParameters, current: Current) -> Current:
    """Steady-state junction temperature in °C."""
    return params.ambient_temperature + total_loss(params, current) * params.total_rth


def evaluate_losses(params: SimulationParameters, current: float) -> LossBreakdown:
    """Evaluate every loss term at one current."""
    p_cond = float(conduction_loss(params, current))
    p_sw = float(switching_loss(params, current))
    p_total = p_cond + p_sw
    return LossBreakdown(
        current=float(current),
        conduction=p_cond,
        switching=p_sw,
        total=p_total,
        junction_temperature=params.ambient_temperature + p_total * params.total_rth,
    )


def loss_curve(params: SimulationParameters, currents: np.ndarray) -> np.ndarray:
    """
    Vectorised losses over a current grid.

    Returns:
        Array of shape (len(currents), 4): conduction, switching, total, Tj
    """
    currents = np.asarray(currents, dtype=np.float64)
    p_cond = conduction_loss(params, currents)
    p_sw = switching_loss(params, currents)
    p_total = p_cond + p_sw
    t_j = params.ambient_temperature + p_total * params.total_rth
    return np.column_stack([p_cond, p_sw, p_total, t_j])


__all__ = [
    'LossBreakdown',
    'conduction_loss',
    'switching_loss',
    'total_loss',
    'junction_temperature',
    'evaluate_losses',
    'loss_curve',
]
