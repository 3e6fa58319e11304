"""
Ampere Analyzer - Solvers Module
================================
Loss model, safety checks and the maximum safe current search.
"""

from .loss_model import (
    LossBreakdown,
    conduction_loss,
    switching_loss,
    total_loss,
    junction_temperature,
    evaluate_losses,
    loss_curve,
)

from .safety import (
    FailureReason,
    PowerDissipation,
    SafetyVerdict,
    evaluate_safety,
    check_current,
)

from .current_search import (
    RunStatus,
    LiveDataPoint,
    SimulationResult,
    CurrentSearchEngine,
)

from .streaming import (
    CollectingSink,
    PointChannel,
    LiveSeriesWindow,
)

from .runner import (
    SimulationTransportError,
    SimulationRun,
    SimulationRunner,
    run_simulation,
)

from .analytical import (
    LimitCurrent,
    ExpectedLimits,
    compute_expected_limits,
)

from .what_if import (
    summarize_result,
    derive_inputs,
    run_follow_up,
    CoolingComparison,
    compare_cooling_profiles,
)

__all__ = [
    # Loss model
    'LossBreakdown',
    'conduction_loss',
    'switching_loss',
    'total_loss',
    'junction_temperature',
    'evaluate_losses',
    'loss_curve',
    # Safety
    'FailureReason',
    'PowerDissipation',
    'SafetyVerdict',
    'evaluate_safety',
    'check_current',
    # Search
    'RunStatus',
    'LiveDataPoint',
    'SimulationResult',
    'CurrentSearchEngine',
    # Streaming
    'CollectingSink',
    'PointChannel',
    'LiveSeriesWindow',
    'SimulationTransportError',
    'SimulationRun',
    'SimulationRunner',
    'run_simulation',
    # Analysis
    'LimitCurrent',
    'ExpectedLimits',
    'compute_expected_limits',
    'summarize_result',
    'derive_inputs',
    'run_follow_up',
    'CoolingComparison',
    'compare_cooling_profiles',
]
