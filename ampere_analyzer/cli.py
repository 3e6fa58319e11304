"""
Ampere Analyzer command line interface.

Usage:
    ampere-analyzer run --part irfz44n --mode temp --cooling air-stock
    ampere-analyzer run --config inputs.json --algorithm binary --live
    ampere-analyzer compare-cooling --part irf3205 --frequency 50
    ampere-analyzer cooling
    ampere-analyzer parts
"""

import argparse
import json
import logging
import sys
import time
from typing import List, Optional

from .core.config import AnalyzerInputs, ConfigManager
from .core.constants import CoolingProfileCatalog, SimulationDefaults, TransistorDatabase
from .core.parameters import ParameterValidationError, normalize_inputs
from .solvers.analytical import compute_expected_limits
from .solvers.current_search import LiveDataPoint, SimulationResult
from .solvers.runner import SimulationRunner, SimulationTransportError
from .solvers.streaming import LiveSeriesWindow
from .solvers.what_if import compare_cooling_profiles, derive_inputs, summarize_result
from .utils.logger import get_logger, initialize_logger, log_exception_handler

# CLI flag -> AnalyzerInputs field
INPUT_FLAGS = {
    'name': 'component_name',
    'transistor_type': 'transistor_type',
    'max_current': 'max_current',
    'max_voltage': 'max_voltage',
    'power_rating': 'power_dissipation',
    'rds_on': 'rds_on_mohm',
    'vce_sat': 'vce_sat',
    'rise_time': 'rise_time_ns',
    'fall_time': 'fall_time_ns',
    'rth_jc': 'rth_jc',
    'max_temp': 'max_temperature',
    'frequency': 'switching_frequency_khz',
    'ambient': 'ambient_temperature',
    'cooling': 'cooling_profile_id',
    'budget': 'cooling_budget',
    'mode': 'simulation_mode',
    'algorithm': 'simulation_algorithm',
    'steps': 'precision_steps',
}


def add_input_arguments(parser: argparse.ArgumentParser):
    """Device and run options shared by run and compare-cooling."""
    parser.add_argument('--config', '-c', type=str, help='Path to JSON inputs file')
    parser.add_argument('--part', '-p', type=str, help='Predefined transistor (see "parts")')
    parser.add_argument('--name', type=str, help='Component name')
    parser.add_argument('--type', dest='transistor_type', type=str,
                        help='Transistor type, e.g. "MOSFET (N-Channel)", "IGBT"')
    parser.add_argument('--max-current', type=float, help='Maximum current rating in A')
    parser.add_argument('--max-voltage', type=float, help='Operating voltage in V')
    parser.add_argument('--power-rating', type=float, help='Device power dissipation rating in W')
    parser.add_argument('--rds-on', type=float, help='Rds(on) in mOhm (MOSFET, GaN)')
    parser.add_argument('--vce-sat', type=float, help='Vce(sat) in V (BJT, IGBT)')
    parser.add_argument('--rise-time', type=float, help='Rise time in ns')
    parser.add_argument('--fall-time', type=float, help='Fall time in ns')
    parser.add_argument('--rth-jc', type=float, help='Junction-to-case thermal resistance in °C/W')
    parser.add_argument('--max-temp', type=float, help='Maximum junction temperature in °C')
    parser.add_argument('--frequency', type=float, help='Switching frequency in kHz')
    parser.add_argument('--ambient', type=float, help='Ambient temperature in °C')
    parser.add_argument('--cooling', type=str, help='Cooling profile id (see "cooling")')
    parser.add_argument('--budget', type=float, help='Cooling budget in W (budget mode)')
    parser.add_argument('--mode', choices=['temp', 'budget', 'ftf'], help='Simulation mode')
    parser.add_argument('--algorithm', choices=['iterative', 'binary'], help='Search algorithm')
    parser.add_argument('--steps', type=int, help='Precision steps (10-500)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ampere-analyzer',
        description="Maximum safe current analysis for power transistors"
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Show info-level log messages')
    parser.add_argument('--log-dir', type=str, help='Write a log file into this directory')

    subparsers = parser.add_subparsers(dest='command', required=True)

    run_parser = subparsers.add_parser('run', help='Find the maximum safe current')
    add_input_arguments(run_parser)
    run_parser.add_argument('--live', action='store_true', help='Print samples as they are evaluated')
    run_parser.add_argument('--json', action='store_true', help='Print the result as JSON')

    compare_parser = subparsers.add_parser('compare-cooling', help='Run once per cooling profile')
    add_input_arguments(compare_parser)
    compare_parser.add_argument('--json', action='store_true', help='Print the ranking as JSON')

    subparsers.add_parser('cooling', help='List cooling profiles')
    subparsers.add_parser('parts', help='List predefined transistors')

    return parser


def inputs_from_args(args: argparse.Namespace) -> AnalyzerInputs:
    """Build analyzer inputs: config file, then predefined part, then flags."""
    if args.config:
        manager = ConfigManager()
        if not manager.import_config(args.config):
            raise ValueError(f"Could not read inputs from {args.config}")
        inputs = manager.get_config()
    else:
        inputs = AnalyzerInputs()

    if args.part:
        part = _lookup_part(args.part)
        inputs = derive_inputs(inputs.with_specs(part.specs),
                               predefined_component=part.value,
                               component_name=inputs.component_name or part.name)

    overrides = {field: getattr(args, flag) for flag, field in INPUT_FLAGS.items()
                 if getattr(args, flag, None) is not None}
    return derive_inputs(inputs, **overrides) if overrides else inputs


def _lookup_part(value: str):
    part = TransistorDatabase.get(value)
    if part is None:
        raise KeyError(f"Unknown predefined transistor: {value}")
    return part


def format_point(point: LiveDataPoint) -> str:
    return (f"[{point.progress:5.1f}%] I={point.current:8.3f}A  "
            f"Tj={point.temperature:8.2f}°C  P={point.power_loss:9.3f}W "
            f"(cond {point.conduction_loss:.3f}W, sw {point.switching_loss:.3f}W)")


def format_result(name: str, result: SimulationResult) -> str:
    power = result.power_dissipation
    lines = [
        "=" * 60,
        f"AMPERE ANALYZER: {name}",
        "=" * 60,
        f"  Status:            {result.status.value.upper()}",
        f"  Max safe current:  {result.max_safe_current:.2f} A",
        f"  Failure reason:    {result.failure_reason.label if result.failure_reason else 'None'}",
        f"  Details:           {result.details}",
        f"  Final temperature: {result.final_temperature:.2f} °C",
        f"  Power:             {power.total:.3f} W "
        f"(conduction {power.conduction:.3f} W, switching {power.switching:.3f} W)",
        f"  Algorithm:         {result.algorithm.value} ({result.samples_evaluated} samples)",
    ]
    return "\n".join(lines)


def stream_live(runner: SimulationRunner, window: LiveSeriesWindow, out=None):
    """Print points at the live-view cadence until the run finishes."""
    out = out or sys.stdout
    while not runner.channel.exhausted:
        for point in window.tick(runner.channel):
            print(format_point(point), file=out)
        if not runner.channel.exhausted:
            time.sleep(SimulationDefaults.LIVE_TICK_INTERVAL_S)


def cmd_run(args: argparse.Namespace) -> int:
    inputs = inputs_from_args(args)
    params = normalize_inputs(inputs)

    runner = SimulationRunner(params).start()
    if args.live and not args.json:
        stream_live(runner, LiveSeriesWindow(params.algorithm))
    else:
        # Drain so the worker's channel does not hold every point
        for _ in runner.points():
            pass
    result = runner.result()
    expected = compute_expected_limits(params)

    if args.json:
        print(json.dumps({
            'component': inputs.display_name,
            'inputs': inputs.to_dict(),
            'parameters': params.to_dict(),
            'result': result.to_dict(),
            'expected': expected.to_dict(),
            'summary': summarize_result(result),
        }, indent=2))
    else:
        print(format_result(inputs.display_name, result))
        print(f"  Analytical limit:  {expected.expected_max_safe_current:.2f} A")
    return 0


def cmd_compare_cooling(args: argparse.Namespace) -> int:
    inputs = inputs_from_args(args)
    # Validate once up front so a bad device is reported a single time
    normalize_inputs(inputs)
    comparisons = compare_cooling_profiles(inputs)

    if args.json:
        print(json.dumps([c.to_dict() for c in comparisons], indent=2))
        return 0

    print(f"Cooling comparison for {inputs.display_name}")
    print(f"{'Profile':<18} {'Rth °C/W':>9} {'Budget W':>9} {'Max safe A':>11}  Limit")
    for c in comparisons:
        reason = c.result.failure_reason.label if c.result.failure_reason else "-"
        print(f"{c.profile.id:<18} {c.profile.thermal_resistance:>9.2f} "
              f"{c.profile.cooling_budget:>9.1f} {c.result.max_safe_current:>11.2f}  {reason}")
    return 0


def cmd_cooling(args: argparse.Namespace) -> int:
    for profile in CoolingProfileCatalog():
        print(f"{profile.id:<18} {profile.name:<30} "
              f"Rth={profile.thermal_resistance:.2f}°C/W  budget={profile.cooling_budget:.0f}W")
    return 0


def cmd_parts(args: argparse.Namespace) -> int:
    for value, part in TransistorDatabase.get_all().items():
        specs = part.specs
        conduction = (f"Rds(on)={specs.rds_on_mohm}mΩ" if specs.transistor_type.is_mosfet_type
                      else f"Vce(sat)={specs.vce_sat}V")
        print(f"{value:<10} {part.name:<10} {specs.transistor_type.value:<20} "
              f"{specs.max_current:g}A {specs.max_voltage:g}V {conduction}")
    return 0


COMMANDS = {
    'run': cmd_run,
    'compare-cooling': cmd_compare_cooling,
    'cooling': cmd_cooling,
    'parts': cmd_parts,
}


@log_exception_handler
def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console_level = logging.INFO if args.verbose else logging.WARNING
    if args.log_dir:
        logger = initialize_logger(log_dir=args.log_dir, console_level=console_level)
    else:
        logger = get_logger()
        logger.set_console_level(console_level)

    try:
        code = COMMANDS[args.command](args)
        if args.verbose:
            logger.log_performance_summary()
        return code
    except ParameterValidationError as e:
        print("Invalid inputs:", file=sys.stderr)
        for issue in e.issues:
            print(f"  - {issue}", file=sys.stderr)
        return 2
    except (KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except SimulationTransportError as e:
        logger.error(str(e))
        print(f"Simulation failed: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
