"""
Command-line interface for tiny-qsim.

Usage:
    tiny-qsim demo bell
    tiny-qsim demo all --precision 3
    tiny-qsim demo toffoli --steps
    tiny-qsim info
"""
import argparse
import logging
import math
import sys

from ..circuit import Circuit, basis_label
from ..config import get_tolerances
from ..display import display_result, format_amplitude
from ..exceptions import SimulationError
from ..gate import Gate
from ..gates import GATE_REGISTRY
from ..logging import set_log_level


def bell():
    """(|00⟩ + |11⟩)/√2."""
    return Circuit(2).h(0).cx(0, 1)


def superposition():
    """Hadamard on qubit 0 of a 2-qubit register."""
    return Circuit(2).h(0)


def toffoli():
    """Toffoli on 2 superposed controls."""
    return Circuit(3).h(0).x(1).h(1).cnx([0, 1], 2)


def controlled_h():
    """Hadamard on qubit 0 controlled by qubit 1."""
    qc = Circuit(2).h(1)
    return qc.add_gate(Gate.h(0).controlled([1]))


def rotation():
    """Ry(π/2) on qubit 0, then swapped onto qubit 1."""
    return Circuit(2).gate('ry', [0], [math.pi / 2]).gate('swap', [0, 1])


DEMOS = {
    'bell': bell,
    'superposition': superposition,
    'toffoli': toffoli,
    'controlled-h': controlled_h,
    'rotation': rotation,
}


def _print_steps(qc, precision):
    for step, (gate, state) in enumerate(qc.evolve()):
        print(f"After step {step}: {gate!r}")
        for i, amp in enumerate(state):
            if abs(amp) > 1e-10:
                print(f"  |{basis_label(i, qc.n_qubits)}⟩: {format_amplitude(amp, precision)}")


def cmd_demo(args):
    """Run one or all demo circuits."""
    names = list(DEMOS) if args.name == 'all' else [args.name]
    for k, name in enumerate(names):
        if k:
            print('-' * 20)
        qc = DEMOS[name]()
        print(f"{name}: {qc!r}")
        if args.steps:
            _print_steps(qc, args.precision)
        display_result(qc.run(), precision=args.precision)


def cmd_info(args):
    """Show tiny-qsim information."""
    from .. import __version__

    tol = get_tolerances()
    print(f"tiny-qsim v{__version__}")
    print(f"  identity tolerance:    {tol.identity:g}")
    print(f"  determinant tolerance: {tol.determinant:g}")
    print(f"  demos: {', '.join(DEMOS)}")
    print(f"  gates: {', '.join(sorted(GATE_REGISTRY))}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='tiny-qsim',
        description='Dense state-vector quantum circuit simulator'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    demo_parser = subparsers.add_parser('demo', help='Run an example circuit')
    demo_parser.add_argument('name', nargs='?', default='all',
                             choices=[*DEMOS, 'all'], help='Demo circuit')
    demo_parser.add_argument('--precision', type=int, default=5, help='Decimal places')
    demo_parser.add_argument('--steps', action='store_true',
                             help='Print the state after every gate')
    demo_parser.set_defaults(func=cmd_demo)

    info_parser = subparsers.add_parser('info', help='Show tiny-qsim info')
    info_parser.set_defaults(func=cmd_info)

    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except SimulationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
