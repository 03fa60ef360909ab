#!/usr/bin/env python3
"""CLI script for evaluating a single Decimal operation.

Useful for checking a value against the on-chain math by hand.

Usage:
    python scripts/decimal_calc.py mul 1.333 1.333 --mode up
    python scripts/decimal_calc.py quo 2 3 --mode half_even
    python scripts/decimal_calc.py log2 33.000000000000000000
    python scripts/decimal_calc.py root 3125.0000 --root 5
"""

import argparse
import logging
import sys
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bigdecimal import ContractViolation, Decimal, DecimalError, MathConfig, RoundingMode  # noqa: E402

logger = structlog.get_logger()

BINARY_OPS = ("add", "sub", "mul", "quo")
UNARY_OPS = ("power", "sqrt", "root", "log2", "rescale", "sigfig", "strip")


def evaluate(args: argparse.Namespace, config: MathConfig) -> Decimal:
    """Apply the requested operation to the parsed operands."""
    mode = RoundingMode[args.mode.upper()]
    a = Decimal.from_string(args.operands[0])

    if args.op in BINARY_OPS:
        if len(args.operands) != 2:
            raise SystemExit(f"Error: {args.op} takes two operands")
        b = Decimal.from_string(args.operands[1])
        if args.op == "add":
            return a.add(b)
        if args.op == "sub":
            return a.sub(b)
        if args.op == "mul":
            return a.mul(b, mode)
        return a.quo(b, mode)

    if args.op == "power":
        return a.power(args.exponent)
    if args.op == "sqrt":
        return a.sqrt(config)
    if args.op == "root":
        return a.approx_root(args.root, config)
    if args.op == "log2":
        return a.log2(config)
    if args.op == "rescale":
        return a.rescale(args.precision, mode)
    if args.op == "sigfig":
        return a.significant_figures(args.figures, mode)
    return a.strip_trailing_zeros()


def main() -> int:
    """Main entry point for the decimal calculator."""
    parser = argparse.ArgumentParser(
        description="Evaluate a fixed-point Decimal operation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/decimal_calc.py mul 1.333 1.333 --mode up
  python scripts/decimal_calc.py sigfig 1111.001001 --figures 1 --mode up
        """,
    )
    parser.add_argument("op", choices=BINARY_OPS + UNARY_OPS, help="Operation to evaluate")
    parser.add_argument("operands", nargs="+", help="Decimal operands as text")
    parser.add_argument(
        "--mode",
        type=str,
        choices=[m.name.lower() for m in RoundingMode],
        default="down",
        help="Rounding mode for mul/quo/rescale/sigfig (default: down)",
    )
    parser.add_argument("--exponent", type=int, default=2, help="Exponent for power")
    parser.add_argument("--root", type=int, default=2, help="Root for root")
    parser.add_argument("--precision", type=int, default=0, help="Target precision for rescale")
    parser.add_argument("--figures", type=int, default=1, help="Significant figures for sigfig")
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Iteration cap for root/log2 (default: BIGDECIMAL_MAX_ITERATIONS or 300)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    config = MathConfig.from_env()
    if args.max_iterations is not None:
        config = MathConfig(max_iterations=args.max_iterations)

    try:
        result = evaluate(args, config)
    except (DecimalError, ContractViolation) as err:
        logger.error("evaluation_failed", op=args.op, operands=args.operands, error=str(err))
        print(f"Error: {err}")
        return 1

    logger.debug("evaluated", op=args.op, operands=args.operands, precision=result.precision)
    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
