"""Command line entry point - compile a formula and sample it"""
import argparse
import logging
import sys

import numpy as np
import pandas as pd

from config.config import LOGGING_CONFIG, PARSER_CONFIG, SAMPLING_CONFIG, validate_config
from core import FormulaError, GLOBAL_SYMBOLS, UnresolvedVariableError, register_special_functions
from formula import FormulaEvaluator

logger = logging.getLogger(__name__)


def _parse_binding(text):
    """'a=2' -> ('a', 2.0); complex values such as '1+2j' are accepted"""
    name, sep, value = text.partition('=')
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Expected name=value, got '{text}'")
    value = value.strip()
    try:
        return name.strip(), float(value)
    except ValueError:
        pass
    try:
        return name.strip(), complex(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not a number: '{value}'") from None


def sample(function, free_variable, start, stop, num):
    """Evaluate ``function`` on an evenly spaced grid; returns a DataFrame"""
    grid = np.linspace(start, stop, num)
    values = function(grid)
    if np.ndim(values) == 0:
        # formula does not depend on the free variable
        values = np.full(num, values)
    return pd.DataFrame({free_variable: grid, 'value': values})


def main(args):
    validate_config()

    symbols = GLOBAL_SYMBOLS
    if args.special:
        symbols = symbols.copy()
        register_special_functions(symbols)

    evaluator = FormulaEvaluator(symbols=symbols, variables=args.var)
    if not evaluator.parse(args.formula):
        logger.error(str(evaluator.last_error))
        return 2

    logger.info(f"Compiled '{args.formula}' -> {evaluator.program.to_rpn()}")

    try:
        function = evaluator.function(args.free_variable)
    except UnresolvedVariableError as e:
        logger.error(str(e))
        return 2

    if args.value is not None:
        result = function(args.value)
        print(result)
        return 0

    table = sample(function, args.free_variable, args.start, args.stop, args.num)
    if args.output_path:
        logger.info(f"Saving sampled values to {args.output_path}")
        table.to_csv(args.output_path, index=False)
    else:
        print(table.to_string(index=False))
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Infix formula evaluator")

    parser.add_argument(
        "--formula",
        type=str,
        required=True,
        help="Infix formula, e.g. 'a*x^3 - 2'"
    )
    parser.add_argument(
        "--var",
        type=_parse_binding,
        action="append",
        default=[],
        help="Variable binding name=value (repeatable)"
    )
    parser.add_argument(
        "--free_variable",
        type=str,
        default=PARSER_CONFIG["default_free_variable"],
        help="Name of the function argument"
    )
    parser.add_argument(
        "--value",
        type=float,
        default=None,
        help="Evaluate at a single point instead of sampling a grid"
    )
    parser.add_argument("--start", type=float, default=SAMPLING_CONFIG["start"], help="Grid start")
    parser.add_argument("--stop", type=float, default=SAMPLING_CONFIG["stop"], help="Grid stop")
    parser.add_argument("--num", type=int, default=SAMPLING_CONFIG["num"], help="Number of grid points")
    parser.add_argument(
        "--special",
        action=argparse.BooleanOptionalAction,
        default=PARSER_CONFIG["enable_special_functions"],
        help="Enable scipy special functions (gamma, erf, beta, jv, laguerre); --no-special overrides the config"
    )
    parser.add_argument(
        "--output_path",
        type=str,
        default=None,
        help="Write the sampled table to this CSV file"
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default=LOGGING_CONFIG["level"],
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level"
    )
    return parser.parse_args(argv)


def cli(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOGGING_CONFIG["format"])
    try:
        return main(args)
    except FormulaError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(cli())
