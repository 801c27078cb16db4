"""
motifprior filename command - Print the output name of a prior without building it.

Usage:
    motifprior filename --expression expression.txt --motif motif.txt --add-corr 1
"""

import argparse
import sys
from pathlib import Path

from motifprior.cli.build import add_parameter_arguments, parameters_from_args
from motifprior.io.writers import prior_filename


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the filename subcommand."""
    parser = subparsers.add_parser(
        "filename",
        help="Print the file name 'build' would write for these parameters",
        description="Print the deterministic prior file name. No input is read."
    )
    parser.add_argument("--expression", "-e", type=Path, required=True,
                        help="Expression table path (only its name is used)")
    parser.add_argument("--motif", "-m", type=str, required=True,
                        help="Motif file name or label")
    add_parameter_arguments(parser)
    parser.set_defaults(func=run_filename)


def run_filename(args: argparse.Namespace) -> int:
    """Execute the filename command."""
    try:
        params = parameters_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(prior_filename(args.expression, args.motif, params))
    return 0
