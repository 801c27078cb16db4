"""
motifprior CLI - Command-line interface for regulatory prior construction.

Commands:
    motifprior build     - Build a TF x gene prior and write it as an edge list
    motifprior filename  - Print the deterministic output name for a parameter set
"""

import argparse
import sys
from typing import Optional, List


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI dispatcher for motifprior."""
    parser = argparse.ArgumentParser(
        prog="motifprior",
        description="TF x gene regulatory priors from motif, PPI, ChIP-seq and coexpression evidence",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  build      Build a TF x gene prior and write it as an edge list
  filename   Print the output file name for a parameter set

Examples:
  motifprior build -e expression.txt -m motif.txt -p ppi.txt --add-corr 1 --motif-weight 0.3
  motifprior build --config prior.yaml --output-dir results/priors
  motifprior filename -e expression.txt -m motif.txt --thresh 0.05 --inc-coverage 1
        """
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version="%(prog)s 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    from motifprior.cli import build, filename
    build.register_parser(subparsers)
    filename.register_parser(subparsers)

    raw_args = list(args) if args is not None else sys.argv[1:]
    parsed_args = parser.parse_args(raw_args)

    if parsed_args.command is None:
        parser.print_help()
        return 0

    # Raw arguments let config merging tell explicit values from defaults
    parsed_args.cli_args = raw_args[1:]
    return parsed_args.func(parsed_args)


if __name__ == "__main__":
    sys.exit(main())
