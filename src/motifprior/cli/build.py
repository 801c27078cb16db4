"""
motifprior build command - Build a regulatory prior edge list.

Usage:
    motifprior build --expression expression.txt --motif motif.txt --ppi ppi.txt \\
        --add-corr 1 --motif-weight 0.3 --thresh 0.05 --inc-coverage 1
    motifprior build --config prior.yaml --motif-weight 0.5
"""

import argparse
import logging
import sys
from pathlib import Path

from motifprior.cli._validators import _positive_int, _unit_interval
from motifprior.core.exceptions import MotifPriorError
from motifprior.core.params import PriorParameters
from motifprior.io.writers import EDGE_ORDERS


def add_parameter_arguments(parser: argparse.ArgumentParser) -> None:
    """Prior parameters shared by every command that names or builds a prior."""
    group = parser.add_argument_group("prior parameters")
    group.add_argument("--motif-weight", type=_unit_interval, default=0.0,
                       help="Weight of TF-gene coexpression in the blend, [0, 1] (default: 0)")
    group.add_argument("--motif-cutoff", type=_unit_interval, default=0.0,
                       help="Zero projected coexpression below this value, [0, 1] (default: 0)")
    group.add_argument("--add-corr", type=int, choices=range(5), default=0,
                       help="Coexpression fusion: 0 off, 1/3 zero diagonal, 2/4 keep diagonal (default: 0)")
    group.add_argument("--abs-coex", type=int, choices=(0, 1), default=0,
                       help="Absolute coexpression flag, recorded in the file name (default: 0)")
    group.add_argument("--thresh", type=_unit_interval, default=0.0,
                       help="Motif p-value threshold for binding, [0, 1] (default: 0)")
    group.add_argument("--old-motif", type=int, choices=(0, 1), default=0,
                       help="Motif prior is a previously generated (non p-value) prior (default: 0)")
    group.add_argument("--inc-coverage", type=int, choices=(0, 1), default=0,
                       help="Motif prior covers every PPI TF (default: 0)")
    group.add_argument("--qpval", type=int, choices=(0, 1), default=0,
                       help="Motif weights are corrected p-values (default: 0)")
    group.add_argument("--bridging-proteins", type=int, choices=range(8), default=0,
                       help="Higher-order PPI level of the PPI file, recorded in the file name (default: 0)")
    group.add_argument("--add-chip", type=int, choices=(0, 1, 2), default=0,
                       help="ChIP-seq overlay: 0 off, 1 targets over zeros, 2 targets over -1 (default: 0)")
    group.add_argument("--ctrl", type=int, choices=range(4), default=0,
                       help="Null-variable label, recorded in the file name (default: 0)")


def parameters_from_args(args: argparse.Namespace) -> PriorParameters:
    """Collect PriorParameters from parsed (and config-merged) arguments."""
    return PriorParameters.from_mapping(vars(args))


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the build subcommand."""
    parser = subparsers.add_parser(
        "build",
        help="Build a TF x gene prior and write it as an edge list",
        description=(
            "Fuse motif evidence, the PPI TF set, ChIP-seq ground truth and "
            "gene coexpression into a TF x gene prior. The output file name "
            "encodes every parameter."
        )
    )

    parser.add_argument("--config", "-c", type=Path, default=None,
                        help="YAML or JSON config file (CLI arguments override it)")

    # Input/output
    parser.add_argument("--expression", "-e", type=Path, default=None,
                        help="Expression table (genes x conditions, no header)")
    parser.add_argument("--motif", "-m", type=Path, default=None,
                        help="Motif edge list (TF gene weight)")
    parser.add_argument("--ppi", "-p", type=Path, default=None,
                        help="PPI edge list; the first column defines the TF set")
    parser.add_argument("--output-dir", "-o", type=Path, default=Path("."),
                        help="Directory for the prior edge list (default: current directory)")
    parser.add_argument("--chip", type=Path, default=None,
                        help="ChIP-seq ground-truth table (default: CHIP_SEQ_REMAP_ALL.txt)")

    # Output layout and behaviour
    parser.add_argument("--order", choices=EDGE_ORDERS, default="tf",
                        help=("Edge order: 'tf' (all genes per TF, default) or 'gene' (all TFs per gene, "
                              "the column-major layout of MATLAB priors; use it to compare byte for byte "
                              "with MATLAB output)"))
    parser.add_argument("--allow-empty-motif", action="store_true",
                        help="Continue with an all-zero motif prior when no motif edge matches")
    parser.add_argument("--chunk-size", type=_positive_int, default=500,
                        help="Genes per coexpression chunk (default: 500)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Debug logging and a coexpression progress bar")

    add_parameter_arguments(parser)
    parser.set_defaults(func=run_build)


def run_build(args: argparse.Namespace) -> int:
    """Execute the build command."""
    from motifprior.cli.config import load_config, merge_config_with_args
    from motifprior.prior.pipeline import create_ppi_motif_prior

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(__name__)

    try:
        if args.config:
            logger.info(f"Loading config: {args.config}")
            config = load_config(args.config)
            args = merge_config_with_args(config, args, getattr(args, 'cli_args', None))

        missing = [name for name in ('expression', 'motif', 'ppi') if getattr(args, name) is None]
        if missing:
            print(
                "Error: missing required input(s): "
                + ", ".join(f"--{name}" for name in missing)
                + " (on the command line or in --config)",
                file=sys.stderr,
            )
            return 1

        params = parameters_from_args(args)

        print(f"\n{'='*70}")
        print("  Regulatory Prior Construction")
        print(f"{'='*70}\n")
        print(f"  Expression: {args.expression}")
        print(f"  Motif:      {args.motif}")
        print(f"  PPI:        {args.ppi}")
        print(f"  Parameters: {params}\n")

        result = create_ppi_motif_prior(
            args.expression,
            args.motif,
            args.ppi,
            params,
            output_dir=args.output_dir,
            chip_path=args.chip,
            order=args.order,
            allow_empty_motif=args.allow_empty_motif,
            chunk_size=args.chunk_size,
            verbose=args.verbose,
        )
    except (MotifPriorError, OSError, ValueError) as e:
        logger.error(f"Prior construction failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\n✓ Prior written: {result.path}")
    print(f"  Shape: {result.regnet.n_tfs} TFs × {result.regnet.n_genes} genes")
    print(f"  Non-zero edges: {result.regnet.n_edges}")
    return 0
