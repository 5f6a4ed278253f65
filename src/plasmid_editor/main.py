#!/usr/bin/env python3
"""
Command line interface for plasmid editor.

Inspect GenBank records, list restriction sites and convert between
GenBank and FASTA.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger as loguru_logger

from .config import ToolkitConfig
from .core.genbank_parser import GenBankParser
from .core.genbank_writer import FastaWriter, GenBankWriter
from .exceptions import ToolkitError
from .record import SequenceRecord


def setup_logging(log_level: str = "INFO") -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
        force=True,
    )
    # Library modules log through loguru
    loguru_logger.remove()
    loguru_logger.add(sys.stderr, level=log_level.upper())


def load_config(args: argparse.Namespace) -> ToolkitConfig:
    """Build configuration from an optional YAML file and CLI overrides."""
    config = ToolkitConfig.from_yaml(args.config) if args.config else ToolkitConfig()
    return config.merge_args(vars(args))


def cmd_info(args: argparse.Namespace, config: ToolkitConfig) -> int:
    record = GenBankParser(config.build_matcher()).parse_file(args.input_file)
    for key, value in record.summary().items():
        print(f"{key}\t{value}")
    for warning in record.parse_warnings:
        print(f"warning\t{warning}")
    return 0


def cmd_sites(args: argparse.Namespace, config: ToolkitConfig) -> int:
    record = GenBankParser(config.build_matcher()).parse_file(args.input_file)
    unique = set(record.unique_cutters()) if args.unique else None

    print("Enzyme\tEnzyme_seq\tPosition")
    for site in record.restriction_sites:
        if unique is not None and site.name not in unique:
            continue
        print(f"{site.name}\t{site.pattern_sequence}\t{site.position}")
    return 0


def cmd_convert(args: argparse.Namespace, config: ToolkitConfig) -> int:
    record = GenBankParser(config.build_matcher()).parse_file(args.input_file)
    _write(record, args.output, args.format, config)
    return 0


def cmd_create(args: argparse.Namespace, config: ToolkitConfig) -> int:
    record = SequenceRecord.from_raw(
        args.name,
        args.sequence,
        is_circular=config.circular_default,
        matcher=config.build_matcher(),
    )
    _write(record, args.output, args.format, config)
    return 0


def cmd_revcomp(args: argparse.Namespace, config: ToolkitConfig) -> int:
    record = GenBankParser(config.build_matcher()).parse_file(args.input_file)
    record.reverse_complement(remap_annotations=config.remap_annotations)
    _write(record, args.output, args.format, config)
    return 0


def _write(record: SequenceRecord, output: Path, output_format: str, config: ToolkitConfig) -> None:
    logger = logging.getLogger(__name__)
    if output_format == "fasta":
        FastaWriter(config.fasta_width).write(record, output)
    else:
        GenBankWriter().write(record, output)
    logger.info(f"Wrote {record.length} bp to {output}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plasmid-editor",
        description="Plasmid editor - inspect and convert annotated GenBank records"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file"
    )

    parser.add_argument(
        "--enzymes",
        type=Path,
        help="Tab-delimited file of extra restriction enzymes (name<TAB>sequence)"
    )

    parser.add_argument(
        "--fasta-width",
        type=int,
        help="Residues per FASTA line (default: 60)"
    )

    parser.add_argument(
        "--keep-coordinates",
        dest="remap",
        action="store_false",
        default=None,
        help="Leave feature coordinates untouched when editing"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser("info", help="Summarize a GenBank record")
    info.add_argument("input_file", type=Path, help="Input GenBank file")
    info.set_defaults(handler=cmd_info)

    sites = subparsers.add_parser("sites", help="List restriction sites")
    sites.add_argument("input_file", type=Path, help="Input GenBank file")
    sites.add_argument("--unique", action="store_true", help="Only enzymes that cut once")
    sites.set_defaults(handler=cmd_sites)

    for name, handler, help_text in (
        ("convert", cmd_convert, "Re-encode a GenBank record"),
        ("revcomp", cmd_revcomp, "Reverse-complement a GenBank record"),
    ):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("input_file", type=Path, help="Input GenBank file")
        _add_output_arguments(command)
        command.set_defaults(handler=handler)

    create = subparsers.add_parser("create", help="Create a record from a raw sequence")
    create.add_argument("name", help="Record name")
    create.add_argument("sequence", help="Raw sequence; non-ACGT characters are dropped")
    create.add_argument("--circular", action="store_true", default=None, help="Circular topology")
    _add_output_arguments(create)
    create.set_defaults(handler=cmd_create)

    return parser


def _add_output_arguments(command: argparse.ArgumentParser) -> None:
    command.add_argument(
        "-o", "--output",
        type=Path,
        required=True,
        help="Output file"
    )
    command.add_argument(
        "--format",
        choices=["genbank", "fasta"],
        default="genbank",
        help="Output format (default: genbank)"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
        setup_logging(config.log_level)
        return args.handler(args, config)
    except ToolkitError as e:
        logging.error(f"Failed: {e}")
        return 1
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
