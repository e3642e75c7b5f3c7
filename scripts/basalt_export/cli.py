#!/usr/bin/env python3
"""
Basalt calibration to standard calibration converter.

Usage:
    basalt-calib-export --calib-path calib.json --output-path out.json
    basalt-calib-export --config export.yaml

The optional YAML config may provide 'calib_path' and 'output_path';
command-line flags take precedence.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml

from .exceptions import CalibExportError, ConfigError, LoadFailure, ModelIntegrityError
from .mapper import dump_document, map_calibration
from .report import format_report
from .store import check_input, load_calibration

logger = logging.getLogger(__name__)


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigError instead of exiting."""

    def error(self, message):
        raise ConfigError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _RaisingArgumentParser(
        prog='basalt-calib-export',
        description='Basalt calibration to standard calibration converter'
    )
    parser.add_argument('--calib-path', type=Path, default=None,
                        help='Path to Basalt calibration file')
    parser.add_argument('--output-path', type=Path, default=None,
                        help='Path to output file')
    parser.add_argument('--config', type=Path, default=None,
                        help='Optional YAML file with calib_path / output_path')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Do not print the calibration report')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def load_config(config_path: Path) -> Dict[str, Any]:
    """Read the optional YAML config file."""
    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read config {config_path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid config {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"config {config_path} must be a mapping")
    return data


def parse_args(parser: argparse.ArgumentParser,
               argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse arguments and merge in the YAML config.

    Raises:
        ConfigError: unknown flags, unreadable config, or a missing path
    """
    args = parser.parse_args(argv)

    if args.config is not None:
        config = load_config(args.config)
        if args.calib_path is None and config.get('calib_path'):
            args.calib_path = Path(config['calib_path'])
        if args.output_path is None and config.get('output_path'):
            args.output_path = Path(config['output_path'])

    missing = [flag for flag, value in (('--calib-path', args.calib_path),
                                         ('--output-path', args.output_path))
               if value is None]
    if missing:
        raise ConfigError(f"the following arguments are required: {', '.join(missing)}")
    return args


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S',
        stream=sys.stderr,
    )


def convert(calib_path, output_path, report: bool = True) -> Dict[str, Any]:
    """
    Convert a Basalt calibration file and write the exported JSON.

    The output file is only opened once the document has been fully built,
    so a failed load never leaves a partial output behind.

    Args:
        calib_path: Basalt calibration JSON
        output_path: Destination for the exported document
        report: Print the console report to stdout

    Returns:
        The exported document

    Raises:
        LoadFailure: calibration file unreadable or corrupt
        ModelIntegrityError: parameter vector with the wrong length
    """
    check_input(calib_path)
    record = load_calibration(calib_path)

    document = map_calibration(record)
    text = dump_document(document)

    if report:
        for line in format_report(record):
            print(line)

    output_path = Path(output_path)
    with open(output_path, 'w') as f:
        f.write(text)
    logger.info(f"Saved to: {output_path}")

    return document


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line interface for calibration export."""
    parser = build_parser()
    try:
        args = parse_args(parser, argv)
    except ConfigError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    setup_logging(args.verbose)

    try:
        convert(args.calib_path, args.output_path, report=not args.quiet)
    except LoadFailure as e:
        logger.error(str(e))
        return 1
    except ModelIntegrityError as e:
        logger.error(f"Malformed camera model in {args.calib_path}: {e}")
        return 1
    except CalibExportError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Could not write {args.output_path}: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
