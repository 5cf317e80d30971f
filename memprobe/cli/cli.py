#!/usr/bin/env python3
"""
Command-line interface of the memory probe.
"""
import argparse
from pathlib import Path
from typing import List, Optional

from memprobe.config.config_loader import DEFAULT_CONFIG_PATH


def build_env_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Create an ArgumentParser with the common --env option.

    Args:
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.ArgumentParser: parser preconfigured with the --env argument.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration override (e.g., 'dev', 'prod'). "
            "Loads config_<env>.yaml in addition to the base config.yaml."
        ),
    )
    return parser


def build_probe_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    parser = build_env_parser(description=description)
    parser.add_argument("--config-dir", type=Path, default=DEFAULT_CONFIG_PATH,
                        help=f"Directory holding config.yaml (default: {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--log-file", type=Path, default=None,
                        help="Also write detailed diagnostics to this file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show debug diagnostics on stderr")
    return parser


def parse_probe_args(argv: Optional[List[str]] = None,
                     description: Optional[str] = None) -> argparse.Namespace:
    """
    Parse CLI arguments of the probe.

    Args:
        argv: Arguments to parse (default: sys.argv[1:])
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.Namespace: parsed arguments containing `env`, `config_dir`,
        `log_file` and `verbose`.
    """
    return build_probe_parser(description=description).parse_args(argv)
