#!/usr/bin/env python3
"""backlog CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from backlog.lib.config import apply_cli_overrides, load_config
from backlog.lib.envparse import EnvSyntaxError
from backlog.lib.logs import configure_logging
from backlog.commands import init as cmd_init_module
from backlog.commands import list as cmd_list_module
from backlog.commands import run as cmd_run_module

logger = logging.getLogger(__name__)


def get_config(args):
    """Load config from --config / backlog.env / environment, then CLI flags."""
    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path)
    except (FileNotFoundError, EnvSyntaxError) as e:
        print(f"ERROR: {e}")
        sys.exit(2)
    return apply_cli_overrides(config, db_path=args.db, verbose=args.verbose)


def cmd_run(args, config):
    return cmd_run_module.cmd_run(args, config)


def cmd_init(args, config):
    return cmd_init_module.cmd_init(args, config)


def cmd_list(args, config):
    return cmd_list_module.cmd_list(args, config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='backlog', description='Personal epic/story tracker')
    parser.add_argument('--config', '-c', help='Path to backlog.env')
    parser.add_argument('--db', help='Database file (overrides DB_PATH)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    parser.set_defaults(func=cmd_run)
    subparsers = parser.add_subparsers(dest='command')

    # backlog run
    p_run = subparsers.add_parser('run', help='Interactive session (default)')
    p_run.set_defaults(func=cmd_run)

    # backlog init
    p_init = subparsers.add_parser('init', help='Create an empty database')
    p_init.add_argument('--force', action='store_true', help='Replace an existing database')
    p_init.set_defaults(func=cmd_init)

    # backlog list
    p_list = subparsers.add_parser('list', help='Print epics and stories')
    p_list.set_defaults(func=cmd_list)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = get_config(args)
    configure_logging(config.log_level, config.log_file)
    logger.debug(f"Using database {config.db_path}")
    return args.func(args, config)


if __name__ == '__main__':
    sys.exit(main())
