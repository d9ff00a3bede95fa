"""CLI Main Entry Point"""

import sys

from easy_commits.cli.args import COMMANDS, parse_args
from easy_commits.cli.commands import display_config, run_config
from easy_commits.cli.session import run_commit
from easy_commits.git import GitRepository
from easy_commits.output import print_error


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args, parser = parse_args(argv)

    if args.help or args.command in (None, 'help'):
        parser.print_help()
        return 0

    if args.command not in COMMANDS:
        print_error(f"Unknown command: {args.command}")
        parser.print_help()
        return 1

    if args.command == 'config':
        if args.show:
            return display_config()
        return run_config()

    return run_commit(GitRepository(), args.context, verbose=args.verbose)


if __name__ == '__main__':
    sys.exit(main())
