"""CLI Argument Parsing"""

import argparse
import sys
import argcomplete
from argcomplete.completers import ChoicesCompleter

from easy_commits import __version__

COMMANDS = {
    'config': 'Configure AI provider and API key',
    'commit': 'Generate and create a commit with AI-generated message',
    'help': 'Show this help message',
}

EXAMPLES = (
    "Examples:\n"
    "  easy-commits config\n"
    "  easy-commits commit\n"
    "  easy-commits commit --context \"Fixed the login bug\""
)


def build_parser() -> argparse.ArgumentParser:
    commands_help = '\n'.join(f"  {name:<8} {desc}" for name, desc in COMMANDS.items())
    parser = argparse.ArgumentParser(
        prog='easy-commits',
        description='Easy Commits - AI-powered git commit message generator',
        epilog=f"Commands:\n{commands_help}\n\n{EXAMPLES}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )

    parser.add_argument('-h', '--help', action='store_true', help='Show this help message')
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Unknown command words are reported by main(), not by argparse
    command = parser.add_argument('command', nargs='?', metavar='COMMAND', help='One of: ' + ', '.join(COMMANDS))
    command.completer = ChoicesCompleter(list(COMMANDS))

    # Commit options
    parser.add_argument('--context', type=str, nargs='?', metavar='TEXT', help='Add context: --context "Fixed the login bug"')
    parser.add_argument('--verbose', action='store_true', help='Show debug info (prompt size, tokens used, timings)')

    # Config options
    parser.add_argument('--show', action='store_true', help='With config: show the saved configuration')

    return parser


def _bind_context_value(argv: list[str]) -> list[str]:
    """Glue the token after --context onto it, even when it starts with a dash."""
    args = list(argv)
    for i, arg in enumerate(args[:-1]):
        if arg == '--context':
            args[i:i + 2] = [f"--context={args[i + 1]}"]
            break
    return args


def parse_args(argv: list[str] | None = None) -> tuple[argparse.Namespace, argparse.ArgumentParser]:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = _bind_context_value(sys.argv[1:] if argv is None else argv)
    return parser.parse_args(args), parser
