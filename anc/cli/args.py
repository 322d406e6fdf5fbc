"""CLI Argument Parsing"""

import argparse
import argcomplete

from anc import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='anc',
        description='Stage files and commit with an AI-generated message',
        epilog='Run without options to enter interactive mode.'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s (add-n-commit) {__version__}')

    # Key management
    parser.add_argument('--set-key', type=str, metavar='KEY', help='Set the API key')
    parser.add_argument('--show-key', action='store_true', help='Show the current API key (masked)')
    parser.add_argument('--delete-key', action='store_true', help='Delete the stored API key')

    # Setup/config
    parser.add_argument('--config', action='store_true', help='Open configuration editor')
    parser.add_argument('--show-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    # Diagnostics
    parser.add_argument('--debug', action='store_true', help='Write a debug log to anc-debug.log')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
