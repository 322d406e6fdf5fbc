"""CLI Main Entry Point"""

import logging

from anc.cli.args import parse_args
from anc.cli.commands import (
    display_config, handle_delete_key, handle_set_key, handle_show_key,
    run_config_editor, run_install_completion,
)
from anc.config import ConfigManager
from anc.git import GitRepo, GitError
from anc.output import print_error
from anc.session import SessionController, EffectRunner

DEBUG_LOG = "anc-debug.log"


def _configure_logging(debug: bool) -> None:
    """Log to a file only; the terminal belongs to the UI."""
    root = logging.getLogger("anc")
    if not debug:
        root.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(DEBUG_LOG, encoding='utf-8')
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def _handle_subcommands(args, manager: ConfigManager):
    """Handle flags that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.set_key is not None:
        return handle_set_key(manager, args.set_key), True
    if args.show_key:
        return handle_show_key(manager), True
    if args.delete_key:
        return handle_delete_key(manager), True
    if args.config:
        return run_config_editor(manager), True
    if args.show_config:
        return display_config(manager), True
    if args.install_completion:
        return run_install_completion(), True
    return 0, False


def run_session(manager: ConfigManager) -> int:
    """Enter the interactive session."""
    from anc.tui import CommitApp

    try:
        repo = GitRepo()
    except GitError as e:
        print_error(str(e))
        return 1

    config = manager.load()
    logging.getLogger(__name__).debug("config loaded, api key present: %s", bool(config.api_key))

    controller = SessionController(config)
    runner = EffectRunner(repo, config, config_manager=manager)
    CommitApp(controller, runner).run()
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    args = parse_args()
    _configure_logging(args.debug)

    manager = ConfigManager()

    # Handle subcommands that exit early
    exit_code, should_exit = _handle_subcommands(args, manager)
    if should_exit:
        return exit_code

    return run_session(manager)
