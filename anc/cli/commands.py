"""CLI Commands"""

import os
import sys

from anc.config import Config, ConfigManager, VALID_MODES, VALID_PROVIDERS
from anc.output import bold, dim, info, print_success, print_error, print_warning


def mask_api_key(key: str) -> str:
    """Show the first 3 and last 4 characters of a key."""
    if len(key) <= 8:
        return "********"
    return f"{key[:3]}...{key[-4:]}"


def handle_set_key(manager: ConfigManager, key: str) -> int:
    if not key.startswith("sk-"):
        print_error("Invalid API key format: keys should start with 'sk-'")
        return 1

    config = manager.load(apply_env=False)
    config.api_key = key
    try:
        path = manager.save(config)
    except OSError as e:
        print_error(f"Failed to save configuration: {e}")
        return 1

    print_success("API key saved successfully")
    print(dim(f"Configuration stored in {path}"))
    return 0


def handle_show_key(manager: ConfigManager) -> int:
    config = manager.load()
    if not config.api_key:
        print("No API key configured")
        print(dim("Use 'anc --set-key <key>' to set one"))
        return 0

    print(f"Current API key: {info(mask_api_key(config.api_key))}")
    if os.environ.get(config.api_key_env):
        print(dim(f"  (from {config.api_key_env})"))
    return 0


def handle_delete_key(manager: ConfigManager) -> int:
    config = manager.load(apply_env=False)
    if not config.api_key:
        print("No API key to delete")
        return 0

    config.api_key = ""
    try:
        manager.save(config)
    except OSError as e:
        print_error(f"Failed to save configuration: {e}")
        return 1

    print_success("API key deleted successfully")
    if os.environ.get(config.api_key_env):
        print_warning(f"{config.api_key_env} is still set in your environment")
    return 0


def display_config(manager: ConfigManager) -> int:
    """Display current configuration."""
    config = manager.load()

    print(f"\n{bold('Current Configuration')}\n")

    if manager.exists():
        print(f"  {dim('Loaded from:')} {manager.path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no {manager.path} found)")

    if os.environ.get(config.api_key_env):
        print(f"  {dim('Environment overrides:')} {config.api_key_env}")

    key = mask_api_key(config.api_key) if config.api_key else 'not set'
    print()
    print(f"  {bold('Settings:')}")
    print(f"    api_key:            {info(key)}")
    print(f"    provider:           {info(config.provider)}")
    print(f"    model:              {info(config.model)}")
    print(f"    default_mode:       {info(config.default_mode)}")
    print(f"    auto_stage_all:     {info(str(config.auto_stage_all).lower())}")
    print(f"    temperature:        {info(str(config.temperature))}")
    print(f"    system_prompt_all:  {dim(config.system_prompt_all)}")
    print(f"    system_prompt_file: {dim(config.system_prompt_file)}")

    print(f"\n  {dim('Run')} anc --config {dim('to change settings')}\n")
    return 0


def _ask(label: str, current: str) -> str:
    """Prompt for a value; Enter keeps the current one."""
    value = input(f"{label} [{dim(current)}]: ").strip()
    return value or current


def run_config_editor(manager: ConfigManager) -> int:
    """Interactive configuration editor."""
    # The environment credential must not end up in the file
    config = manager.load(apply_env=False)
    print(f"\n{bold('Configure add-n-commit')}")
    print(dim("Press Enter to keep the current value.\n"))

    try:
        current_key = mask_api_key(config.api_key) if config.api_key else ''
        api_key = input(f"API key [{dim(current_key)}]: ").strip() or config.api_key
        provider = _ask(f"Provider ({'/'.join(sorted(VALID_PROVIDERS))})", config.provider)
        model = _ask("Model", config.model)
        default_mode = _ask("Default mode (interactive/all/by-file)", config.default_mode)
        temperature = _ask("Temperature", f"{config.temperature:.1f}")
        auto_stage = _ask("Preselect all changed files (y/n)", 'y' if config.auto_stage_all else 'n')
        prompt_all = _ask("System prompt (all)", config.system_prompt_all)
        prompt_file = _ask("System prompt (file)", config.system_prompt_file)
    except (KeyboardInterrupt, EOFError):
        print(dim("\nCancelled."))
        return 0

    if provider not in VALID_PROVIDERS:
        print_error(f"Invalid provider: must be one of {', '.join(sorted(VALID_PROVIDERS))}")
        return 1
    if default_mode not in VALID_MODES:
        print_error("Invalid default mode: must be 'interactive', 'all', or 'by-file'")
        return 1
    try:
        temperature_value = float(temperature)
    except ValueError:
        print_error(f"Invalid temperature value: {temperature}")
        return 1

    updated = Config(
        api_key=api_key,
        provider=provider,
        model=model,
        default_mode=default_mode,
        auto_stage_all=auto_stage.lower().startswith('y'),
        temperature=temperature_value,
        system_prompt_all=prompt_all,
        system_prompt_file=prompt_file,
    )
    try:
        path = manager.save(updated)
    except OSError as e:
        print_error(f"Failed to save configuration: {e}")
        return 1

    print_success(f"Configuration saved to {path}")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = '~/.zshrc' if 'zsh' in shell else '~/.bashrc'
        line = 'eval "$(register-python-argcomplete anc)"'
        print(f"Add this line to {dim(os.path.expanduser(rc_file))}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell anc | Out-String | Invoke-Expression\n")
        print("To make it permanent, add to your $PROFILE.")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print('  eval "$(register-python-argcomplete anc)"\n')
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish anc | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
