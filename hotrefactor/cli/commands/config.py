"""
Configuration commands for HotRefactor CLI.

This module contains command handlers for:
- Showing the effective configuration
- Writing a default configuration file
- Validating a configuration file
"""

from hotrefactor.config import HotRefactorConfig, load_config


def cmd_config(args) -> None:
    """Handle config command."""
    from hotrefactor.cli_entry import _is_machine_readable, _print_json_to_stdout

    if args.config_action == "show":
        config = load_config(getattr(args, "config", None))
        if _is_machine_readable(args):
            _print_json_to_stdout(args, config.to_dict())
        else:
            print("Current HotRefactor Configuration:")
            print(config.get_config_summary())

    elif args.config_action == "init":
        config = HotRefactorConfig.default()
        config.to_file(args.path, args.format)
        print(f"Default configuration file created at {args.path}")
        print("Edit the file to customize your HotRefactor settings.")

    elif args.config_action == "validate":
        HotRefactorConfig.load(args.config_file, use_env=False, validate=True)
        print(f"Configuration file {args.config_file} is valid")
