"""
storeconfig - inspect and export Magento store configuration.

Reads ``core_config_data`` and prints it as a table, as a PHP update script
or as ``config:store:set`` lines for replay.
"""

from storeconfig.cli.commands import cli


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
