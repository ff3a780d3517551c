"""Entry point for running hotrefactor as a module."""

from hotrefactor.cli_entry import main

if __name__ == "__main__":
    main()
