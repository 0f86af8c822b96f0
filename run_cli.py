import sys

import typer

import cli.cli

if __name__ == "__main__":
    # Default to listing the rule set when run without arguments
    if len(sys.argv) == 1:
        sys.argv = ["run_cli.py", "rules"]
    typer_app: typer.Typer = cli.cli.app
    typer_app()
