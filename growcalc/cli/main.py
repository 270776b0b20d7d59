"""
growcalc CLI - Main Entry Point

Typer CLI that assembles the module sub-commands.

Usage:
    growcalc version
    growcalc calcs
    growcalc eng [command]
"""

import typer

import growcalc

app = typer.Typer(
    name="growcalc",
    help="Engineering calculations for controlled-environment growing facilities.",
    no_args_is_help=True,
)


@app.command()
def version():
    """Show growcalc version."""
    typer.echo(f"growcalc {growcalc.__version__}")


@app.command()
def calcs():
    """List the calculations available in each discipline."""
    from growcalc.engineering import discipline_calculators

    for calc in discipline_calculators():
        typer.echo(f"{calc.discipline_name:<12} {', '.join(calc.available_calculations())}")


def _register_modules():
    """Register module CLI sub-apps."""
    from growcalc.engineering.cli import app as eng_app

    app.add_typer(eng_app, name="eng", help="Engineering calculations")


_register_modules()


def main():
    """Entry point for the growcalc CLI."""
    app()


if __name__ == "__main__":
    main()
