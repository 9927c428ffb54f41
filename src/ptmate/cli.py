"""CLI entry point for ptmate."""

import click

from . import __version__
from .commands import assess, clients, dashboard, init, measure, serve, sessions, trainers


@click.group()
@click.version_option(version=__version__, prog_name="ptmate")
def main():
    """ptmate: personal-training studio management.

    Track clients and their session packages, schedule sessions,
    record body measurements and run fitness assessments.

    Example usage:

        # Initialize the database
        ptmate init

        # Create a trainer login for the web API
        ptmate trainers add coach@example.com Alex Smith

        # Add a client with a 10-session package for trainer 1
        ptmate clients add Jane Doe --package 10 --trainer 1

        # Schedule and complete a session
        ptmate sessions add 1 "2026-01-05 09:00"
        ptmate sessions status 1 completed

        # See the day at a glance
        ptmate dashboard
    """
    pass


# Register commands
main.add_command(init)
main.add_command(trainers)
main.add_command(clients)
main.add_command(sessions)
main.add_command(measure)
main.add_command(assess)
main.add_command(dashboard)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
