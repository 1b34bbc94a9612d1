"""Main entry point for the terminal to-do list."""
import click
from cli import CLI
from logger import setup_logging
from models import generate_random_todo_item
from todos import TodoViewModel


@click.command()
@click.option("--alt-screen/--no-alt-screen", default=True, envvar="TODO_ALT_SCREEN",
              show_default=True, help="Draw in the terminal's alternate screen buffer.")
@click.option("--random", "random_count", type=click.IntRange(min=0), default=0,
              help="Start with N random tasks.")
@click.option("--log-level", default="WARNING", envvar="TODO_LOG_LEVEL", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
@click.option("--log-file", type=click.Path(dir_okay=False), envvar="TODO_LOG_FILE",
              help="Write logs here instead of stderr.")
def main(alt_screen, random_count, log_level, log_file):
    """Single-screen to-do list; the list lives only as long as the process."""
    setup_logging(log_level, log_file)
    view_model = TodoViewModel()
    for _ in range(random_count):
        view_model.add_item(generate_random_todo_item())
    CLI(view_model, alt_screen=alt_screen).run()


if __name__ == "__main__":
    main()
