# intcode/src/intcode/cli/main.py
import click
import logging
import sys
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..ascii import encode_ascii, split_ascii_output
from ..config import get_config
from ..errors import IntcodeError
from ..pipeline import find_max_signal, run_chain, run_feedback_loop
from ..runner import run as run_program

console = Console()


def _read_program(path):
    with open(path, 'r') as f:
        return f.read()


def _parse_phases(value):
    try:
        return [int(p) for p in value.split(',') if p.strip()]
    except ValueError:
        raise click.BadParameter(f"expected comma separated integers, got {value!r}")


def _fail(error):
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    sys.exit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="intcode")
@click.option('--log-level', default=None,
              help="Logging level (defaults to INTCODE_LOG_LEVEL or WARNING)")
def cli(log_level):
    """Intcode virtual machine"""
    level = (log_level or get_config().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@cli.command()
@click.argument('file', type=click.Path(exists=True))
@click.option('-i', '--input', 'inputs', multiple=True, type=int, help="Input value (repeatable)")
@click.option('--ascii', 'ascii_file', type=click.Path(exists=True),
              help="Text file fed as ASCII input after the -i values")
@click.option('--decode-ascii', is_flag=True, help="Render ASCII output as text")
@click.option('--max-steps', type=int, default=None, help="Abort after this many instructions")
def run(file, inputs, ascii_file, decode_ascii, max_steps):
    """Run an Intcode program"""
    values = list(inputs)
    try:
        program = _read_program(file)
        if ascii_file:
            values.extend(encode_ascii(_read_program(ascii_file)))
        outputs = run_program(program, values, max_steps=max_steps)
    except (IntcodeError, ValueError) as e:
        _fail(e)

    if decode_ascii:
        text, others = split_ascii_output(outputs)
        if text:
            console.print(Panel.fit(text.rstrip("\n"), title="[bold blue]Output[/bold blue]",
                                    border_style="blue"))
        for value in others:
            console.print(f"[bold green]{value}[/bold green]")
    else:
        console.print(",".join(str(v) for v in outputs))


@cli.command()
@click.argument('file', type=click.Path(exists=True))
@click.option('--phases', required=True, help="Comma separated phase settings, e.g. 4,3,2,1,0")
@click.option('--feedback', is_flag=True, help="Relay the last stage's output back to the first")
@click.option('--signal', type=int, default=0, show_default=True, help="Initial signal")
def amplify(file, phases, feedback, signal):
    """Run an amplifier pipeline with fixed phase settings"""
    phase_list = _parse_phases(phases)
    try:
        program = _read_program(file)
        if feedback:
            result = run_feedback_loop(program, phase_list, signal)
        else:
            result = run_chain(program, phase_list, signal)
    except (IntcodeError, ValueError) as e:
        _fail(e)

    if result is None:
        console.print("[yellow]The pipeline produced no signal[/yellow]")
    else:
        console.print(f"[bold green]Signal:[/bold green] {result}")


@cli.command()
@click.argument('file', type=click.Path(exists=True))
@click.option('--phases', default=None, help="Phase values to permute (default 0-4, or 5-9 with --feedback)")
@click.option('--feedback', is_flag=True, help="Search the feedback loop configuration")
def search(file, phases, feedback):
    """Find the phase ordering that gives the highest signal"""
    if phases:
        phase_values = _parse_phases(phases)
    else:
        phase_values = [5, 6, 7, 8, 9] if feedback else [0, 1, 2, 3, 4]
    try:
        program = _read_program(file)
        best, best_phases = find_max_signal(program, phase_values, feedback=feedback)
    except (IntcodeError, ValueError) as e:
        _fail(e)

    table = Table(title="Best phase setting")
    table.add_column("Mode", style="cyan")
    table.add_column("Phases", style="yellow")
    table.add_column("Signal", style="green")
    table.add_row("feedback" if feedback else "chain",
                  ",".join(str(p) for p in best_phases),
                  "-" if best is None else str(best))
    console.print(table)


if __name__ == "__main__":
    cli()
