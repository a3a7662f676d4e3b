# src/atomlayout/cli/app.py
"""Command-line interface for atomlayout.

A thin Typer wrapper around ParticleAtom. Each command:
1. Parses args (via Typer)
2. Builds settings from config file / env / flags
3. Builds an atom and lays it out
4. Renders results with Rich
"""

from __future__ import annotations

import logging

try:
    import typer
    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table
except ImportError as e:
    raise SystemExit(
        "CLI requires additional dependencies.\nInstall with: pip install atomlayout[cli]"
    ) from e

from pydantic import ValidationError

from atomlayout import __version__
from atomlayout.config import build_settings, load_config, validate_config
from atomlayout.exceptions import NoOpenPositionsError
from atomlayout.logging_config import setup_logging
from atomlayout.models import Particle, ParticleType, Vector2
from atomlayout.particle_atom import ParticleAtom
from atomlayout.settings import AtomSettings

app = typer.Typer(
    name="atomlayout",
    help="atomlayout - inspect nucleus and electron shell layouts.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"atomlayout {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log placement decisions.",
    ),
) -> None:
    """atomlayout - inspect nucleus and electron shell layouts."""
    if verbose:
        setup_logging(logging.DEBUG)


def _load_settings(config_file: str | None, nucleon_radius: float | None = None) -> AtomSettings:
    """Build settings, exiting with a message on bad config."""
    try:
        config = load_config(config_file)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] could not load config: {e}")
        raise typer.Exit(1) from e

    for warning in validate_config(config):
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    try:
        settings = build_settings(config)
        if nucleon_radius is not None:
            settings = AtomSettings(**{**settings.model_dump(), "nucleon_radius": nucleon_radius})
    except ValidationError as e:
        console.print(f"[red]Error:[/red] invalid settings: {e}")
        raise typer.Exit(1) from e
    return settings


def _fmt(value: float) -> str:
    return f"{value:.3f}"


@app.command()
def layout(
    protons: int = typer.Option(0, "--protons", "-p", min=0, help="Number of protons"),
    neutrons: int = typer.Option(0, "--neutrons", "-n", min=0, help="Number of neutrons"),
    electrons: int = typer.Option(0, "--electrons", "-e", min=0, help="Number of electrons"),
    nucleon_radius: float = typer.Option(
        None,
        "--nucleon-radius",
        "-r",
        help="Override nucleon radius",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Build an atom and show where every particle ends up."""
    settings = _load_settings(config_file, nucleon_radius)
    atom = ParticleAtom(settings)

    # Electrons start below the atom, where a host would keep its bucket.
    electron_start = Vector2(0, -2 * settings.outer_electron_shell_radius)

    for i in range(max(protons, neutrons)):
        if i < protons:
            atom.add_particle(Particle(ParticleType.PROTON))
        if i < neutrons:
            atom.add_particle(Particle(ParticleType.NEUTRON))
    try:
        for _ in range(electrons):
            atom.add_particle(Particle(ParticleType.ELECTRON, electron_start))
    except NoOpenPositionsError as e:
        console.print(f"[red]Error:[/red] {e} (at most 10 electrons fit in the modeled shells)")
        raise typer.Exit(1) from e

    atom.move_all_particles_to_destination()

    table = Table(title="Particles")
    table.add_column("Type", style="cyan")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Layer", justify="right")
    for collection in (atom.protons, atom.neutrons, atom.electrons):
        for particle in collection:
            table.add_row(
                particle.type.value,
                _fmt(particle.position.x),
                _fmt(particle.position.y),
                str(particle.z_layer),
            )
    console.print(table)

    summary = (
        f"Protons: {atom.proton_count_property.get()}\n"
        f"Neutrons: {atom.neutron_count_property.get()}\n"
        f"Electrons: {atom.electron_count_property.get()}\n"
        f"Charge: {atom.charge_property.get():+d}\n"
        f"Mass number: {atom.mass_number_property.get()}\n"
        f"Nucleus radius: {_fmt(atom.nucleus_radius_property.get())}"
    )
    console.print(Panel(summary, title="Atom", expand=False))


@app.command()
def shells(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show the ten electron shell positions."""
    settings = _load_settings(config_file)
    atom = ParticleAtom(settings)

    table = Table(title="Electron shell positions")
    table.add_column("#", justify="right")
    table.add_column("Shell", style="cyan")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    for index, position in enumerate(atom.electron_shell_positions):
        coords = atom.electron_shells.absolute_position(position)
        table.add_row(str(index), position.shell.value, _fmt(coords.x), _fmt(coords.y))
    console.print(table)


@app.command(name="config")
def config_cmd(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show the effective settings."""
    settings = _load_settings(config_file)

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)
