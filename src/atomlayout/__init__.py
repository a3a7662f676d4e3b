"""atomlayout - layout and bookkeeping for a particle atom.

Models an atom built from individual protons, neutrons and electrons and
works out where each particle should sit: electrons in a two-shell slot
table, nucleons in a compact cluster whose shape depends on their count.

Quick Start:
    from atomlayout import AtomSettings, Particle, ParticleAtom, ParticleType, Vector2

    atom = ParticleAtom(AtomSettings(nucleon_radius=3))
    atom.add_particle(Particle(ParticleType.PROTON))
    atom.add_particle(Particle(ParticleType.NEUTRON))
    atom.add_particle(Particle(ParticleType.ELECTRON, Vector2(150, 20)))

    atom.charge_property.get()           # 0
    atom.nucleus_radius_property.get()   # 6.0
    atom.move_all_particles_to_destination()

The atom only sets each particle's destination; animating position toward
it is up to the host application.
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("atomlayout")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except Exception:
        __version__ = "unknown"

from atomlayout.electron_shells import (
    ElectronAddMode,
    ElectronShellPosition,
    ElectronShellSlotTable,
    ShellKind,
)
from atomlayout.exceptions import (
    AtomLayoutError,
    NoOpenPositionsError,
    ParticleNotInAtomError,
    UnknownParticleTypeError,
)
from atomlayout.models import Particle, ParticleType, Vector2
from atomlayout.nucleus import (
    NucleonPlacement,
    NucleusConfiguration,
    configure_nucleus,
    interleave_nucleons,
)
from atomlayout.particle_atom import ParticleAtom
from atomlayout.reactive import (
    DerivedProperty,
    ObservableCollection,
    Property,
    ReadOnlyProperty,
)
from atomlayout.settings import AtomSettings

__all__ = [
    # Version
    "__version__",
    # Models
    "Particle",
    "ParticleType",
    "Vector2",
    # Reactive primitives
    "DerivedProperty",
    "ObservableCollection",
    "Property",
    "ReadOnlyProperty",
    # Electron shells
    "ElectronAddMode",
    "ElectronShellPosition",
    "ElectronShellSlotTable",
    "ShellKind",
    # Nucleus
    "NucleonPlacement",
    "NucleusConfiguration",
    "configure_nucleus",
    "interleave_nucleons",
    # Atom
    "ParticleAtom",
    # Config
    "AtomSettings",
    # Errors
    "AtomLayoutError",
    "NoOpenPositionsError",
    "ParticleNotInAtomError",
    "UnknownParticleTypeError",
]
