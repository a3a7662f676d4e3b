# src/atomlayout/settings.py
"""Configuration for a particle atom.

Settings are passed programmatically. The library never reads environment
variables or files on its own; ``atomlayout.config`` loads YAML for
applications (and the CLI) that want file-based configuration.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, model_validator

ElectronAddModeName = Literal["proximal", "random"]

# Size presets, in view coordinates (roughly pixels).
# - "compact": small nucleons, as used in icon-sized atoms
# - "standard": the default build-an-atom geometry
# - "enlarged": large nucleons for zoomed-in nucleus views
SIZE_PRESETS: dict[str, dict[str, float]] = {
    "compact": {
        "nucleon_radius": 3.0,
        "inner_electron_shell_radius": 85.0,
        "outer_electron_shell_radius": 130.0,
    },
    "standard": {
        "nucleon_radius": 5.0,
        "inner_electron_shell_radius": 85.0,
        "outer_electron_shell_radius": 130.0,
    },
    "enlarged": {
        "nucleon_radius": 10.0,
        "inner_electron_shell_radius": 100.0,
        "outer_electron_shell_radius": 160.0,
    },
}


class AtomSettings(BaseModel):
    """Geometry and behavior settings for a ParticleAtom.

    Example:
        settings = AtomSettings(nucleon_radius=3)

        # Or start from a size preset
        settings = AtomSettings.with_preset("enlarged", electron_add_mode="random")
    """

    # Electron shells
    inner_electron_shell_radius: float = 85.0
    outer_electron_shell_radius: float = 130.0

    # Nucleus
    nucleon_radius: float = 5.0

    # Electron placement: "proximal" picks the open slot nearest the electron,
    # "random" shuffles the open slots. Inner shell always fills first.
    electron_add_mode: ElectronAddModeName = "proximal"

    # Seed for the default shuffle source used in "random" mode (None = OS entropy)
    random_seed: int | None = None

    @model_validator(mode="after")
    def _check_geometry(self) -> AtomSettings:
        if self.nucleon_radius <= 0:
            raise ValueError("nucleon_radius must be positive")
        if self.inner_electron_shell_radius <= 0:
            raise ValueError("inner_electron_shell_radius must be positive")
        if self.outer_electron_shell_radius <= self.inner_electron_shell_radius:
            raise ValueError(
                "outer_electron_shell_radius must be larger than inner_electron_shell_radius"
            )
        return self

    @classmethod
    def with_preset(cls, preset: str, **overrides: Any) -> AtomSettings:
        """Create settings from a size preset.

        Args:
            preset: One of "compact", "standard", "enlarged".
            **overrides: Settings to override on top of the preset.

        Returns:
            AtomSettings with preset values applied.
        """
        if preset not in SIZE_PRESETS:
            raise ValueError(
                f"Unknown preset '{preset}'. Available presets: {list(SIZE_PRESETS.keys())}"
            )

        preset_settings: dict[str, Any] = dict(SIZE_PRESETS[preset])
        preset_settings.update(overrides)
        return cls(**preset_settings)
