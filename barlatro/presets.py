"""
Preset configurations for BAR-latro.
Allows easy setup of different difficulty settings.
"""

from dataclasses import dataclass, field
from typing import Optional

from .engine.game import GameConfig


@dataclass
class Preset:
    """A named set of GameConfig overrides."""
    name: str
    description: str
    config_overrides: dict = field(default_factory=dict)


# Built-in presets
PRESETS = {
    "standard": Preset(
        name="Standard",
        description="The bar's house rules: 4 hands, 3 discards, goal starts at 100",
    ),

    "relaxed": Preset(
        name="Relaxed",
        description="Extra hand and discard, lower starting goal",
        config_overrides={"hands_per_round": 5, "discards_per_round": 4, "starting_goal": 80},
    ),

    "hardcore": Preset(
        name="Hardcore",
        description="Fewer hands and discards, goal triples every round",
        config_overrides={"hands_per_round": 3, "discards_per_round": 1, "goal_growth": 3},
    ),
}


def get_preset(name: str) -> Optional[Preset]:
    """Get a preset by name."""
    return PRESETS.get(name.lower().replace(" ", "_"))


def list_presets() -> list[str]:
    """List all available preset names."""
    return list(PRESETS.keys())


def build_config(preset: str = "standard") -> GameConfig:
    """Build a GameConfig from a preset name. Unknown override keys are ignored."""
    p = get_preset(preset)
    if p is None:
        raise ValueError(f"Unknown preset: {preset}. Available: {list_presets()}")

    config = GameConfig()
    for key, value in p.config_overrides.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
