"""
Layout preset resolution.

Applies named presets from layout_presets.yaml onto the structured layout
defaults. Presets are composable: later presets override earlier ones.

Examples:
    >>> resolve_settings(Layout.SINGLE, ["palette_slate", "spacing_compact"])
    >>> resolve_settings("two-column", ["palette_forest"])
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import ConfigKeyError, ValidationError

from folio.contexts.rendering.defaults import Layout, SingleColumnSettings, TwoColumnSettings

load_dotenv()
LAYOUT_PRESETS_PATH = Path(
    os.getenv("LAYOUT_PRESETS_PATH", Path(__file__).parent / "layout_presets.yaml")
)

SETTINGS_BY_LAYOUT = {
    Layout.SINGLE: SingleColumnSettings,
    Layout.TWO_COLUMN: TwoColumnSettings,
}

LayoutSettings = Union[SingleColumnSettings, TwoColumnSettings]


def load_layout_presets(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the presets file and flatten it to a single-level dict.

    Collapses nested structure: palette.slate -> palette_slate

    Args:
        config_path: Optional path to presets file (defaults to LAYOUT_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to override dicts
    """
    if config_path is None:
        config_path = LAYOUT_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config or {}

    return flattened


def resolve_settings(
    layout: Union[str, Layout],
    preset_names: Optional[List[str]] = None,
    config_path: Optional[Path] = None,
) -> LayoutSettings:
    """
    Build the settings object for a layout with presets applied in order.

    Args:
        layout: Layout or its name ("single", "two-column")
        preset_names: Preset names to apply (e.g., ["palette_slate", "spacing_compact"])
        config_path: Optional path to presets file (defaults to LAYOUT_PRESETS_PATH)

    Returns:
        SingleColumnSettings or TwoColumnSettings instance

    Raises:
        ValueError: If the layout or a preset is unknown, or a preset does not
            fit the layout's settings schema
    """
    layout = Layout.parse(layout)
    settings_cls = SETTINGS_BY_LAYOUT[layout]

    if not preset_names:
        return settings_cls()

    presets = load_layout_presets(config_path)
    merged = OmegaConf.structured(settings_cls)

    for preset_name in preset_names:
        if preset_name not in presets:
            available = list(presets.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available presets: {available}")
        try:
            merged = OmegaConf.merge(merged, presets[preset_name])
        except (ConfigKeyError, ValidationError) as e:
            raise ValueError(
                f"Preset '{preset_name}' does not apply to the {layout.value} layout: {e}"
            ) from e

    return OmegaConf.to_object(merged)
