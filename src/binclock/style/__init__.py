"""Style configuration module.

Provides:
- StyleConfig and its value types
- Per-size defaults and bar-chart defaulting
- Persisted record codec
- Style stores and the editing model
"""

from .codec import (
    decode_style,
    decode_style_json,
    decode_style_or_default,
    encode_style,
    encode_style_json,
)
from .defaults import default_style, ensure_bar_defaults
from .editor import StyleEditor
from .models import (
    BarStyle,
    Colors,
    DisplaySize,
    MarkerShape,
    RepresentationMode,
    RGBAColor,
    StyleConfig,
)
from .store import MemoryStyleStore, StyleStore, YamlStyleStore, create_store, style_key

__all__ = [
    "BarStyle",
    "Colors",
    "DisplaySize",
    "MarkerShape",
    "RepresentationMode",
    "RGBAColor",
    "StyleConfig",
    "default_style",
    "ensure_bar_defaults",
    "encode_style",
    "decode_style",
    "encode_style_json",
    "decode_style_json",
    "decode_style_or_default",
    "StyleStore",
    "MemoryStyleStore",
    "YamlStyleStore",
    "create_store",
    "style_key",
    "StyleEditor",
]
