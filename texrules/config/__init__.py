from .loader import load_config
from .models import (
    DocumentsConfig,
    GraphicsConfig,
    OutputConfig,
    TexRulesConfig,
    ToolsConfig,
)

__all__ = [
    "DocumentsConfig",
    "GraphicsConfig",
    "OutputConfig",
    "TexRulesConfig",
    "ToolsConfig",
    "load_config",
]
