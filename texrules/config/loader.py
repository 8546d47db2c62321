"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import TexRulesConfig

# Only these variables may be interpolated into config values.
_ALLOWED_ENV_VARS = frozenset({"HOME", "USER", "TEXINPUTS", "ASYMPTOTE_DIR", "PAPERSIZE"})


def load_config(
    cli_path: str | None = None, project_dir: str | Path | None = None
) -> TexRulesConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    The project-local file is `texrules.yaml` in *project_dir* (default: the
    current directory).
    """
    project = Path(project_dir) if project_dir is not None else Path(".")
    config_paths = [
        Path(cli_path) if cli_path else None,
        project / "texrules.yaml",
        Path.home() / ".texrules" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return TexRulesConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e
            except TypeError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return TexRulesConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", _lookup_env, obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def _lookup_env(match: re.Match) -> str:
    name = match.group(1)
    if name not in _ALLOWED_ENV_VARS:
        return ""
    return os.environ.get(name, "")


# Default YAML template for `texrules --init-config`
DEFAULT_CONFIG_TEMPLATE = """\
# texrules.yaml

# External commands used in generated recipes
tools:
  latex: "latex"
  bibtex: "bibtex"
  dvips: "dvips"
  ps2pdf: "ps2pdf"
  psnup: "psnup"
  gzip: "gzip"
  fig2dev: "fig2dev"
  gnuplot: "gnuplot"
  dot: "dot"
  dia: "dia"
  asy: "asy"
  tree: "tree2fig"
  convert: "convert"
  spell: "aspell --mode=tex check"

# Figures
graphics:
  default_extension: "eps"     # appended to \\includegraphics names without one
  raster_extensions: [png, jpg, jpeg, gif, bmp, tif, tiff, ppm, pnm]
  bitmap_targets: [png]        # derived from the same-named .eps
  data_suffixes: [".dat"]      # gnuplot data files picked up as prerequisites
  bitmap_density: 150
  asymptote_env: "ASYMPTOTE_DIR"

# Documents
documents:
  paper: "letter"
  latex_options: "-interaction=nonstopmode"
  landscape_classes: [seminar, prosper]
  no_papersize_classes: [prosper]
  deliverables: [pdf]          # pdf | ps | ps.gz | dvi
  rule_files: [Makefile.local] # hand-authored rules copied into the output

# Output
output:
  rules_file: ".texrules.mk"
  executor: "make"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
