from pydantic import BaseModel, Field
from typing import Literal


class ToolsConfig(BaseModel):
    latex: str = "latex"
    bibtex: str = "bibtex"
    dvips: str = "dvips"
    ps2pdf: str = "ps2pdf"
    psnup: str = "psnup"
    gzip: str = "gzip"
    fig2dev: str = "fig2dev"
    gnuplot: str = "gnuplot"
    dot: str = "dot"
    dia: str = "dia"
    asy: str = "asy"
    tree: str = "tree2fig"
    convert: str = "convert"
    spell: str = "aspell --mode=tex check"


class GraphicsConfig(BaseModel):
    default_extension: str = "eps"
    raster_extensions: list[str] = Field(default_factory=lambda: [
        "png", "jpg", "jpeg", "gif", "bmp", "tif", "tiff", "ppm", "pnm"
    ])
    bitmap_targets: list[str] = Field(default_factory=lambda: ["png"])
    data_suffixes: list[str] = Field(default_factory=lambda: [".dat"])
    bitmap_density: int = Field(default=150, gt=0)
    asymptote_env: str = "ASYMPTOTE_DIR"


class DocumentsConfig(BaseModel):
    paper: str = "letter"
    latex_options: str = "-interaction=nonstopmode"
    landscape_classes: list[str] = Field(default_factory=lambda: ["seminar", "prosper"])
    no_papersize_classes: list[str] = Field(default_factory=lambda: ["prosper"])
    deliverables: list[Literal["pdf", "ps", "ps.gz", "dvi"]] = Field(
        default_factory=lambda: ["pdf"], min_length=1
    )
    aux_extensions: list[str] = Field(default_factory=lambda: [
        "aux", "log", "bbl", "blg", "toc", "lof", "lot", "out", "nav", "snm", "idx", "ind", "ilg"
    ])
    rule_files: list[str] = Field(default_factory=lambda: ["Makefile.local"])


class OutputConfig(BaseModel):
    rules_file: str = ".texrules.mk"
    executor: str = "make"


class TexRulesConfig(BaseModel):
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    graphics: GraphicsConfig = Field(default_factory=GraphicsConfig)
    documents: DocumentsConfig = Field(default_factory=DocumentsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
