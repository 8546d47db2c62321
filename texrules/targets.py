"""Target names and their root/kind decomposition."""

from __future__ import annotations

from dataclasses import dataclass

# The only kind that spans two extensions.
COMPRESSED_PS = "ps.gz"


@dataclass(frozen=True)
class Target:
    """A file name pending resolution, split into root and kind."""

    name: str
    root: str
    kind: str

    def sibling(self, kind: str) -> str:
        """Name of the file with the same root and a different kind."""
        return f"{self.root}.{kind}"


def split_target(name: str) -> Target:
    if name.endswith("." + COMPRESSED_PS):
        return Target(name=name, root=name[: -len(COMPRESSED_PS) - 1], kind=COMPRESSED_PS)
    base = name.rsplit("/", 1)[-1]
    if "." not in base.lstrip("."):
        return Target(name=name, root=name, kind="")
    root, _, kind = name.rpartition(".")
    return Target(name=name, root=root, kind=kind)


def has_extension(name: str) -> bool:
    return bool(split_target(name).kind)


def with_default_extension(name: str, extension: str) -> str:
    """Append ``.extension`` unless *name* already carries one."""
    if has_extension(name):
        return name
    return f"{name}.{extension.lstrip('.')}"


# Targets the emitter always defines; never resolved as files.
PHONY_TARGETS = frozenset({"default", "all", "clean", "bare", "rebuild", "spell"})
