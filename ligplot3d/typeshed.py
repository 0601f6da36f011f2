"""Helper module containing type aliases."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Literal, TypeAlias, Union

if TYPE_CHECKING:
    from pathlib import Path

    from MDAnalysis.core.groups import AtomGroup
    from MDAnalysis.core.universe import Universe

    from ligplot3d.residue import ResidueId, ResidueOption

# utils
PathLike: TypeAlias = Union[str, "Path"]

# residues
ResidueKey: TypeAlias = Union["ResidueId", int, str]
LigandSelector: TypeAlias = Union["ResidueId", "ResidueOption", str]
"""A ligand residue given as a ResidueId, a candidate, or a string like ``LIG1.A``"""

# interactions
InteractionSelection: TypeAlias = Literal["all"] | Sequence[str]

# MDAnalysis
MDAObject: TypeAlias = Union["Universe", "AtomGroup"]
"""An MDAnalysis Universe or Atomgroup."""

# Interaction parameters
Angles: TypeAlias = tuple[float, float]
