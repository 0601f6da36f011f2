"""
Detecting interactions between residues --- :mod:`ligplot3d.interactions.interactions`
======================================================================================

Detectors only use heavy atoms and distance or angle criteria. Donor, acceptor,
halogen and metal roles are assigned from the element alone, charged groups and
aromatic rings of the protein from residue and atom names (see
:mod:`ligplot3d.constants`).

Naming follows the role of the ligand: ``Cationic`` is a salt bridge with a
cationic ligand atom, ``PiCation`` involves a ligand ring and a protein cation.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING

from ligplot3d.constants import (
    ACCEPTORS,
    ANION_ELEMENTS,
    CATION_ELEMENTS,
    CATION_NAME_MARKER,
    DONORS,
    HALOGENS,
    METALS,
)
from ligplot3d.geometry import (
    angle_between_limits,
    angle_between_vectors,
    distance,
    is_null_vector,
)
from ligplot3d.interactions.base import (
    Contact,
    InteractionType,
    LigandContext,
    PairDetector,
    ResidueDetector,
)

if TYPE_CHECKING:
    from ligplot3d.residue import Residue
    from ligplot3d.structure import Atom

__all__ = [
    "Anionic",
    "CationPi",
    "Cationic",
    "HalogenBond",
    "HydrogenBond",
    "Hydrophobic",
    "MetalCoordination",
    "PiCation",
    "PiStacking",
    "is_cation_candidate",
]


def is_cation_candidate(atom: "Atom") -> bool:
    """Nitrogen atoms, and atoms whose name looks like an amine or guanidine
    group (contains ``NH``)"""
    return atom.symbol in CATION_ELEMENTS or CATION_NAME_MARKER in atom.name


class PiStacking(ResidueDetector):
    """Pi-stacking between a ligand ring and an aromatic residue

    A ligand ring whose centroid is within ``pi_stacking_distance`` of the
    residue ring centroid is accepted if the angle between both ring planes is
    within ``pi_stacking_parallel_angle`` of parallel (face to face), or in the
    ``pi_stacking_tshaped_angle`` range (edge to face). Rings with an undefined
    plane orientation are never accepted.
    """

    type = InteractionType.PiStacking
    prefix = "pi"

    def is_stacked(self, plane_angle: float) -> bool:
        parallel = self.parameters.pi_stacking_parallel_angle
        # plane angles are acute, the second bound only matters for angles given
        # over the full 0-180 range
        is_parallel = plane_angle <= parallel or plane_angle >= 180 - parallel
        is_tshaped = angle_between_limits(
            plane_angle, *self.parameters.pi_stacking_tshaped_angle
        )
        return is_parallel or is_tshaped

    def detect(self, ligand: LigandContext, residue: "Residue") -> Iterator[Contact]:
        res_ring = residue.aromatic_ring
        if res_ring is None or is_null_vector(res_ring.normal):
            return
        for lig_ring in ligand.rings:
            dist = distance(res_ring.centroid, lig_ring.centroid)
            if dist > self.parameters.pi_stacking_distance:
                continue
            if is_null_vector(lig_ring.normal):
                continue
            plane_angle = angle_between_vectors(res_ring.normal, lig_ring.normal)
            if self.is_stacked(plane_angle):
                yield Contact(
                    lig_ring.atoms[0],
                    res_ring.atoms[0],
                    dist,
                    lig_ring.centroid,
                    res_ring.centroid,
                    angle=plane_angle,
                )


class CationPi(ResidueDetector):
    """Cation-Pi interaction between a ligand (cation) and a residue (aromatic
    ring)

    Ligand cations are nitrogen atoms or atoms named like amines (see
    :func:`is_cation_candidate`). The distance to the ring centroid must be
    below ``pi_cation_distance``.
    """

    type = InteractionType.PiStacking
    prefix = "pic"

    def detect(self, ligand: LigandContext, residue: "Residue") -> Iterator[Contact]:
        res_ring = residue.aromatic_ring
        if res_ring is None:
            return
        for atom in ligand.atoms:
            if not is_cation_candidate(atom):
                continue
            dist = distance(atom.xyz, res_ring.centroid)
            if dist < self.parameters.pi_cation_distance:
                yield Contact(
                    atom, res_ring.atoms[0], dist, atom.xyz, res_ring.centroid
                )


class PiCation(ResidueDetector):
    """Cation-Pi interaction between a ligand (aromatic ring) and a residue
    (cation)"""

    type = InteractionType.PiStacking
    prefix = "pic"

    def detect(self, ligand: LigandContext, residue: "Residue") -> Iterator[Contact]:
        cation = residue.positive_center
        if cation is None:
            return
        for lig_ring in ligand.rings:
            dist = distance(cation.center, lig_ring.centroid)
            if dist < self.parameters.pi_cation_distance:
                yield Contact(
                    lig_ring.atoms[0],
                    cation.atom,
                    dist,
                    lig_ring.centroid,
                    cation.center,
                )


class Anionic(ResidueDetector):
    """Salt bridge between a ligand (anion) and a residue (cation)

    Any ligand O, S or P atom is considered as part of a potential anionic
    group (carboxylate, phosphate, sulfate...). The distance to the center of
    the residue charged group must be below ``salt_bridge_distance``.
    """

    type = InteractionType.SaltBridge
    prefix = "sb"

    def detect(self, ligand: LigandContext, residue: "Residue") -> Iterator[Contact]:
        cation = residue.positive_center
        if cation is None:
            return
        for atom in ligand.atoms:
            if atom.symbol not in ANION_ELEMENTS:
                continue
            dist = distance(atom.xyz, cation.center)
            if dist < self.parameters.salt_bridge_distance:
                yield Contact(atom, cation.atom, dist, atom.xyz, cation.center)


class Cationic(ResidueDetector):
    """Salt bridge between a ligand (cation) and a residue (anion)"""

    type = InteractionType.SaltBridge
    prefix = "sb"

    def detect(self, ligand: LigandContext, residue: "Residue") -> Iterator[Contact]:
        anion = residue.negative_center
        if anion is None:
            return
        for atom in ligand.atoms:
            if not is_cation_candidate(atom):
                continue
            dist = distance(atom.xyz, anion.center)
            if dist < self.parameters.salt_bridge_distance:
                yield Contact(atom, anion.atom, dist, atom.xyz, anion.center)


class HydrogenBond(PairDetector):
    """Hydrogen bond between heavy atoms

    One atom must be a donor and the other an acceptor, in any direction. No
    hydrogen or angle is required.
    """

    type = InteractionType.HydrogenBond
    prefix = "hb"

    @property
    def cutoff(self) -> float:
        return self.parameters.hbond_distance

    def matches(self, ligand_atom: "Atom", protein_atom: "Atom") -> bool:
        lig, prot = ligand_atom.symbol, protein_atom.symbol
        return (lig in DONORS and prot in ACCEPTORS) or (
            lig in ACCEPTORS and prot in DONORS
        )


class HalogenBond(PairDetector):
    """Halogen bonding between a ligand (halogen) and a residue (acceptor)"""

    type = InteractionType.HalogenBond
    prefix = "xb"

    @property
    def cutoff(self) -> float:
        return self.parameters.halogen_distance

    def matches(self, ligand_atom: "Atom", protein_atom: "Atom") -> bool:
        return ligand_atom.symbol in HALOGENS and protein_atom.symbol in ACCEPTORS


class Hydrophobic(PairDetector):
    """Hydrophobic contact between two carbon atoms

    Carbons bonded to polar atoms (e.g. carbonyls) are not excluded.
    """

    type = InteractionType.Hydrophobic
    prefix = "hp"

    @property
    def cutoff(self) -> float:
        return self.parameters.hydrophobic_distance

    def matches(self, ligand_atom: "Atom", protein_atom: "Atom") -> bool:
        return ligand_atom.symbol == "C" and protein_atom.symbol == "C"


class MetalCoordination(PairDetector):
    """Coordination of a metal, either in the ligand or in the protein"""

    type = InteractionType.MetalCoordination
    prefix = "mt"

    @property
    def cutoff(self) -> float:
        return self.parameters.metal_distance

    def matches(self, ligand_atom: "Atom", protein_atom: "Atom") -> bool:
        return ligand_atom.symbol in METALS or protein_atom.symbol in METALS
