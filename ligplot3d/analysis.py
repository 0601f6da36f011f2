"""
Detecting the interactions of a ligand --- :mod:`ligplot3d.analysis`
====================================================================

.. code-block:: python

    import ligplot3d
    structure = ligplot3d.read_structure("complex.pdb")
    ligand = ligplot3d.list_ligand_candidates(structure)[0]
    result = ligplot3d.analyze(structure, ligand)
    ligplot3d.to_dataframe(result.interactions)

The analysis of a ligand goes through the following steps:

1. the atoms of the ligand residue are separated from the protein atoms. Hetero
   atoms that don't belong to the ligand (waters, ions, other ligands) are
   ignored.
2. protein atoms further than the pocket radius from the ligand centroid are
   discarded.
3. rings are perceived on the ligand atoms.
4. each protein residue is compared with the ligand as a whole (pi-stacking,
   cation-pi and salt bridges).
5. each ligand atom is compared with the neighbouring protein atoms (hydrogen
   and halogen bonds, hydrophobic contacts, metal coordination).
6. a single interaction is kept for each pair of atoms, see
   :func:`~ligplot3d.interactions.base.deduplicate`.

"""

import logging
from itertools import count
from typing import NamedTuple, Optional

import numpy as np
from scipy.spatial import cKDTree

from ligplot3d.geometry import centroid, distance
from ligplot3d.interactions.base import (
    _DETECTORS,
    Interaction,
    LigandContext,
    PairDetector,
    ResidueDetector,
    deduplicate,
)
from ligplot3d.parameters import DEFAULT_PARAMETERS, Parameters
from ligplot3d.residue import Residue, ResidueId, ResidueOption
from ligplot3d.rings import find_rings
from ligplot3d.structure import Atom, Structure
from ligplot3d.typeshed import InteractionSelection, LigandSelector

logger = logging.getLogger(__name__)


class AnalysisResult(NamedTuple):
    """Interactions of a ligand, and the centroid of the ligand atoms"""

    interactions: tuple[Interaction, ...]
    ligand_center: np.ndarray


def _as_resid(ligand: LigandSelector) -> ResidueId:
    if isinstance(ligand, ResidueOption):
        return ligand.resid
    if isinstance(ligand, str):
        return ResidueId.from_string(ligand)
    return ligand


class InteractionAnalyzer:
    """Detects the interactions between a ligand and the rest of a structure

    Parameters
    ----------
    interactions : "all" or list
        Names of the detector classes to use, as found in the
        :mod:`ligplot3d.interactions` module. All of them by default.
    parameters : ligplot3d.parameters.Parameters, optional
        Thresholds shared by all detectors

    Attributes
    ----------
    detectors : dict
        Instances of the detectors used, indexed by class name
    parameters : ligplot3d.parameters.Parameters
        Thresholds used by the detectors

    Raises
    ------
    NameError
        Unknown detector in ``interactions``

    Notes
    -----
    The analyzer keeps no state between runs, so a single instance can be used
    on any number of structures and ligands.
    """

    def __init__(
        self,
        interactions: InteractionSelection = "all",
        parameters: Optional[Parameters] = None,
    ):
        self.parameters = parameters or DEFAULT_PARAMETERS
        if interactions == "all":
            interactions = self.list_available()
        self._check_valid_interactions(interactions)
        self.detectors = {
            name: detector_cls(self.parameters)
            for name, detector_cls in _DETECTORS.items()
            if name in interactions
        }

    def _check_valid_interactions(self, interactions):
        """Raises a NameError if an unknown detector is given."""
        unknown = set(interactions) - set(_DETECTORS)
        if unknown:
            raise NameError(
                f"Unknown interaction(s) in 'interactions': {', '.join(sorted(unknown))}"
            )

    def __repr__(self):  # pragma: no cover
        name = ".".join([self.__class__.__module__, self.__class__.__name__])
        params = f"{len(self.detectors)} interactions: {list(self.detectors)}"
        return f"<{name}: {params} at {id(self):#x}>"

    @staticmethod
    def list_available() -> list[str]:
        """Names of the available detectors, in the order they are applied"""
        return list(_DETECTORS)

    @property
    def residue_detectors(self) -> list[ResidueDetector]:
        return [d for d in self.detectors.values() if isinstance(d, ResidueDetector)]

    @property
    def pair_detectors(self) -> list[PairDetector]:
        return [d for d in self.detectors.values() if isinstance(d, PairDetector)]

    def run(self, structure: Structure, ligand: LigandSelector) -> AnalysisResult:
        """Detects the interactions of a ligand

        Parameters
        ----------
        structure : ligplot3d.structure.Structure
            The structure containing both the ligand and the protein
        ligand : ligplot3d.residue.ResidueId or ligplot3d.residue.ResidueOption or str
            The ligand residue. Atoms belong to the ligand if their residue
            name, number and chain are all equal to the ones of the ligand.

        Returns
        -------
        result : AnalysisResult
            The deduplicated interactions, in the order in which each pair of
            atoms was first detected, and the ligand centroid. If the ligand
            has no atoms, there are no interactions and the centroid is the
            origin.
        """
        resid = _as_resid(ligand)
        ligand_atoms, protein_atoms = self.partition(structure, resid)
        if not ligand_atoms:
            logger.info("No atoms found for ligand %s", resid)
            return AnalysisResult((), np.zeros(3))

        ligand_center = centroid([atom.xyz for atom in ligand_atoms])
        pocket = self.select_pocket(protein_atoms, ligand_center)
        rings = find_rings(ligand_atoms, self.parameters.ring_bond_length)
        logger.debug(
            "Ligand %s: %d atoms, %d ring(s), %d protein atoms in the pocket",
            resid,
            len(ligand_atoms),
            len(rings),
            len(pocket),
        )
        context = LigandContext(tuple(ligand_atoms), tuple(rings))

        counter = count()
        interactions = []
        for detector, contact in self._iter_contacts(context, pocket):
            interactions.append(
                Interaction(
                    id=f"{detector.prefix}-{next(counter)}",
                    type=detector.type,
                    distance=float(contact.distance),
                    ligand_atom=contact.ligand_atom,
                    protein_atom=contact.protein_atom,
                    angle=contact.angle,
                    ligand_point=contact.ligand_point,
                    protein_point=contact.protein_point,
                )
            )
        unique = deduplicate(interactions)
        logger.debug(
            "Found %d interaction(s), %d after removing duplicates",
            len(interactions),
            len(unique),
        )
        return AnalysisResult(tuple(unique), ligand_center)

    @staticmethod
    def partition(
        structure: Structure, resid: ResidueId
    ) -> tuple[list[Atom], list[Atom]]:
        """Splits the atoms of a structure between the ligand and the protein

        Atoms are compared through their :class:`~ligplot3d.residue.ResidueId`,
        so a residue without a name is found as ``UNK``. Hetero atoms that are
        not part of the ligand are in neither list.
        """
        ligand_atoms, protein_atoms = [], []
        for atom in structure.atoms:
            if atom.resid == resid:
                ligand_atoms.append(atom)
            elif not atom.is_hetero:
                protein_atoms.append(atom)
        return ligand_atoms, protein_atoms

    def select_pocket(
        self, protein_atoms: list[Atom], ligand_center: np.ndarray
    ) -> list[Atom]:
        """Protein atoms strictly closer than the pocket radius to the ligand
        centroid"""
        radius = self.parameters.pocket_radius
        return [
            atom for atom in protein_atoms if distance(atom.xyz, ligand_center) < radius
        ]

    def _iter_contacts(self, ligand: LigandContext, pocket: list[Atom]):
        residue_detectors = self.residue_detectors
        if residue_detectors:
            for residue in _group_residues(pocket):
                for detector in residue_detectors:
                    for contact in detector.detect(ligand, residue):
                        yield detector, contact

        pair_detectors = self.pair_detectors
        if pair_detectors and pocket:
            yield from self._iter_pair_contacts(ligand.atoms, pocket, pair_detectors)

    def _iter_pair_contacts(self, ligand_atoms, pocket, detectors):
        pocket_xyz = np.array([atom.xyz for atom in pocket], dtype=float)
        ligand_xyz = np.array([atom.xyz for atom in ligand_atoms], dtype=float)
        tree = cKDTree(pocket_xyz)
        neighbours = tree.query_ball_point(ligand_xyz, self.parameters.pair_cutoff)
        for lig_atom, indices in zip(ligand_atoms, neighbours):
            for i in sorted(indices):
                prot_atom = pocket[i]
                dist = distance(lig_atom.xyz, prot_atom.xyz)
                for detector in detectors:
                    for contact in detector.detect(lig_atom, prot_atom, dist):
                        yield detector, contact


def _group_residues(atoms: list[Atom]) -> list[Residue]:
    """Groups atoms by chain and residue number, in order of first appearance"""
    groups: dict[tuple[str, int], list[Atom]] = {}
    for atom in atoms:
        groups.setdefault((atom.chain, atom.resnumber), []).append(atom)
    return [Residue(group) for group in groups.values()]


def analyze(
    structure: Structure,
    ligand: LigandSelector,
    parameters: Optional[Parameters] = None,
    interactions: InteractionSelection = "all",
) -> AnalysisResult:
    """Detects the interactions between a ligand and the rest of a structure

    Shortcut for ``InteractionAnalyzer(interactions, parameters).run(structure,
    ligand)``, see :class:`InteractionAnalyzer` for the details.
    """
    return InteractionAnalyzer(interactions, parameters).run(structure, ligand)
