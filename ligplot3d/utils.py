"""
Helper functions --- :mod:`ligplot3d.utils`
===========================================
"""

import warnings
from contextlib import contextmanager
from typing import TYPE_CHECKING, Optional

from rdkit import rdBase

from ligplot3d.constants import COMMON_LIGANDS, IGNORED_RESIDUES
from ligplot3d.residue import ResidueOption

if TYPE_CHECKING:
    from ligplot3d.residue import Residue
    from ligplot3d.structure import Structure


@contextmanager
def catch_rdkit_logs():
    log_status = rdBase.LogStatus()
    rdBase.DisableLog("rdApp.*")
    try:
        yield
    finally:
        log_status = {
            st.split(":")[0]: st.split(":")[1] for st in log_status.split("\n")
        }
        log_status = {k: v == "enabled" for k, v in log_status.items()}
        for k, v in log_status.items():
            if v is True:
                rdBase.EnableLog(k)
            else:
                rdBase.DisableLog(k)


@contextmanager
def catch_warning(**kwargs):
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", **kwargs)
        yield


def _as_option(residue: "Residue") -> ResidueOption:
    resid = residue.resid
    return ResidueOption(resid.name, resid.number, resid.chain, len(residue))


def list_ligand_candidates(structure: "Structure") -> list[ResidueOption]:
    """Lists the residues that could be selected as a ligand

    A residue is a candidate if its name is a common ligand name (see
    :data:`~ligplot3d.constants.COMMON_LIGANDS`), or if it is a hetero residue
    that isn't a solvent, simple ion or common additive (see
    :data:`~ligplot3d.constants.IGNORED_RESIDUES`).

    Parameters
    ----------
    structure : ligplot3d.structure.Structure
        The structure containing the ligand

    Returns
    -------
    candidates : list
        A list of :class:`~ligplot3d.residue.ResidueOption`, one per chain and
        residue number. Common ligand names come first, then residues are sorted
        by decreasing number of atoms. Ties keep the structure traversal order.
    """
    candidates: dict[tuple[str, int], ResidueOption] = {}
    for residue in structure.residues.values():
        name = residue.resid.name.upper()
        is_common = name in COMMON_LIGANDS
        if is_common or (residue.is_hetero and name not in IGNORED_RESIDUES):
            key = (residue.resid.chain, residue.resid.number)
            if key not in candidates:
                candidates[key] = _as_option(residue)
    return sorted(
        candidates.values(),
        key=lambda res: (res.name.upper() not in COMMON_LIGANDS, -res.atom_count),
    )


def find_residue_by_name(structure: "Structure", name: str) -> Optional[ResidueOption]:
    """Finds a residue by its name

    Parameters
    ----------
    structure : ligplot3d.structure.Structure
        The structure to search
    name : str
        Residue name, case insensitive. Surrounding whitespace is ignored.

    Returns
    -------
    residue : ligplot3d.residue.ResidueOption or None
        The first residue with this name, following the structure traversal
        order (chain, then residue number), or ``None`` if there is no such
        residue.
    """
    query = name.strip().upper()
    for residue in structure.residues.values():
        if residue.resid.name.upper() == query:
            return _as_option(residue)
    return None
