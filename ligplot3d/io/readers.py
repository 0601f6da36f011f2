"""
Reading structure files --- :mod:`ligplot3d.io.readers`
=======================================================

.. code-block:: python

    import ligplot3d
    structure = ligplot3d.read_structure("1abc.cif")

The format is deduced from the file extension:

=================  ================================================
Extension          Reader
=================  ================================================
.pdb .ent .mol2    MDAnalysis
.sdf .mol          RDKit, first molecule only
.cif .mmcif        :func:`~ligplot3d.io.cif.structure_from_cif`
=================  ================================================

Files with several models or frames are read at their first model.
"""

import logging
import re
from pathlib import Path

import MDAnalysis as mda
from rdkit import Chem

from ligplot3d.constants import STANDARD_RESIDUES
from ligplot3d.io.cif import structure_from_cif
from ligplot3d.structure import Structure
from ligplot3d.typeshed import PathLike
from ligplot3d.utils import catch_rdkit_logs, catch_warning

logger = logging.getLogger(__name__)

MDA_FORMATS = {".pdb": "PDB", ".ent": "PDB", ".mol2": "MOL2"}
RDKIT_FORMATS = {".sdf": "SDF", ".mol": "MOL"}
CIF_FORMATS = {".cif": "mmCIF", ".mmcif": "mmCIF"}
SUPPORTED_EXTENSIONS = (*MDA_FORMATS, *RDKIT_FORMATS, *CIF_FORMATS)
# residue name followed by a number, e.g. ALA12
_RE_NUMBERED_RESNAME = re.compile(r"([A-Za-z]+)(\d+)")


def _mol2_resname(subst_name: str, resid: int) -> str:
    """Residue name without the residue number that MOL2 writers append to the
    substructure name (``ALA12`` for residue 12 of ALA)"""
    number = str(resid)
    prefix = subst_name[: -len(number)]
    if subst_name.endswith(number) and any(char.isalpha() for char in prefix):
        return prefix
    match = _RE_NUMBERED_RESNAME.fullmatch(subst_name)
    if match and match.group(1) in STANDARD_RESIDUES:
        return match.group(1)
    return subst_name


def read_mda(path: PathLike, fmt: str) -> Structure:
    with catch_warning(
        message=r"^(Failed to guess the mass)|(Element information is missing)|"
        r"(Unit cell dimensions not found)|(Found no information)"
    ):
        u = mda.Universe(str(path), format=fmt)
    if fmt == "MOL2":
        u.residues.resnames = [
            _mol2_resname(res.resname, res.resid) for res in u.residues
        ]
    return Structure.from_mda(u)


def read_rdkit(path: PathLike, fmt: str) -> Structure:
    """Reads the first molecule of an SDF or MOL file, without sanitization so
    that unusual valences don't prevent reading the coordinates"""
    with catch_rdkit_logs():
        if fmt == "SDF":
            try:
                suppl = Chem.SDMolSupplier(
                    str(path), removeHs=False, sanitize=False
                )
            except OSError as exc:
                raise ValueError(
                    f"Could not read a molecule from {str(path)!r}"
                ) from exc
            mol = next(iter(suppl), None)
        else:
            mol = Chem.MolFromMolFile(str(path), removeHs=False, sanitize=False)
    if mol is None:
        raise ValueError(f"Could not read a molecule from {str(path)!r}")
    return Structure.from_rdkit(mol)


def read_structure(path: PathLike) -> Structure:
    """Reads a structure file

    Parameters
    ----------
    path : str or pathlib.Path
        Path to a PDB, mmCIF, MOL2, SDF or MOL file

    Returns
    -------
    structure : ligplot3d.structure.Structure

    Raises
    ------
    FileNotFoundError
        The file doesn't exist
    ValueError
        The extension isn't supported, or no atom could be read
    """
    path = Path(path)
    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValueError(
            f"Unsupported file format {ext or path.name!r}, expected one of "
            f"{', '.join(SUPPORTED_EXTENSIONS)}"
        )
    if not path.is_file():
        raise FileNotFoundError(f"No such file: {str(path)!r}")

    if ext in MDA_FORMATS:
        fmt = MDA_FORMATS[ext]
        structure = read_mda(path, fmt)
    elif ext in RDKIT_FORMATS:
        fmt = RDKIT_FORMATS[ext]
        structure = read_rdkit(path, fmt)
    else:
        fmt = CIF_FORMATS[ext]
        structure = structure_from_cif(path.read_text())
    if len(structure) == 0:
        raise ValueError(f"No atoms found in {str(path)!r}")
    logger.info(
        "Read %s file %s: %d atoms in %d residues",
        fmt,
        path.name,
        len(structure),
        structure.n_residues,
    )
    return structure
