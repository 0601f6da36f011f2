"""
Exporting interactions --- :mod:`ligplot3d.exports`
===================================================

.. code-block:: python

    result = ligplot3d.analyze(structure, "LIG1.A")
    df = ligplot3d.to_dataframe(result.interactions)
    ligplot3d.to_csv(result.interactions, "interactions.csv")
    ligplot3d.to_json(result.interactions, "interactions.json")

"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

import pandas as pd

from ligplot3d.interactions.base import Interaction, InteractionType
from ligplot3d.residue import ResidueId
from ligplot3d.typeshed import PathLike

COLUMNS = ["ID", "Type", "Distance(Å)", "Ligand Atom", "Protein Atom", "Residue"]


def sort_interactions(interactions: Iterable[Interaction]) -> list[Interaction]:
    """Sorts interactions by type name, then by increasing distance"""
    return sorted(interactions, key=lambda i: (i.type.value, i.distance))


def _format_atom(atom) -> str:
    return f"{atom.element}:{atom.name}"


def to_dataframe(interactions: Iterable[Interaction]) -> pd.DataFrame:
    """Converts interactions to a pandas DataFrame

    Parameters
    ----------
    interactions : list
        A list of :class:`~ligplot3d.interactions.base.Interaction`

    Returns
    -------
    df : pandas.DataFrame
        One row per interaction, sorted with :func:`sort_interactions`. Atoms
        are written as ``<element>:<name>`` and the residue as
        ``<resname> <resnumber>``.

    Example
    -------
    ::

        >>> df = ligplot3d.to_dataframe(result.interactions)
        >>> print(df)
             ID           Type  Distance(Å) Ligand Atom Protein Atom  Residue
        0  hb-7  Hydrogen Bond     2.871934        O:O1      N:NH1   ARG 42
        1  hp-9    Hydrophobic     3.612010        C:C4       C:CB   ALA 45
        ...

    """
    rows = [
        (
            i.id,
            i.type.value,
            i.distance,
            _format_atom(i.ligand_atom),
            _format_atom(i.protein_atom),
            f"{i.protein_atom.resname} {i.protein_atom.resnumber}",
        )
        for i in sort_interactions(interactions)
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def to_csv(
    interactions: Iterable[Interaction], path: Optional[PathLike] = None
) -> Optional[str]:
    """Writes the table of :func:`to_dataframe` as CSV, with distances rounded
    to 2 decimals. Returns the CSV text if no ``path`` is given."""
    df = to_dataframe(interactions)
    return df.to_csv(path, index=False, float_format="%.2f")


def to_json(
    interactions: Iterable[Interaction], path: Optional[PathLike] = None
) -> Optional[str]:
    """Writes interactions as a JSON array, in the order given

    Each interaction is an object with the ``id``, ``type``, ``distance``,
    ``angle`` (pi-stacking only) and the full ``ligand_atom`` and
    ``protein_atom`` records. Returns the JSON text if no ``path`` is given.
    """
    text = json.dumps([i.to_dict() for i in interactions], indent=2)
    if path is None:
        return text
    Path(path).write_text(text)
    return None


def count_by_type(interactions: Iterable[Interaction]) -> pd.Series:
    """Number of interactions per type, for every type

    Returns
    -------
    counts : pandas.Series
        Counts indexed by the type names, in the order of
        :class:`~ligplot3d.interactions.base.InteractionType`
    """
    types = [i.type.value for i in interactions]
    counts = pd.Series(types, dtype=object).value_counts()
    index = [t.value for t in InteractionType]
    return counts.reindex(index, fill_value=0).astype(int).rename("count")


def interacting_residues(interactions: Iterable[Interaction]) -> list[ResidueId]:
    """Sorted unique protein residues involved in the interactions"""
    return sorted({i.protein_atom.resid for i in interactions})
