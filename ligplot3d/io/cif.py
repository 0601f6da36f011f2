"""
Reading mmCIF files --- :mod:`ligplot3d.io.cif`
===============================================

This module provides a lightweight parser for the Crystallographic Information
File (CIF) format, and the conversion of the ``_atom_site`` table of a
macromolecular CIF (mmCIF) file to a :class:`~ligplot3d.structure.Structure`.

Multi-line text fields (delimited by ``;``) are not supported, they only appear
in descriptive categories that are not needed here.
"""

import shlex
from pathlib import Path
from typing import Optional

import pandas as pd

from ligplot3d.structure import Atom, Structure
from ligplot3d.typeshed import PathLike

# values used by CIF files for unknown or inapplicable items
MISSING_VALUES = frozenset({".", "?"})


def _split_row(line: str) -> list[str]:
    # shlex respects quoted strings, quotes are kept in non-posix mode
    return [
        item[1:-1]
        if len(item) > 1 and item[0] == item[-1] and item[0] in "'\""
        else item
        for item in shlex.split(line, posix=False)
    ]


def _block_decompose(data_block: list[str]) -> tuple[list[str], list[list[str]]]:
    """
    Decomposes a CIF data block into descriptive information and tables.

    A table starts with ``loop_`` and ends with a ``#`` line, another
    ``loop_``, a new item once rows have been read, or the end of the block.
    """
    descriptions: list[str] = []
    data_tables: list[list[str]] = []
    data_table: Optional[list[str]] = None

    for block_line in data_block:
        if not block_line or block_line.startswith(";"):
            continue
        if block_line.startswith("#"):
            if data_table:
                data_tables.append(data_table)
            data_table = None
        elif block_line.startswith("loop_"):
            if data_table:
                data_tables.append(data_table)
            data_table = []
        elif data_table is not None:
            if (
                block_line.startswith("_")
                and data_table
                and not data_table[-1].startswith("_")
            ):
                # an item following the rows of a table
                data_tables.append(data_table)
                data_table = None
                descriptions.append(block_line)
            else:
                data_table.append(block_line)
        else:
            descriptions.append(block_line)

    if data_table:
        data_tables.append(data_table)
    return descriptions, data_tables


def cif_parser_lite(cif_string: str) -> dict:
    """
    Parses a CIF string and returns a dictionary of data blocks.

    Parameters
    ----------
    cif_string : str
        The CIF string to parse.

    Returns
    -------
    dict
        Mapping of block names to a dictionary of categories. Each category is
        either a dict of items (descriptive information), or a
        :class:`pandas.DataFrame` (``loop_`` tables) with one column per item.
    """
    # Split the CIF string into blocks based on 'data_' lines
    data_blocks: dict[str, list[str]] = {}
    current_block: Optional[list[str]] = None
    for line in cif_string.splitlines():
        if line.startswith("data_"):
            current_block = []
            data_blocks[line[len("data_") :].strip()] = current_block
        elif current_block is not None:
            current_block.append(line.strip())

    cif_dict: dict = {}
    for block_name, data_block in data_blocks.items():
        descriptions, data_tables = _block_decompose(data_block)
        cif_dict[block_name] = {"name": block_name}

        # descriptive information
        for each in descriptions:
            content = _split_row(each)
            if len(content) < 2 or "." not in content[0]:
                continue
            category, item = content[0].split(".", 1)
            cif_dict[block_name].setdefault(category, {})[item] = content[1]

        # data tables
        for data_table in data_tables:
            header = []
            values: list[str] = []
            table_name = data_table[0].split(".")[0]
            for each_line in data_table:
                if each_line.startswith("_"):
                    header.append(each_line.split(".", 1)[1].strip())
                else:
                    values.extend(_split_row(each_line))
            # rows may be wrapped on several lines
            n_cols = len(header)
            n_rows = len(values) // n_cols if n_cols else 0
            data = [values[i * n_cols : (i + 1) * n_cols] for i in range(n_rows)]
            table = pd.DataFrame(data, columns=header)
            cif_dict[block_name][table_name] = table

    return cif_dict


def cif_reader(cif_filepath: PathLike) -> dict:
    """
    Reads a CIF file and returns a dictionary of data blocks, see
    :func:`cif_parser_lite`.
    """
    cif_string = Path(cif_filepath).read_text()
    return cif_parser_lite(cif_string)


def _column(table: pd.DataFrame, *names: str, default: str = "") -> pd.Series:
    """First available column, preferring the author-defined fields. Missing
    values are replaced by ``default``"""
    for name in names:
        if name in table.columns:
            return table[name].mask(table[name].isin(MISSING_VALUES), default)
    return pd.Series([default] * len(table), index=table.index, dtype=object)


def structure_from_cif(cif_string: str) -> Structure:
    """Creates a Structure from the atoms of an mmCIF string

    Parameters
    ----------
    cif_string : str
        Content of an mmCIF file

    Returns
    -------
    structure : ligplot3d.structure.Structure
        The atoms of the first model of the first data block containing an
        ``_atom_site`` table. Author-defined residue names, numbers, chains
        and atom names are used when present.

    Raises
    ------
    ValueError
        No ``_atom_site`` table was found, or it has no coordinates
    """
    table = None
    for block in cif_parser_lite(cif_string).values():
        if isinstance(block.get("_atom_site"), pd.DataFrame):
            table = block["_atom_site"]
            break
    if table is None or table.empty:
        raise ValueError("No atoms found in the '_atom_site' table")
    if not {"Cartn_x", "Cartn_y", "Cartn_z"}.issubset(table.columns):
        raise ValueError("The '_atom_site' table has no cartesian coordinates")

    if "pdbx_PDB_model_num" in table.columns:
        first_model = table["pdbx_PDB_model_num"].iloc[0]
        table = table[table["pdbx_PDB_model_num"] == first_model]

    names = _column(table, "auth_atom_id", "label_atom_id")
    elements = _column(table, "type_symbol")
    resnames = _column(table, "auth_comp_id", "label_comp_id", default="UNK")
    resnumbers = pd.to_numeric(
        _column(table, "auth_seq_id", "label_seq_id", default="0"), errors="coerce"
    ).fillna(0)
    chains = _column(table, "auth_asym_id", "label_asym_id")
    records = _column(table, "group_PDB", default="ATOM")
    xyz = table[["Cartn_x", "Cartn_y", "Cartn_z"]].astype(float).to_numpy()

    atoms = [
        Atom(
            index=i,
            name=name,
            element=element,
            x=float(x),
            y=float(y),
            z=float(z),
            resname=resname,
            resnumber=int(resnumber),
            chain=chain,
            is_hetero=record == "HETATM",
        )
        for i, (name, element, resname, resnumber, chain, record, (x, y, z)) in enumerate(
            zip(names, elements, resnames, resnumbers, chains, records, xyz)
        )
    ]
    return Structure(atoms)
