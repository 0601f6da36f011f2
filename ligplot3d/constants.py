"""
Chemical lookup tables --- :mod:`ligplot3d.constants`
=====================================================

Read-only tables used to classify residues and atoms. Residue and atom names
follow the PDB conventions, elements are uppercase symbols.
"""

from types import MappingProxyType

# Side chain atoms of aromatic residues, used to compute the ring centroid and
# plane normal
AROMATIC_PLANES = MappingProxyType(
    {
        "PHE": ("CG", "CD1", "CD2", "CE1", "CE2", "CZ"),
        "TYR": ("CG", "CD1", "CD2", "CE1", "CE2", "CZ"),
        "TRP": ("CG", "CD1", "CD2", "NE1", "CE2", "CE3", "CZ2", "CZ3", "CH2"),
        "HIS": ("CG", "ND1", "CD2", "CE1", "NE2"),
    }
)

# Atoms whose centroid is used as the charge center of charged side chains
POSITIVE_CHARGE_ATOMS = MappingProxyType(
    {
        "ARG": ("NH1", "NH2", "CZ"),  # guanidinium
        "LYS": ("NZ",),
        "HIS": ("ND1", "NE2"),
    }
)
NEGATIVE_CHARGE_ATOMS = MappingProxyType(
    {
        "ASP": ("OD1", "OD2"),
        "GLU": ("OE1", "OE2"),
    }
)

# Heavy-atom-only roles, no hydrogen is required
DONORS = frozenset({"N", "O", "S"})
ACCEPTORS = frozenset({"N", "O", "S"})
# F has a weak sigma-hole and rarely forms halogen bonds
HALOGENS = frozenset({"CL", "BR", "I"})
METALS = frozenset({"ZN", "MG", "FE", "CU", "CA", "NA", "K", "MN", "CO", "NI"})
# phosphates, sulfates and carboxylates
ANION_ELEMENTS = frozenset({"O", "S", "P"})
CATION_ELEMENTS = frozenset({"N"})
# amine/guanidine fragment in ligand atom names
CATION_NAME_MARKER = "NH"

# Residue names that are always proposed as ligands, even when written as ATOM
# records (generic ligand names, glycans, lipids, cofactors)
COMMON_LIGANDS = frozenset(
    {
        # generic
        "LIG", "UNK", "DRG", "INH", "001", "1",
        # carbohydrates
        "NAG", "NDG", "MAN", "BMA", "GAL", "GLC", "FUC", "SIA", "BGC",
        "BGLC", "BGLCC", "AGLC", "AGLCA",
        "GLA", "GUP", "XYL", "RIB", "ARA",
        # lipids and fatty acids
        "PLM", "OLA", "MYR", "STE",
        # cofactors
        "ATP", "ADP", "AMP", "GTP", "GDP", "NAD", "NADP", "FAD", "FMN", "HEM", "HEC",
    }
)  # fmt: skip

# Solvent, simple ions and crystallization additives never proposed as ligands
IGNORED_RESIDUES = frozenset(
    {
        "HOH", "DOD", "TIP", "WAT", "SOL",
        "NA", "CL", "K", "MG", "ZN", "CA", "MN",
        "SO4", "PO4",
    }
)  # fmt: skip

# Polymer residues, used to guess the hetero flag for formats that don't have
# ATOM/HETATM records
STANDARD_RESIDUES = frozenset(
    {
        "ALA", "ARG", "ASN", "ASP", "CYS", "GLN", "GLU", "GLY", "HIS", "ILE",
        "LEU", "LYS", "MET", "PHE", "PRO", "SER", "THR", "TRP", "TYR", "VAL",
        "SEC", "PYL", "ASH", "GLH", "HID", "HIE", "HIP", "CYX", "LYN",
        "A", "C", "G", "U", "I", "DA", "DC", "DG", "DT", "DI",
    }
)  # fmt: skip
