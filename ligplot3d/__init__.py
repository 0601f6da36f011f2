from ligplot3d._version import __version__
from ligplot3d.analysis import AnalysisResult, InteractionAnalyzer, analyze
from ligplot3d.exports import (
    count_by_type,
    interacting_residues,
    sort_interactions,
    to_csv,
    to_dataframe,
    to_json,
)
from ligplot3d.interactions.base import Interaction, InteractionType
from ligplot3d.io.readers import read_structure
from ligplot3d.parameters import DEFAULT_PARAMETERS, Parameters
from ligplot3d.residue import ResidueId, ResidueOption
from ligplot3d.structure import Atom, Structure
from ligplot3d.utils import find_residue_by_name, list_ligand_candidates
