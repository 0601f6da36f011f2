# ruff: noqa: F401
from ligplot3d.io.cif import cif_parser_lite, cif_reader, structure_from_cif
from ligplot3d.io.readers import SUPPORTED_EXTENSIONS, read_structure
