import argparse
import logging
import textwrap

from ligplot3d._version import __version__
from ligplot3d.analysis import InteractionAnalyzer
from ligplot3d.exports import count_by_type, to_csv, to_dataframe, to_json
from ligplot3d.io.readers import SUPPORTED_EXTENSIONS, read_structure
from ligplot3d.logger import set_log_level
from ligplot3d.parameters import Parameters
from ligplot3d.residue import ResidueId
from ligplot3d.utils import find_residue_by_name, list_ligand_candidates

logger = logging.getLogger("ligplot3d")


def parse_args(argv=None):
    description = (
        "ligplot3d: Protein-Ligand interactions from 3D coordinates\n"
        "Detects hydrogen and halogen bonds, salt bridges, pi-stacking, "
        "cation-pi,\nhydrophobic contacts and metal coordination between a "
        "ligand and its pocket."
    )
    epilog = f"Supported formats: {' '.join(SUPPORTED_EXTENSIONS)}"
    parser = argparse.ArgumentParser(
        prog="ligplot3d",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    group_input = parser.add_argument_group("INPUT arguments")
    group_input.add_argument(
        "structure", metavar="STRUCTURE", help="Path to the complex structure file."
    )
    group_ligand = group_input.add_mutually_exclusive_group()
    group_ligand.add_argument(
        "--ligand",
        metavar="NAME",
        help="Residue name of the ligand, e.g. ATP. Default: first ligand candidate",
    )
    group_ligand.add_argument(
        "--resid",
        metavar="RESID",
        help="Residue identifier of the ligand, in the format <name><number>.<chain>"
        "\ne.g. LIG1.A",
    )
    group_input.add_argument(
        "--list",
        action="store_true",
        help="List the ligand candidates and exit.",
    )
    group_input.add_argument(
        "--params",
        metavar="fileName",
        help="Path to a JSON file overriding the default thresholds.",
    )

    group_args = parser.add_argument_group("Other arguments")
    table = [
        ["", "Type", "Ligand", "Residue"],
        ["", "―" * 19, "―" * 15, "―" * 15],
        ["HydrogenBond", "Hydrogen Bond", "donor/acceptor", "acceptor/donor"],
        ["HalogenBond", "Halogen Bond", "halogen", "acceptor"],
        ["Anionic", "Salt Bridge", "anion", "cation"],
        ["Cationic", "Salt Bridge", "cation", "anion"],
        ["Hydrophobic", "Hydrophobic", "carbon", "carbon"],
        ["PiStacking", "Pi-Stacking", "aromatic", "aromatic"],
        ["PiCation", "Pi-Stacking", "aromatic", "cation"],
        ["CationPi", "Pi-Stacking", "cation", "aromatic"],
        ["MetalCoordination", "Metal Coordination", "metal/any", "any/metal"],
    ]
    table_as_str = "\n".join(
        "{:>17} │{:>19}{:>15}{:>15}".format(*line) for line in table
    )
    group_args.add_argument(
        "--interactions",
        metavar="NAME",
        nargs="+",
        choices=InteractionAnalyzer.list_available(),
        default="all",
        help=textwrap.dedent(
            """List of interactions to detect.
            {}\nDefault: all"""
        ).format(table_as_str),
    )

    group_output = parser.add_argument_group("OUTPUT arguments")
    group_output.add_argument(
        "--csv", metavar="fileName", help="Path to the output CSV file"
    )
    group_output.add_argument(
        "--json", metavar="fileName", help="Path to the output JSON file"
    )
    group_output.add_argument(
        "--log",
        metavar="level",
        help="Set the level of the logger. Default: INFO",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default="INFO",
    )
    group_output.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"ligplot3d {__version__}",
        help="Show version and exit",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    set_log_level(args.log)

    structure = read_structure(args.structure)
    candidates = list_ligand_candidates(structure)
    if args.list:
        for candidate in candidates:
            print(f"{candidate}\t{candidate.atom_count} atoms")
        return 0

    if args.resid:
        ligand = ResidueId.from_string(args.resid)
    elif args.ligand:
        ligand = find_residue_by_name(structure, args.ligand)
        if ligand is None:
            logger.error("No residue named %r in %s", args.ligand, args.structure)
            return 1
    elif candidates:
        ligand = candidates[0]
    else:
        logger.error("No ligand candidate found in %s", args.structure)
        return 1
    logger.info("Analyzing ligand %s", ligand)

    parameters = Parameters.from_json(args.params) if args.params else None
    analyzer = InteractionAnalyzer(args.interactions, parameters)
    result = analyzer.run(structure, ligand)

    df = to_dataframe(result.interactions)
    if df.empty:
        print("No interactions found")
    else:
        print(df.to_string(index=False, float_format="{:.2f}".format))
        counts = count_by_type(result.interactions)
        print(counts[counts > 0].to_string())

    if args.csv:
        logger.info("Writing CSV formatted output to %s", args.csv)
        to_csv(result.interactions, args.csv)
    if args.json:
        logger.info("Writing JSON formatted output to %s", args.json)
        to_json(result.interactions, args.json)
    return 0
