# ruff: noqa: F401
from ligplot3d.interactions.base import (
    Contact,
    Detector,
    Interaction,
    InteractionType,
    LigandContext,
    PairDetector,
    ResidueDetector,
    deduplicate,
)
from ligplot3d.interactions.interactions import (
    Anionic,
    CationPi,
    Cationic,
    HalogenBond,
    HydrogenBond,
    Hydrophobic,
    MetalCoordination,
    PiCation,
    PiStacking,
)
