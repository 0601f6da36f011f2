"""
Geometric thresholds --- :mod:`ligplot3d.parameters`
====================================================

Distances are in Angstroms and angles in degrees. Default values are mostly
adapted from PLIP (Salentin et al.; NAR 2015, doi: 10.1093/nar/gkv315) with heavy
atom distances instead of explicit hydrogens. For halogen bonds, see Auffinger et
al.; PNAS 2004 (doi: 10.1073/pnas.0407607101).
"""

import json
import warnings
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

from ligplot3d.typeshed import Angles, PathLike


@dataclass(frozen=True)
class Parameters:
    """Thresholds used by the interaction detectors

    Raising the value of a cutoff makes the detection of that category of
    interaction more permissive, it has no effect on the other categories.

    Parameters
    ----------
    hbond_distance : float
        Donor...acceptor heavy atom distance
    salt_bridge_distance : float
        Charge center to charged ligand atom distance (exclusive)
    hydrophobic_distance : float
        Carbon...carbon distance
    pi_stacking_distance : float
        Ring centroid to ring centroid distance
    pi_stacking_parallel_angle : float
        Max deviation of the ring planes from parallel
    pi_stacking_tshaped_angle : tuple
        Min and max angles between the ring planes for a T-shaped stacking
    pi_cation_distance : float
        Ring centroid to cation distance (exclusive)
    halogen_distance : float
        Halogen...acceptor distance
    metal_distance : float
        Metal...ligand atom distance
    pocket_radius : float
        Only protein atoms closer than this to the ligand centroid are
        considered. Must be larger than every other cutoff.
    ring_bond_length : float
        Two ligand atoms closer than this are considered bonded during ring
        perception

    Raises
    ------
    ValueError
        A distance or angle is negative, or the T-shaped range is inverted
    """

    hbond_distance: float = 3.5
    salt_bridge_distance: float = 4.0
    hydrophobic_distance: float = 4.5
    pi_stacking_distance: float = 5.5
    pi_stacking_parallel_angle: float = 30.0
    pi_stacking_tshaped_angle: Angles = (60.0, 120.0)
    pi_cation_distance: float = 5.0
    halogen_distance: float = 3.5
    metal_distance: float = 2.8
    pocket_radius: float = 18.0
    ring_bond_length: float = 1.65

    def __post_init__(self) -> None:
        tshaped = tuple(float(a) for a in self.pi_stacking_tshaped_angle)
        if len(tshaped) != 2 or tshaped[0] > tshaped[1]:
            raise ValueError(
                "pi_stacking_tshaped_angle must be a (min, max) pair, got "
                f"{self.pi_stacking_tshaped_angle!r}"
            )
        # lists coming from JSON files
        object.__setattr__(self, "pi_stacking_tshaped_angle", tshaped)
        for field in fields(self):
            if field.name == "pi_stacking_tshaped_angle":
                continue
            if getattr(self, field.name) < 0:
                raise ValueError(f"{field.name} must be positive")
        if self.pocket_radius <= self.max_cutoff:
            warnings.warn(
                f"The pocket radius ({self.pocket_radius}) is not larger than the "
                f"largest interaction cutoff ({self.max_cutoff}), some interactions "
                "might be missed."
            )

    @property
    def pair_cutoff(self) -> float:
        """Largest cutoff used by atom-pair interactions"""
        return max(
            self.hbond_distance,
            self.hydrophobic_distance,
            self.halogen_distance,
            self.metal_distance,
        )

    @property
    def max_cutoff(self) -> float:
        """Largest cutoff of any interaction"""
        return max(
            self.pair_cutoff,
            self.salt_bridge_distance,
            self.pi_stacking_distance,
            self.pi_cation_distance,
        )

    def replace(self, **overrides: Any) -> "Parameters":
        """Returns a copy with some of the thresholds replaced"""
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown parameter(s): {', '.join(sorted(unknown))}")
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Parameters":
        return cls().replace(**data)

    @classmethod
    def from_json(cls, path: PathLike) -> "Parameters":
        """Reads thresholds from a JSON file containing a single object, missing
        keys keep their default value"""
        data = json.loads(Path(path).read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {str(path)!r}")
        return cls.from_dict(data)


DEFAULT_PARAMETERS = Parameters()
