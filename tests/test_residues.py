import numpy as np
import pytest
from numpy.testing import assert_array_almost_equal

from ligplot3d.residue import Residue, ResidueGroup, ResidueId, ResidueOption


class TestResidueId:
    @pytest.mark.parametrize(
        ("name", "number", "chain"),
        [
            ("ALA", None, None),
            ("ALA", 1, None),
            ("ALA", 0, None),
            ("ALA", None, "B"),
            ("ALA", 1, "B"),
            (None, 1, "B"),
            (None, None, "B"),
            (None, 1, None),
            (None, None, None),
            ("", None, None),
            (None, None, ""),
            ("", None, ""),
        ],
    )
    def test_init(
        self, name: str | None, number: int | None, chain: str | None
    ) -> None:
        resid = ResidueId(name, number, chain)
        assert resid.name == (name or "UNK")
        assert resid.number == (number or 0)
        assert resid.chain == (chain or "")

    def test_from_atom(self, builder) -> None:
        atom = builder.add("CA", "C", (0, 0, 0), "TYR", 38, "B")
        assert ResidueId.from_atom(atom) == ResidueId("TYR", 38, "B")

    @pytest.mark.parametrize(
        ("resid_str", "expected"),
        [
            ("ALA", ("ALA", 0, "")),
            ("ALA1", ("ALA", 1, "")),
            ("ALA-1", ("ALA", -1, "")),
            ("ALA1.B", ("ALA", 1, "B")),
            ("ALA.B", ("ALA", 0, "B")),
            ("1.B", ("UNK", 1, "B")),
            ("LIG101.A", ("LIG", 101, "A")),
            ("DA2.A", ("DA", 2, "A")),
            (" GLU33 ", ("GLU", 33, "")),
            ("001:1.A", ("001", 1, "A")),
            ("lig:7", ("lig", 7, "")),
            ("BGLCC:-2.B", ("BGLCC", -2, "B")),
            ("", ("UNK", 0, "")),
        ],
    )
    def test_from_string(self, resid_str: str, expected: tuple) -> None:
        resid = ResidueId.from_string(resid_str)
        assert resid == ResidueId(*expected)

    @pytest.mark.parametrize(
        ("resid", "expected"),
        [
            (ResidueId("ALA", 1, "A"), "ALA1.A"),
            (ResidueId("ALA", 1), "ALA1"),
            (ResidueId(), "UNK0"),
            (ResidueId("001", 1, "A"), "001:1.A"),
            (ResidueId("lig", 7), "lig:7"),
            (ResidueId("BGLCC", 3, "B"), "BGLCC:3.B"),
        ],
    )
    def test_str(self, resid: ResidueId, expected: str) -> None:
        assert str(resid) == expected

    @pytest.mark.parametrize(
        ("other", "expected"),
        [
            (ResidueId("ALA", 1, "A"), True),
            (ResidueId("ALA", 1, "B"), False),
            (ResidueId("ALA", 2, "A"), False),
            (ResidueId("GLY", 1, "A"), False),
        ],
    )
    def test_eq(self, other: ResidueId, expected: bool) -> None:
        resid = ResidueId("ALA", 1, "A")
        assert (resid == other) is expected
        assert (hash(resid) == hash(other)) is expected

    def test_eq_other_type(self) -> None:
        assert ResidueId("ALA", 1, "A") != "ALA1.A"

    def test_sort(self) -> None:
        resids = [
            ResidueId("GLU", 3, "B"),
            ResidueId("ALA", 10, "A"),
            ResidueId("TYR", 2, "A"),
            ResidueId("LIG", 1, ""),
        ]
        assert sorted(resids) == [
            ResidueId("LIG", 1, ""),
            ResidueId("TYR", 2, "A"),
            ResidueId("ALA", 10, "A"),
            ResidueId("GLU", 3, "B"),
        ]


def test_residue_option() -> None:
    option = ResidueOption("ATP", 500, "A", 31)
    assert option.resid == ResidueId("ATP", 500, "A")
    assert str(option) == "ATP500.A"


class TestResidue:
    def test_empty(self) -> None:
        with pytest.raises(ValueError, match="at least one atom"):
            Residue([])

    def test_attributes(self, builder) -> None:
        atoms = builder.add_residue(
            "SER", 7, [("N", "N", (0, 0, 0)), ("OG", "O", (1, 1, 1))], chain="C"
        )
        residue = Residue(atoms)
        assert residue.resid == ResidueId("SER", 7, "C")
        assert len(residue) == 2
        assert residue.is_hetero is False
        assert residue.select_atoms(["OG", "CB"]) == (atoms[1],)
        assert residue.aromatic_ring is None
        assert residue.positive_center is None
        assert residue.negative_center is None

    def test_aromatic_ring(self, builder, phe_atoms) -> None:
        atoms = builder.add_residue("PHE", 12, [("CB", "C", (0, 0, 6)), *phe_atoms()])
        ring = Residue(atoms).aromatic_ring
        assert ring is not None
        assert [atom.name for atom in ring.atoms] == [
            "CG",
            "CD1",
            "CD2",
            "CE1",
            "CE2",
            "CZ",
        ]
        assert_array_almost_equal(ring.centroid, (0, 0, 3.8))
        assert_array_almost_equal(np.abs(ring.normal), (0, 0, 1))

    def test_aromatic_ring_incomplete(self, builder, phe_atoms) -> None:
        atoms = builder.add_residue("PHE", 12, phe_atoms()[:2])
        assert Residue(atoms).aromatic_ring is None

    def test_positive_center(self, builder) -> None:
        atoms = builder.add_residue(
            "ARG",
            5,
            [
                ("NE", "N", (0, -1.2, 0)),
                ("CZ", "C", (0, 0, 0)),
                ("NH1", "N", (1.2, 0.7, 0)),
                ("NH2", "N", (-1.2, 0.7, 0)),
            ],
        )
        center = Residue(atoms).positive_center
        assert center is not None
        assert_array_almost_equal(center.center, (0, 1.4 / 3, 0))
        assert center.atom.name == "CZ"

    def test_negative_center(self, builder) -> None:
        atoms = builder.add_residue(
            "GLU", 9, [("OE1", "O", (1, 0, 0)), ("OE2", "O", (-1, 0, 0))]
        )
        center = Residue(atoms).negative_center
        assert_array_almost_equal(center.center, (0, 0, 0))
        assert center.atom.name == "OE1"


class TestResidueGroup:
    @pytest.fixture
    def residues(self, builder) -> list[Residue]:
        return [
            Residue(builder.add_residue("ALA", 1, [("CA", "C", (0, 0, 0))])),
            Residue(builder.add_residue("TYR", 2, [("CA", "C", (0, 0, 4))])),
            Residue(builder.add_residue("ASP", 1, [("CA", "C", (0, 4, 0))], "B")),
        ]

    @pytest.fixture
    def rg(self, residues) -> ResidueGroup:
        return ResidueGroup(residues)

    def test_init(self, rg: ResidueGroup, residues) -> None:
        assert len(rg) == 3
        assert list(rg) == [r.resid for r in residues]
        assert list(rg.values()) == residues

    def test_init_empty(self) -> None:
        rg = ResidueGroup([])
        assert len(rg) == 0
        with pytest.raises(IndexError):
            rg[0]

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            (0, "ALA1.A"),
            (-1, "ASP1.B"),
            ("TYR2.A", "TYR2.A"),
            (ResidueId("ASP", 1, "B"), "ASP1.B"),
        ],
    )
    def test_getitem(self, rg: ResidueGroup, key, expected: str) -> None:
        assert str(rg[key].resid) == expected

    @pytest.mark.parametrize("key", [True, 1.0, None, ("ALA", 1)])
    def test_getitem_wrong_type(self, rg: ResidueGroup, key) -> None:
        with pytest.raises(KeyError, match="Expected a ResidueId, int, or str"):
            rg[key]

    def test_getitem_missing(self, rg: ResidueGroup) -> None:
        with pytest.raises(KeyError):
            rg["ALA1.B"]

    def test_contains(self, rg: ResidueGroup) -> None:
        assert ResidueId("TYR", 2, "A") in rg
        assert ResidueId("TYR", 2, "B") not in rg
