import json

import pandas as pd
import pytest

from ligplot3d._version import __version__
from ligplot3d.command_line import main, parse_args


def test_parse_args_defaults() -> None:
    args = parse_args(["complex.pdb"])
    assert args.structure == "complex.pdb"
    assert args.interactions == "all"
    assert args.ligand is None
    assert args.resid is None
    assert args.list is False
    assert args.log == "INFO"


def test_ligand_and_resid_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        parse_args(["complex.pdb", "--ligand", "LIG", "--resid", "LIG101.A"])


def test_invalid_interaction() -> None:
    with pytest.raises(SystemExit):
        parse_args(["complex.pdb", "--interactions", "Magic"])


def test_version(capsys) -> None:
    with pytest.raises(SystemExit):
        parse_args(["--version"])
    assert __version__ in capsys.readouterr().out


def test_list(pdb_file, capsys) -> None:
    assert main([str(pdb_file), "--list"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["LIG101.A\t2 atoms"]


def test_default_ligand(pdb_file, capsys) -> None:
    assert main([str(pdb_file)]) == 0
    out = capsys.readouterr().out
    assert "hb-0" in out
    assert "O:O1" in out
    assert "3.00" in out
    assert "Hydrophobic" in out


@pytest.mark.parametrize(
    "selection", [["--ligand", "lig"], ["--resid", "LIG101.A"]]
)
def test_ligand_selection(pdb_file, capsys, selection) -> None:
    assert main([str(pdb_file), *selection]) == 0
    assert "Hydrogen Bond" in capsys.readouterr().out


def test_unknown_ligand(pdb_file, caplog) -> None:
    assert main([str(pdb_file), "--ligand", "XYZ"]) == 1
    assert "No residue named 'XYZ'" in caplog.text


def test_no_candidate(pdb_file, tmp_path, caplog) -> None:
    lines = [
        line for line in pdb_file.read_text().splitlines() if line.startswith("ATOM")
    ]
    path = tmp_path / "protein.pdb"
    path.write_text("\n".join([*lines, "END", ""]))
    assert main([str(path)]) == 1
    assert "No ligand candidate found" in caplog.text


def test_no_interactions(pdb_file, capsys) -> None:
    assert main([str(pdb_file), "--interactions", "HalogenBond"]) == 0
    assert "No interactions found" in capsys.readouterr().out


def test_unknown_resid_has_no_interactions(pdb_file, capsys) -> None:
    assert main([str(pdb_file), "--resid", "LIG101.B"]) == 0
    assert "No interactions found" in capsys.readouterr().out


def test_outputs(pdb_file, tmp_path) -> None:
    csv_path = tmp_path / "out.csv"
    json_path = tmp_path / "out.json"
    code = main(
        [
            str(pdb_file),
            "--interactions",
            "HydrogenBond",
            "Hydrophobic",
            "--csv",
            str(csv_path),
            "--json",
            str(json_path),
            "--log",
            "WARNING",
        ]
    )
    assert code == 0
    df = pd.read_csv(csv_path)
    assert df["ID"].tolist() == ["hb-0", "hp-1"]
    assert df["Residue"].tolist() == ["ALA 1", "ALA 1"]
    data = json.loads(json_path.read_text())
    assert [d["type"] for d in data] == ["Hydrogen Bond", "Hydrophobic"]


def test_params(pdb_file, tmp_path) -> None:
    params = tmp_path / "params.json"
    params.write_text(json.dumps({"hydrophobic_distance": 3.5}))
    csv_path = tmp_path / "out.csv"
    assert main([str(pdb_file), "--params", str(params), "--csv", str(csv_path)]) == 0
    assert pd.read_csv(csv_path)["Type"].tolist() == ["Hydrogen Bond"]


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        main([str(tmp_path / "missing.pdb")])
