import logging

from id3py import CAR_ATTRIBUTES
from id3py.cli import main

CAR_DATA = """vhigh,vhigh,2,2,small,low,unacc
vhigh,vhigh,2,4,small,high,unacc
low,low,4,4,big,high,vgood
low,med,4,4,med,high,good
med,low,2,4,big,med,acc
low,low,2,2,big,high,unacc
high,med,4,more,med,med,acc
med,med,4,4,small,low,unacc
"""


def test_cli_prints_tree(tmp_path, capsys):
    path = tmp_path / "car.data"
    path.write_text(CAR_DATA)
    assert main([str(path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] in CAR_ATTRIBUTES
    assert lines[1].startswith(f" | {lines[0]} = ")
    assert lines[1].endswith(" --> ")


def test_cli_rules(tmp_path, capsys):
    path = tmp_path / "car.data"
    path.write_text(CAR_DATA)
    assert main([str(path), "--rules"]) == 0
    out = capsys.readouterr().out
    assert "=>" in out


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.data")]) == 1
    assert capsys.readouterr().out == ""


def test_cli_malformed_file(tmp_path):
    path = tmp_path / "bad.data"
    path.write_text("low,low,acc\n")
    assert main([str(path)]) == 1


def test_cli_custom_schema(tmp_path, capsys):
    path = tmp_path / "tennis.data"
    path.write_text("sunny,no\nsunny,no\nrain,yes\n")
    assert main([str(path), "--attributes", "outlook", "--label-name", "play"]) == 0
    assert capsys.readouterr().out == (
        "outlook\n"
        " | outlook = sunny --> \n"
        "\tno\n"
        " | outlook = rain --> \n"
        "\tyes\n"
    )


def test_cli_undecodable_file(tmp_path, capsys):
    path = tmp_path / "latin.data"
    path.write_bytes(b"low,low,2,2,small,high,\xff\xfeacc\n")
    assert main([str(path)]) == 1
    assert capsys.readouterr().out == ""


def _id3_records(caplog, level):
    return [r for r in caplog.records if r.name.startswith("id3py") and r.levelno == level]


def test_cli_verbosity_sets_log_level(tmp_path, capsys, caplog, id3_logger):
    path = tmp_path / "car.data"
    path.write_text(CAR_DATA)

    assert main([str(path)]) == 0
    assert id3_logger.level == logging.WARNING
    assert not _id3_records(caplog, logging.INFO)

    caplog.clear()
    assert main([str(path), "-v"]) == 0
    assert id3_logger.level == logging.INFO
    assert any("Loaded 8 records" in r.getMessage() for r in _id3_records(caplog, logging.INFO))
    assert not _id3_records(caplog, logging.DEBUG)

    caplog.clear()
    assert main([str(path), "-vv"]) == 0
    assert id3_logger.level == logging.DEBUG
    assert any(r.getMessage().startswith("split on") for r in _id3_records(caplog, logging.DEBUG))

    # the tree itself only ever goes to stdout
    out = capsys.readouterr().out
    assert out.count(" --> ") > 0
    assert all(" --> " not in r.getMessage() for r in caplog.records)
