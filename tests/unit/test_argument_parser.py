import pytest
from ctpl.PARSERS.argument_parser import ArgumentParser


def test_parse_pairs():
    args = ArgumentParser.parse_pairs(["NODES=a,b", " GAMEROOM_NAME = chess ", "KEY=x=y", "NODES=c"])
    assert args == {"NODES": "c", "GAMEROOM_NAME": "chess", "KEY": "x=y"}


def test_parse_pairs_rejects_malformed():
    with pytest.raises(ValueError):
        ArgumentParser.parse_pairs(["NODES"])
    with pytest.raises(ValueError):
        ArgumentParser.parse_pairs(["=value"])


def test_parse_file(tmp_path):
    args_file = tmp_path / "gameroom.env"
    args_file.write_text(
        "# gameroom arguments\n"
        "NODES=acme-node-000,bubba-node-000\n"
        "export GAMEROOM_NAME=\"tic tac toe\"\n"
        "SIGNER_PUB_KEY='02a0b1c2' # signer\n"
        "EMPTY_KEY\n"
    )
    args = ArgumentParser.parse_file(str(args_file))
    assert args == {
        "NODES": "acme-node-000,bubba-node-000",
        "GAMEROOM_NAME": "tic tac toe",
        "SIGNER_PUB_KEY": "02a0b1c2",
    }
