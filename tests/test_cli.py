"""Tests for the command-line interface"""

import json

import pytest

from phraselink import cli


@pytest.fixture
def paths_args(document_paths):
    phrases_path, lookup_path = document_paths
    return ["--phrases", str(phrases_path), "--lookup", str(lookup_path)]


def test_build_prints_lookup_document(paths_args, capsys, sample_lookup_data):
    assert cli.main(["--build"] + paths_args) == 0
    out = capsys.readouterr().out
    assert json.loads(out) == sample_lookup_data


def test_build_yaml(paths_args, capsys, sample_lookup_data):
    import yaml

    assert cli.main(["--build", "--format", "yaml"] + paths_args) == 0
    assert yaml.safe_load(capsys.readouterr().out) == sample_lookup_data


def test_build_does_not_need_lookup_document(document_paths, tmp_path, capsys):
    phrases_path, _ = document_paths
    args = ["--build", "--phrases", str(phrases_path), "--lookup", str(tmp_path / "missing.json")]
    assert cli.main(args) == 0


def test_match_json(paths_args, capsys):
    assert cli.main(["--match", "The insurer's E&O policy", "--json"] + paths_args) == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload["normalized"] == "the insurers E&O policy"
    assert [m["lookup"]["index"] for m in payload["matches"]] == [0, 4]
    assert payload["matches"][0]["locations"] == [{"index": 13, "span": 3}]


def test_match_table(paths_args, capsys):
    assert cli.main(["--match", "deductible"] + paths_args) == 0
    assert "Deductible" in capsys.readouterr().out


def test_match_nothing(paths_args, capsys):
    assert cli.main(["--match", "weather report"] + paths_args) == 0
    assert "No cataloged phrases found" in capsys.readouterr().out


def test_show(paths_args, capsys):
    assert cli.main(["--show", "3"] + paths_args) == 0
    out = capsys.readouterr().out
    assert "Deductible" in out
    assert "Insurer" in out


def test_show_out_of_range(paths_args):
    assert cli.main(["--show", "99"] + paths_args) == 1


def test_seed(paths_args, capsys):
    assert cli.main(["--seed"] + paths_args) == 0
    assert "Professional Liability" in capsys.readouterr().out


def test_stats(paths_args, capsys):
    assert cli.main(["--stats"] + paths_args) == 0
    assert "Total Phrases" in capsys.readouterr().out


def test_missing_lookup_document(document_paths, tmp_path):
    phrases_path, _ = document_paths
    args = ["--stats", "--phrases", str(phrases_path), "--lookup", str(tmp_path / "missing.json")]
    assert cli.main(args) == 1


def test_misaligned_documents(document_paths, tmp_path, sample_lookup_data):
    phrases_path, _ = document_paths
    short_lookup = tmp_path / "short.json"
    short_lookup.write_text(json.dumps(sample_lookup_data[:2]), encoding="utf-8")

    assert cli.main(["--stats", "--phrases", str(phrases_path), "--lookup", str(short_lookup)]) == 1


def test_config_file(document_paths, tmp_path, capsys, sample_lookup_data):
    phrases_path, lookup_path = document_paths
    config_path = tmp_path / "phraselink.yaml"
    config_path.write_text(
        f"data:\n  phrases_path: {phrases_path}\n  lookup_path: {lookup_path}\n",
        encoding="utf-8"
    )

    assert cli.main(["--build", "--config", str(config_path)]) == 0
    assert json.loads(capsys.readouterr().out) == sample_lookup_data


def test_actions_are_exclusive(paths_args):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--build", "--seed"] + paths_args)
    assert exc.value.code == 2


class TestInteractiveCommands:
    @pytest.fixture
    def interactive(self, document_paths):
        phrases_path, lookup_path = document_paths
        config = cli.load_config(cli.build_parser().parse_args(
            ["--phrases", str(phrases_path), "--lookup", str(lookup_path)]
        ))
        return cli.PhraseLinkCLI(config)

    def test_exit(self, interactive):
        assert interactive._handle_command("/exit") is False

    def test_find(self, interactive, capsys):
        assert interactive._handle_command("/find deductible") is True
        assert "Deductible" in capsys.readouterr().out

    def test_show_rejects_non_index(self, interactive, capsys):
        interactive._handle_command("/show abc")
        assert "Not an index" in capsys.readouterr().out

    def test_unknown(self, interactive, capsys):
        interactive._handle_command("/frobnicate")
        assert "Unknown command" in capsys.readouterr().out
