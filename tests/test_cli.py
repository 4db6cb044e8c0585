import json

import pytest

from gfcrypt.cli import main


def _write(tmp_path, document):
    path = tmp_path / "testcases.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_runs_testcases_and_prints_compact_json(tmp_path, capsys):
    path = _write(
        tmp_path,
        {
            "testcases": {
                "t1": {
                    "action": "poly2block",
                    "arguments": {"semantic": "xex", "coefficients": [12, 127, 0, 9]},
                }
            }
        },
    )
    assert main([str(path)]) == 0
    out = capsys.readouterr().out.strip()
    assert out == '{"responses":{"t1":{"block":"ARIAAAAAAAAAAAAAAAAAgA=="}}}'


def test_several_testcases_are_all_answered(tmp_path, capsys):
    path = _write(
        tmp_path,
        {
            "testcases": {
                "b": {
                    "action": "gfdiv",
                    "arguments": {
                        "a": "JAAAAAAAAAAAAAAAAAAAAA==",
                        "b": "JAAAAAAAAAAAAAAAAAAAAA==",
                    },
                },
                "a": {
                    "action": "sea128",
                    "arguments": {
                        "mode": "encrypt",
                        "key": "istDASeincoolerKEYrofg==",
                        "input": "yv66vvrO263eyviIiDNEVQ==",
                    },
                },
                "c": {"action": "nothing_here", "arguments": {}},
            }
        },
    )
    assert main([str(path)]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result == {
        "responses": {
            "a": {"output": "D5FDo3iVBoBN9gVi9/MSKQ=="},
            "b": {"q": "gAAAAAAAAAAAAAAAAAAAAA=="},
        }
    }


def test_output_keys_are_sorted(tmp_path, capsys):
    path = _write(
        tmp_path,
        {
            "testcases": {
                key: {
                    "action": "poly2block",
                    "arguments": {"semantic": "xex", "coefficients": [1]},
                }
                for key in ("z", "m", "a")
            }
        },
    )
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.index('"a"') < out.index('"m"') < out.index('"z"')


def test_wrong_number_of_arguments_exits(tmp_path):
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2
    with pytest.raises(SystemExit):
        main([str(tmp_path / "a.json"), str(tmp_path / "b.json")])


def test_missing_file_fails(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_invalid_json_fails(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert main([str(path)]) == 1
    assert "invalid JSON" in capsys.readouterr().err


def test_malformed_document_fails(tmp_path, capsys):
    path = _write(tmp_path, {"testcases": {"t": 5}})
    assert main([str(path)]) == 1
    assert "malformed" in capsys.readouterr().err


def test_empty_document_prints_empty_responses(tmp_path, capsys):
    path = _write(tmp_path, {})
    assert main([str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"responses": {}}