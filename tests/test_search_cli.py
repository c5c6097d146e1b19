"""
Tests for the command-line entry point
"""
import json

import pytest

import search_cli
from tests.conftest import RAW_FUNDS, RAW_HOLDINGS, RAW_STOCKS


@pytest.fixture
def data_files(tmp_path, monkeypatch):
    paths = {}
    for category, records in (('funds', RAW_FUNDS), ('stocks', RAW_STOCKS), ('holdings', RAW_HOLDINGS)):
        path = tmp_path / f"{category}.json"
        path.write_text(json.dumps(records), encoding='utf-8')
        paths[category] = path
    monkeypatch.setenv('FUNDS_PATH', str(paths['funds']))
    monkeypatch.setenv('STOCKS_PATH', str(paths['stocks']))
    monkeypatch.setenv('HOLDINGS_PATH', str(paths['holdings']))
    monkeypatch.delenv('USE_EMBEDDINGS', raising=False)
    return paths


def run(argv, capsys):
    code = search_cli.main(argv)
    return code, json.loads(capsys.readouterr().out)


def test_query_prints_results(data_files, capsys):
    code, output = run(['query', 'ICICI Infra'], capsys)
    assert code == 0
    assert output['analysis'] == {'isQuestion': False, 'isNaturalLanguage': False}
    assert output['results'][0]['fund']['name'] == "ICICI Prudential Infrastructure Fund"


def test_import_only_validates(data_files, tmp_path, capsys):
    before = data_files['funds'].read_text(encoding='utf-8')
    new_funds = tmp_path / "new_funds.json"
    new_funds.write_text(json.dumps([{"id": "99", "name": "Kotak Gold Fund"}]), encoding='utf-8')

    code, output = run(['import', 'funds', str(new_funds)], capsys)
    assert code == 0
    assert output['success'] is True
    assert output['records'] == 1
    assert output['data_files_modified'] is False
    assert data_files['funds'].read_text(encoding='utf-8') == before


def test_import_rejects_malformed_file(data_files, tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text('{"name": "not a list"}', encoding='utf-8')
    code, output = run(['import', 'funds', str(bad)], capsys)
    assert code == 1
    assert output['success'] is False


def test_import_reports_missing_file(data_files, tmp_path, capsys):
    code, output = run(['import', 'funds', str(tmp_path / "absent.json")], capsys)
    assert code == 1
    assert output['error_type'] == 'not_found'


def test_import_help_says_files_are_untouched():
    parser = search_cli.build_parser()
    subparsers = next(a for a in parser._actions if a.dest == 'command')
    import_help = next(c.help for c in subparsers._choices_actions if c.dest == 'import')
    assert "not modified" in import_help
