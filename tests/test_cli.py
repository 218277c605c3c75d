import json
import sys
import webbrowser
from argparse import Namespace
from pathlib import Path

import pytest

from cli import main, write_output, _write_report_file

SNAPSHOT = {
    'contributors': [
        {'contributorEmail': 'a@x.com', 'projectName': 'Alpha', 'totalCommits': 4, 'latestCommitDate': '2025-06-20', 'firstCommitDate': '2025-06-01'},
        {'contributorEmail': 'b@x.com', 'projectName': 'Alpha', 'totalCommits': 2, 'latestCommitDate': '2025-06-21', 'firstCommitDate': '2024-06-01'},
    ],
    'extensions': [
        {'extension': 'py', 'committerEmail': 'a@x.com', 'filePath': 'a.py', 'commitDate': '2025-06-20', 'commitId': 'c1'},
    ],
}


def _snapshot_file(tmp_path):
    path = tmp_path / 'snapshot.json'
    path.write_text(json.dumps(SNAPSHOT), encoding='utf-8')
    return str(path)


def test_cli_main_writes_json_report(tmp_path, monkeypatch):
    out_base = str(tmp_path / 'report_cli')
    argv = ['cli.py', '--snapshot', _snapshot_file(tmp_path), '--today', '2025-06-30', '--windows', '30', '--output', 'json', '--out-file', out_base]
    monkeypatch.setattr(sys, 'argv', argv)
    main()

    p = Path(f"{out_base}.json")
    assert p.exists()
    landscape = json.loads(p.read_text(encoding='utf-8'))
    assert [w['days'] for w in landscape['windows']] == [30]
    assert landscape['windows'][0]['edges'] == [{'from': 'a@x.com', 'to': 'b@x.com', 'weight': 1}]


def test_cli_csv_to_stdout(tmp_path, capsys):
    main(['--snapshot', _snapshot_file(tmp_path), '--today', '2025-06-30', '--output', 'csv', '--table', 'projects'])
    out = capsys.readouterr().out
    assert out.splitlines()[0] == 'project,contributors,recentContributors,rookies,commitsThisYear'
    assert out.splitlines()[1].startswith('Alpha,2,2,1,')


def test_cli_missing_snapshot_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(['--snapshot', str(tmp_path / 'missing.json')])
    assert exc.value.code == 1
    assert 'Failed to read snapshot file' in capsys.readouterr().out


def test_cli_rejects_bad_today(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(['--snapshot', _snapshot_file(tmp_path), '--today', 'someday'])
    assert exc.value.code == 2


def test_cli_invalid_windows_exit(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(['--snapshot', _snapshot_file(tmp_path), '--windows', 'soon'])
    assert exc.value.code == 1


def test_write_report_file_opens_html(monkeypatch, tmp_path):
    called = {}

    def fake_open(url):
        called['url'] = url
        return True

    monkeypatch.setattr(webbrowser, 'open', fake_open)
    path = str(tmp_path / 'nested' / 'out.html')
    _write_report_file(path, '<html></html>', open_html=True)
    assert Path(path).read_text(encoding='utf-8') == '<html></html>'
    assert called['url'].startswith('file://')


def test_write_output_prints_without_out_file(capsys):
    write_output('md', '# hi', Namespace(out_file='', open=False))
    assert capsys.readouterr().out.strip() == '# hi'
