"""End-to-end checks for run.py and the settings it reads."""
import json

import pytest

import run
from src.config import Settings, get_settings, split_keys


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    # keep a developer's .env or CACHESIM_* vars out of these tests
    monkeypatch.chdir(tmp_path)
    for var in ('CAPACITY', 'POLICIES', 'DEMO_SEQUENCE', 'LOG_LEVEL', 'JSON_LOGS'):
        monkeypatch.delenv(f'CACHESIM_{var}', raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_defaults():
    s = Settings()
    assert s.capacity == 4
    assert s.policies_list == ['LRU', 'FIFO', 'LFU']
    assert s.demo_sequence_list == list('ABCDAEABACDEDC')


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv('CACHESIM_CAPACITY', '2')
    monkeypatch.setenv('CACHESIM_POLICIES', 'lfu, fifo')
    s = Settings()
    assert s.capacity == 2
    assert s.policies_list == ['lfu', 'fifo']


def test_split_keys():
    assert split_keys('A, B,,C  D') == ['A', 'B', 'C', 'D']
    assert split_keys('') == []


def test_demo_run_prints_summary(capsys):
    assert run.main(['--quiet']) == 0
    out = capsys.readouterr().out
    assert 'LRU   hits=5' in out
    assert 'FIFO  hits=4' in out
    assert 'LFU   hits=5' in out
    assert '28.57%' in out


def test_trace_logs_each_access(capsys):
    assert run.main(['--policy', 'LFU', '--capacity', '1', '--sequence', 'A,A,B']) == 0
    out = capsys.readouterr().out
    assert out.count('cache_access') == 3
    assert 'cache_eviction' in out
    assert 'simulation_complete' in out


def test_exports(tmp_path):
    json_path = tmp_path / 'out.json'
    csv_path = tmp_path / 'out.csv'
    code = run.main([
        '--quiet', '--policy', 'FIFO', '--sequence', 'A B A',
        '--export-json', str(json_path), '--export-csv', str(csv_path),
    ])
    assert code == 0
    data = json.loads(json_path.read_text(encoding='utf-8'))
    assert data['FIFO']['stats']['hits'] == 1
    assert data['FIFO']['hit_rate_history'] == pytest.approx([0.0, 0.0, 1 / 3])
    assert csv_path.read_text(encoding='utf-8').startswith('policy,')


def test_export_failure_returns_error(tmp_path):
    bad = tmp_path / 'missing' / 'out.csv'
    assert run.main(['--quiet', '--export-csv', str(bad)]) == 1


def test_unknown_policy_runs_as_lru(capsys):
    assert run.main(['--quiet', '--policy', 'MRU']) == 0
    out = capsys.readouterr().out
    assert 'unknown_policy_variant' in out
    assert 'LRU   hits=5' in out


def test_interactive_without_keys_exits_cleanly(monkeypatch, capsys):
    answers = iter(['3', 'RUN'])
    monkeypatch.setattr('builtins.input', lambda _msg='': next(answers))
    assert run.main(['--interactive']) == 0
    assert 'no_accesses_provided' in capsys.readouterr().out


def test_interactive_run(monkeypatch, capsys):
    answers = iter(['1', 'A', 'A', 'B', 'run'])
    monkeypatch.setattr('builtins.input', lambda _msg='': next(answers))
    assert run.main(['--interactive', '--quiet', '--policy', 'LRU']) == 0
    assert 'LRU   hits=1' in capsys.readouterr().out


def test_lfu_trace_shows_frequency_groups(capsys):
    assert run.main(['--policy', 'LFU', '--capacity', '2', '--sequence', 'A,A,B']) == 0
    out = capsys.readouterr().out
    assert "frequencies={1: ['B'], 2: ['A']}" in out
    assert out.count('simulation_started') == 1


def test_lru_trace_has_no_frequency_groups(capsys):
    assert run.main(['--policy', 'LRU', '--sequence', 'A,A']) == 0
    assert 'frequencies' not in capsys.readouterr().out


def _access_lines(out):
    return [line for line in out.splitlines() if 'cache_access' in line]


def test_json_logs_from_environment(monkeypatch, capsys):
    monkeypatch.setenv('CACHESIM_JSON_LOGS', 'true')
    assert run.main(['--policy', 'LFU', '--sequence', 'A,A']) == 0
    lines = _access_lines(capsys.readouterr().out)
    assert len(lines) == 2
    assert json.loads(lines[1])['frequencies'] == {'2': ['A']}


def test_no_json_logs_overrides_environment(monkeypatch, capsys):
    monkeypatch.setenv('CACHESIM_JSON_LOGS', 'true')
    assert run.main(['--no-json-logs', '--policy', 'LRU', '--sequence', 'A,A']) == 0
    lines = _access_lines(capsys.readouterr().out)
    assert len(lines) == 2
    assert not any(line.startswith('{') for line in lines)
