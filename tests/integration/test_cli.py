import pytest
from click.testing import CliRunner
from startorder.CLI.main import cli

COMPOSE = """
services:
  web:
    depends_on: [api]
  api:
    links: ["db:database", cache]
  db: {}
  cache: {}
"""


@pytest.fixture
def compose_file(tmp_path):
    path = tmp_path / "docker-compose.yml"
    path.write_text(COMPOSE)
    return str(path)


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'Print the start order' in result.output


def test_cli_order_no_file():
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', 'non_existent.yml', 'order'])
    assert result.exit_code == 1
    assert 'Error: non_existent.yml not found.' in result.output


def test_cli_order(compose_file):
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', compose_file, 'order'])
    assert result.exit_code == 0
    assert result.output.splitlines() == ['db', 'cache', 'api', 'web']


def test_cli_order_reverse(compose_file):
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', compose_file, 'order', '--reverse'])
    assert result.exit_code == 0
    assert result.output.splitlines() == ['web', 'api', 'cache', 'db']


def test_cli_tie_break_and_prefer(compose_file):
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', compose_file, '--tie-break', 'name', 'order'])
    assert result.output.splitlines()[:2] == ['cache', 'db']

    result = runner.invoke(cli, ['-f', compose_file, '--prefer', 'cache', 'order'])
    assert result.output.splitlines()[:2] == ['cache', 'db']


def test_cli_tie_break_from_environment(compose_file):
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', compose_file, 'order'], env={'STARTORDER_TIE_BREAK': 'name'})
    assert result.output.splitlines()[:2] == ['cache', 'db']


def test_cli_layers(compose_file):
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', compose_file, 'layers'])
    assert result.exit_code == 0
    assert result.output.splitlines() == ['0: db, cache', '1: api', '2: web']


def test_cli_weights(compose_file):
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', compose_file, 'weights'])
    assert result.exit_code == 0
    rows = [line.split() for line in result.output.splitlines()[2:]]
    assert rows == [['web', '2'], ['api', '1'], ['db', '0'], ['cache', '0']]


def test_cli_graph(compose_file):
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', compose_file, 'graph'])
    assert result.exit_code == 0
    assert 'api: cache, db' in result.output
    assert 'db: -' in result.output


def test_cli_cycle(tmp_path):
    path = tmp_path / "docker-compose.yml"
    path.write_text("services:\n  x:\n    depends_on: [y]\n  y:\n    depends_on: [x]\n")
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', str(path), 'order'])
    assert result.exit_code == 1
    assert "can't be evaluated" in result.output


def test_cli_malformed_link(tmp_path):
    path = tmp_path / "docker-compose.yml"
    path.write_text("services:\n  x:\n    links: [\"a:b:c\"]\n")
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', str(path), 'order'])
    assert result.exit_code == 1
    assert 'Service link a:b:c is invalid' in result.output


def test_cli_invalid_yaml(tmp_path):
    path = tmp_path / "docker-compose.yml"
    path.write_text("services: [x, y]\n")
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', str(path), 'order'])
    assert result.exit_code == 1
    assert 'Error:' in result.output


def test_cli_unreadable_path(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', str(tmp_path), 'order'])
    assert result.exit_code == 1
    assert 'Error: Cannot read' in result.output


def test_cli_undecodable_file(tmp_path):
    path = tmp_path / "docker-compose.yml"
    path.write_bytes(b"services:\n  caf\xe9: {}\n")
    runner = CliRunner()
    result = runner.invoke(cli, ['-f', str(path), 'order'])
    assert result.exit_code == 1
    assert 'Error: Cannot read' in result.output
