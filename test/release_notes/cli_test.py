import logging
import os
import shutil

import pytest

import release_notes.cli as rncli
import release_notes.creation as rncr
import release_notes.fetch as rnf

own_dir = os.path.abspath(os.path.dirname(__file__))
resources_dir = os.path.join(own_dir, 'resources')


@pytest.fixture(autouse=True)
def root_logger():
    handlers = list(logging.root.handlers)
    level = logging.root.level

    yield logging.root

    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)
    for handler in handlers:
        logging.root.addHandler(handler)
    logging.root.setLevel(level)


@pytest.fixture
def release_notes_dir(tmp_path, monkeypatch):
    for name in ('scalardb.md', 'cluster.md', 'graphql.md', 'sql.md'):
        shutil.copy(os.path.join(resources_dir, name), tmp_path)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def expected_merged_release_notes() -> str:
    with open(os.path.join(resources_dir, 'expected.md'), encoding='utf-8') as f:
        return f.read()


def test_merge_release_notes(release_notes_dir, capsys):
    rncli.merge_release_notes_cli([])

    assert capsys.readouterr().out == expected_merged_release_notes()


def test_merge_release_notes_to_outfile(release_notes_dir, capsys):
    rncli.merge_release_notes_cli(['--outfile', 'merged.md'])

    with open(os.path.join(release_notes_dir, 'merged.md'), encoding='utf-8') as f:
        assert f.read() == expected_merged_release_notes()
    assert capsys.readouterr().out == ''


def test_merge_release_notes_with_cfg(release_notes_dir, capsys):
    with open(os.path.join(release_notes_dir, 'merge.yaml'), 'w') as f:
        f.write(
            '- path: graphql.md\n'
            '  edition: community\n'
            '  component: graphql\n'
        )

    rncli.merge_release_notes_cli(['--cfg', 'merge.yaml'])

    assert capsys.readouterr().out == (
        '## Summary\n'
        '\n'
        '## Community edition\n'
        '### Enhancements\n'
        '- Added support for GraphQL subscriptions. (#301)\n'
        '### Miscellaneous\n'
        '- Upgraded dependencies. (#302)\n'
        '\n'
    )


def test_merge_release_notes_from_base_dir(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    rncli.merge_release_notes_cli(['--base-dir', resources_dir])

    assert capsys.readouterr().out == expected_merged_release_notes()


def test_merge_malformed_release_notes(release_notes_dir, capsys):
    with open(os.path.join(release_notes_dir, 'sql.md'), 'w') as f:
        f.write('- Fixed a bug.\n')

    with pytest.raises(SystemExit) as exc_info:
        rncli.merge_release_notes_cli([])

    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'missing category' in captured.err


def test_merge_missing_release_notes(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as exc_info:
        rncli.merge_release_notes_cli([])

    assert exc_info.value.code == 1


def test_merge_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        rncli.merge_release_notes_cli(['--help'])

    assert exc_info.value.code == 0
    assert 'merge-release-notes' in capsys.readouterr().out


@pytest.mark.parametrize('argv', [
    [],
    ['scalar-labs', 'ScalarDB', '4.0.0'],
    ['scalar-labs', 'ScalarDB', '4.0.0', 'scalardb', 'surplus'],
])
def test_create_release_note_wrong_arguments(argv):
    with pytest.raises(SystemExit) as exc_info:
        rncli.create_release_note_cli(argv)

    assert exc_info.value.code != 0


def test_parse_creation_args():
    parsed = rncli.parse_creation_args(['scalar-labs', 'ScalarDB', '4.0.0-rc1', 'scalardb'])

    assert parsed.owner == 'scalar-labs'
    assert parsed.project_title_prefix == 'ScalarDB'
    assert parsed.version == '4.0.0-rc1'
    assert parsed.repository == 'scalardb'
    assert parsed.github_auth_token is None
    assert not parsed.verbose


def test_create_release_note(monkeypatch, capsys):
    def create_release_note(self):
        assert isinstance(self.pull_request_lookup, rnf.GhCliPullRequestLookup)
        assert self.pull_request_lookup.cfg.project_version == '4.0.0'
        return '## Summary\n\n'

    monkeypatch.setattr(rncr.ReleaseNoteCreation, 'create_release_note', create_release_note)

    rncli.create_release_note_cli(['scalar-labs', 'ScalarDB', '4.0.0-rc1', 'scalardb'])

    assert capsys.readouterr().out == '## Summary\n\n\n'


def test_create_release_note_without_project(monkeypatch, capsys):
    def project_number(self):
        raise RuntimeError('no such project')

    monkeypatch.setattr(rnf.GhCliPullRequestLookup, 'project_number', project_number)

    with pytest.raises(SystemExit) as exc_info:
        rncli.create_release_note_cli(['scalar-labs', 'ScalarDB', '4.0.0', 'scalardb'])

    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'no such project' in captured.err


def test_verbose_enables_debug_logging(monkeypatch, root_logger):
    monkeypatch.delenv('DEBUG', raising=False)

    rncli._configure_logging(rncli.parse_merge_args(['--verbose']))
    assert root_logger.level == logging.DEBUG

    rncli._configure_logging(rncli.parse_merge_args([]))
    assert root_logger.level == logging.INFO

    monkeypatch.setenv('DEBUG', '1')
    rncli._configure_logging(rncli.parse_merge_args([]))
    assert root_logger.level == logging.DEBUG
