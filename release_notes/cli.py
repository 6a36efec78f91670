#! /usr/bin/env python3
import argparse
import logging
import sys

import dacite
import github3.exceptions
import yaml

import release_notes.config as rncfg
import release_notes.creation as rncr
import release_notes.fetch as rnf
import release_notes.log as rnlog
import release_notes.merge as rnmg

logger = logging.getLogger(__name__)


def _add_verbose_arg(parser: argparse.ArgumentParser):
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        default=False,
        help='print debug output (also enabled by setting the DEBUG environment variable)',
    )


def _configure_logging(parsed: argparse.Namespace):
    verbose = parsed.verbose or rnlog.debug_enabled_by_env()
    rnlog.configure_default_logging(
        stdout_level=logging.DEBUG if verbose else logging.INFO,
    )


def _write(text: str, outfile: str):
    if outfile == '-':
        sys.stdout.write(text)
        return

    with open(outfile, 'w', encoding='utf-8') as f:
        f.write(text)


def parse_merge_args(argv: list[str] | None=None) -> argparse.Namespace:
    ''' Parses CLI for merging the release notes of all components '''
    parser = argparse.ArgumentParser(
        prog='merge-release-notes',
        description='''\
            Merges the release notes of ScalarDB, ScalarDB Cluster, ScalarDB GraphQL and
            ScalarDB SQL (read from scalardb.md, cluster.md, graphql.md and sql.md in the
            working directory) and writes the merged release notes to stdout.
        ''',
    )
    parser.add_argument(
        '--cfg',
        default=None,
        help='''\
            YAML file declaring the release notes documents to merge, e.g.:
              - path: scalardb.md
                edition: community
                component: scalardb
        ''',
    )
    parser.add_argument(
        '--base-dir',
        default=None,
        help='''\
            directory the release notes documents are read from (defaults to the working
            directory)
        ''',
    )
    parser.add_argument(
        '--outfile', '-o',
        default='-',
        help='output file to write to (`-` for stdout, which is the default)',
    )
    _add_verbose_arg(parser)

    return parser.parse_args(argv)


def merge_release_notes_cli(argv: list[str] | None=None):
    parsed = parse_merge_args(argv)
    _configure_logging(parsed)

    try:
        if parsed.cfg:
            merge_cfg = rncfg.load_merge_cfg(parsed.cfg)
        else:
            merge_cfg = rncfg.default_merge_cfg()

        if parsed.base_dir:
            merge_cfg = merge_cfg.with_base_dir(parsed.base_dir)

        merged_release_notes = rnmg.merge_release_notes(cfg=merge_cfg)
    except (OSError, ValueError, yaml.YAMLError, dacite.DaciteError) as e:
        logger.error(f'failed to merge release notes: {e}')
        sys.exit(1)

    _write(merged_release_notes, parsed.outfile)


def parse_creation_args(argv: list[str] | None=None) -> argparse.Namespace:
    ''' Parses CLI for creating the release note of a single repository '''
    parser = argparse.ArgumentParser(
        prog='create-release-note',
        description='''\
            Creates the release note of a repository from the merged pull requests tracked by
            the GitHub project of the release, and writes it to stdout.
        ''',
        epilog='example: create-release-note scalar-labs ScalarDB 4.0.0 scalardb',
    )
    parser.add_argument('owner', help='owner of the repository and the project')
    parser.add_argument(
        'project_title_prefix',
        metavar='projectTitlePrefix',
        help='the project is looked up by this prefix and the version',
    )
    parser.add_argument('version', help='the version to be released (e.g. 4.0.0-rc1)')
    parser.add_argument('repository', help='name of the repository (w/o owner)')
    parser.add_argument(
        '--github-auth-token',
        default=None,
        help='if passed, pull requests are retrieved via the GitHub API rather than `gh`',
    )
    _add_verbose_arg(parser)

    return parser.parse_args(argv)


def create_release_note_cli(argv: list[str] | None=None):
    parsed = parse_creation_args(argv)
    _configure_logging(parsed)

    creation_cfg = rncfg.CreationCfg(
        owner=parsed.owner,
        project_title_prefix=parsed.project_title_prefix,
        version=parsed.version,
        repository=parsed.repository,
    )

    if parsed.github_auth_token:
        pull_request_lookup = rnf.GithubPullRequestLookup(
            cfg=creation_cfg,
            github_api=rnf.github_api(token=parsed.github_auth_token),
        )
    else:
        pull_request_lookup = rnf.GhCliPullRequestLookup(cfg=creation_cfg)

    try:
        release_note = rncr.ReleaseNoteCreation(
            pull_request_lookup=pull_request_lookup,
        ).create_release_note()
    except (RuntimeError, ValueError, github3.exceptions.GitHubError) as e:
        logger.error(f'failed to create release note: {e}')
        sys.exit(1)

    print(release_note)
