'''
retrieval of pull requests (and the release-notes they carry) from GitHub.

Pull requests relevant for a release are the items of the GitHub project named after the
release (e.g. `ScalarDB 4.0.0`). As GitHub projects are not exposed via the REST API, they are
listed using the GitHub CLI (`gh`).
'''

import abc
import dataclasses
import json
import logging
import os
import subprocess
import urllib.parse

import github3

import release_notes.config as rncfg
import release_notes.model as rnm

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class PullRequestInfo:
    number: str
    merged: bool
    labels: tuple[str, ...] = ()
    body: str = ''

    @property
    def category(self) -> rnm.Category:
        return rnm.category_from_labels(self.labels)

    def body_lines(self) -> list[str]:
        return self.body.splitlines()


class PullRequestLookup(abc.ABC):
    @abc.abstractmethod
    def project_number(self) -> str:
        '''
        returns the number of the project tracking the release

        :raises RuntimeError: if there is no such project
        '''
        raise NotImplementedError

    @abc.abstractmethod
    def pull_request_numbers(self, project_number: str) -> list[str]:
        '''
        returns the numbers of the pull requests of the repository tracked by the given project
        '''
        raise NotImplementedError

    @abc.abstractmethod
    def pull_request(self, number: str) -> PullRequestInfo:
        raise NotImplementedError


class GhCliPullRequestLookup(PullRequestLookup):
    '''
    looks up projects and pull requests by running the GitHub CLI. Authentication is left to
    `gh` (which honours `GH_TOKEN` / `GITHUB_TOKEN`).
    '''
    def __init__(
        self,
        cfg: rncfg.CreationCfg,
        gh_executable: str='gh',
    ):
        self.cfg = cfg
        self.gh_executable = gh_executable

    @property
    def repository_path(self) -> str:
        return f'{self.cfg.owner}/{self.cfg.repository}'

    def _run(self, *args: str) -> str:
        argv = (self.gh_executable, *args)
        logger.debug(f'executing: {" ".join(argv)}')

        try:
            res = subprocess.run(
                args=argv,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise RuntimeError(
                f'{" ".join(argv)} failed with {e.returncode=}: {e.stderr.strip()}'
            ) from e
        except OSError as e:
            raise RuntimeError(f'failed to execute {self.gh_executable}: {e}') from e

        return res.stdout

    def _run_json(self, *args: str):
        return json.loads(self._run(*args))

    def project_number(self) -> str:
        version = self.cfg.project_version

        # also consider closed projects, so release-notes may be re-created for past releases
        projects = self._run_json(
            'project', 'list',
            '--owner', self.cfg.owner,
            '--closed',
            '--limit', str(self.cfg.pull_request_limit),
            '--format', 'json',
        ).get('projects', [])

        for project in projects:
            title = project.get('title', '')
            if self.cfg.project_title_prefix in title and version in title:
                logger.info(f'using project {title!r} (#{project["number"]})')
                return str(project['number'])

        raise RuntimeError(
            f"couldn't find a project for {self.cfg.project_title_prefix=} and {version=}"
        )

    def pull_request_numbers(self, project_number: str) -> list[str]:
        items = self._run_json(
            'project', 'item-list', str(project_number),
            '--owner', self.cfg.owner,
            '--limit', str(self.cfg.pull_request_limit),
            '--format', 'json',
        ).get('items', [])

        numbers = []
        for item in items:
            content = item.get('content') or {}
            if content.get('type') != 'PullRequest':
                continue
            if content.get('repository', '').split('/')[-1] != self.cfg.repository:
                continue
            numbers.append(str(content['number']))

        logger.info(f'found {len(numbers)} pull requests of {self.repository_path}')
        return numbers

    def pull_request(self, number: str) -> PullRequestInfo:
        raw = self._run_json(
            'pr', 'view', str(number),
            '--repo', self.repository_path,
            '--json', 'state,labels,body',
        )

        return PullRequestInfo(
            number=str(number),
            merged=raw.get('state', '').lower() == 'merged',
            labels=tuple(label['name'] for label in raw.get('labels') or ()),
            body=raw.get('body') or '',
        )


class GithubPullRequestLookup(GhCliPullRequestLookup):
    '''
    looks up projects using the GitHub CLI, and pull requests using the GitHub (REST) API
    '''
    def __init__(
        self,
        cfg: rncfg.CreationCfg,
        github_api: github3.GitHub,
        gh_executable: str='gh',
    ):
        super().__init__(cfg=cfg, gh_executable=gh_executable)
        self.github_api = github_api

    def pull_request(self, number: str) -> PullRequestInfo:
        pull_request = self.github_api.pull_request(
            owner=self.cfg.owner,
            repository=self.cfg.repository,
            number=int(number),
        )
        if not pull_request:
            raise RuntimeError(f"couldn't retrieve PR #{number} of {self.repository_path}")

        return PullRequestInfo(
            number=str(number),
            merged=pull_request.merged_at is not None,
            labels=tuple(label['name'] for label in pull_request.labels or ()),
            body=pull_request.body or '',
        )


def github_api(
    token: str | None=None,
    server_url: str | None=None,
) -> github3.GitHub:
    '''
    returns an initialised github-api instance, honouring the environment variables
    GITHUB_TOKEN and GITHUB_SERVER_URL (as present for GitHub-Actions-runs).
    '''
    token = token or os.environ.get('GITHUB_TOKEN')
    server_url = server_url or os.environ.get('GITHUB_SERVER_URL', 'https://github.com')

    if urllib.parse.urlparse(server_url).hostname == 'github.com':
        return github3.GitHub(token=token)

    return github3.GitHubEnterprise(
        url=server_url,
        token=token,
    )
