import collections.abc
import dataclasses
import enum
import logging
import os

import dacite
import semver
import yaml

import release_notes.model as rnm

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class MergeSourceCfg:
    '''
    a release-notes document (as rendered for a single repository) to be merged
    '''
    path: str
    edition: rnm.Edition
    component: rnm.Component


@dataclasses.dataclass(frozen=True)
class MergeCfg:
    sources: tuple[MergeSourceCfg, ...]

    def with_base_dir(self, base_dir: str) -> 'MergeCfg':
        return MergeCfg(
            sources=tuple(
                dataclasses.replace(source, path=os.path.join(base_dir, source.path))
                for source in self.sources
            ),
        )


def default_merge_cfg() -> MergeCfg:
    return MergeCfg(
        sources=(
            MergeSourceCfg('scalardb.md', rnm.Edition.COMMUNITY, rnm.Component.CORE),
            MergeSourceCfg('cluster.md', rnm.Edition.ENTERPRISE, rnm.Component.CLUSTER),
            MergeSourceCfg('graphql.md', rnm.Edition.ENTERPRISE, rnm.Component.GRAPHQL),
            MergeSourceCfg('sql.md', rnm.Edition.ENTERPRISE, rnm.Component.SQL),
        ),
    )


def merge_cfg_from_dicts(raw: collections.abc.Iterable[dict]) -> MergeCfg:
    '''
    parses merge-configuration in the following format:

        - path: scalardb.md
          edition: community
          component: scalardb
        - path: cluster.md
          edition: enterprise
          component: cluster
    '''
    return MergeCfg(
        sources=tuple(
            dacite.from_dict(
                data_class=MergeSourceCfg,
                data=source,
                config=dacite.Config(
                    cast=[enum.Enum],
                ),
            )
            for source in raw
        ),
    )


def load_merge_cfg(path: str) -> MergeCfg:
    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, list):
        raise ValueError(f'expected a list of release-notes documents in {path=}')

    return merge_cfg_from_dicts(raw)


@dataclasses.dataclass(frozen=True)
class CreationCfg:
    owner: str
    project_title_prefix: str
    version: str
    repository: str
    pull_request_limit: int = 10000

    @property
    def project_version(self) -> str:
        '''
        the version projects are named after, i.e. the version w/o pre-release suffix
        (e.g. 4.0.0-rc1 -> 4.0.0)
        '''
        try:
            return str(semver.Version.parse(self.version).finalize_version())
        except ValueError:
            # not a valid semver-version (e.g. `4.0`)
            return self.version.split('-', 1)[0]
