import collections.abc
import logging

import release_notes.aggregate as rna
import release_notes.config as rncfg
import release_notes.extract as rne
import release_notes.markdown as rnmd
import release_notes.model as rnm

logger = logging.getLogger(__name__)


def load_release_notes(
    merged: rna.MergedReleaseNotes,
    lines: collections.abc.Iterable[str],
    edition: rnm.Edition,
    component: rnm.Component,
):
    merged.add_all(
        rne.iter_document_release_notes(
            lines=lines,
            edition=edition,
            component=component,
        )
    )


def load_release_notes_file(
    merged: rna.MergedReleaseNotes,
    source: rncfg.MergeSourceCfg,
):
    logger.info(f'reading release-notes of {source.component.display_name} from {source.path}')

    with open(source.path, encoding='utf-8') as f:
        load_release_notes(
            merged=merged,
            lines=f,
            edition=source.edition,
            component=source.component,
        )


def merge_release_notes(cfg: rncfg.MergeCfg | None=None) -> str:
    '''
    reads the release-notes documents declared by the given cfg (defaults to
    `config.default_merge_cfg`) and returns the merged release-notes as markdown.

    :raises MalformedReleaseNotesError: if one of the documents is malformed (no output is
        produced in this case)
    '''
    if not cfg:
        cfg = rncfg.default_merge_cfg()

    merged = rna.MergedReleaseNotes()
    for source in cfg.sources:
        load_release_notes_file(merged=merged, source=source)

    return rnmd.render_merged_release_notes(merged)
