'''
resolution of "same as" links between pull requests.

Several pull requests may contribute to the same change. Instead of repeating the release-note,
such pull requests declare to be the "same as" the (topic) pull request, optionally adding some
text of their own. Those pull requests are merged into the topic pull request's release-note and
do not show up on their own.
'''

import collections.abc
import logging

import release_notes.aggregate as rna
import release_notes.model as rnm

logger = logging.getLogger(__name__)


class SameAsRegistry:
    def __init__(self):
        # referenced PR-number -> release-notes declared to be the same as the referenced one
        self._sources: dict[str, list[rnm.NoteRecord]] = {}
        self._source_identifiers: set[str] = set()

    def register(self, reference: str, record: rnm.NoteRecord):
        logger.debug(f'PR #{record.primary_identifier} is same as #{reference}')
        self._sources.setdefault(reference, []).append(record)
        self._source_identifiers.add(record.primary_identifier)

    def register_all(self, references: collections.abc.Iterable[str], record: rnm.NoteRecord):
        for reference in references:
            self.register(reference, record)

    def sources(self, reference: str) -> tuple[rnm.NoteRecord, ...]:
        return tuple(self._sources.get(reference, ()))

    def references(self) -> tuple[str, ...]:
        return tuple(self._sources)

    def is_source(self, record: rnm.NoteRecord) -> bool:
        return bool(record.origin_identifiers) and (
            record.primary_identifier in self._source_identifiers
        )

    def resolve(
        self,
        categorised: rna.CategorisedReleaseNotes,
    ) -> rna.CategorisedReleaseNotes:
        '''
        returns the given release-notes with all "same as" release-notes merged into the
        release-notes they reference. Merged release-notes are omitted. Release-notes
        referencing a pull request without release-note are dropped.

        Merging appends the text and the PR-numbers of the merged release-notes to the
        referenced release-note, honouring the order in which the links were registered.
        '''
        resolved = rna.CategorisedReleaseNotes()
        for record in categorised.records():
            if self.is_source(record):
                continue
            resolved.add(record)

        for reference, sources in self._sources.items():
            if not (target := resolved.find(reference)):
                logger.debug(
                    f'no release-note for PR #{reference} - dropping {len(sources)} link(s)'
                )
                continue

            merged = target
            for source in sources:
                merged = merged.merged_with(source)

            logger.debug(f'merged release-note text: {merged.text}')
            resolved.replace(target, merged)

        return resolved
