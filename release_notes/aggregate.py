import collections
import collections.abc
import dataclasses
import logging

import release_notes.classify as rnc
import release_notes.model as rnm

logger = logging.getLogger(__name__)


class CategorisedReleaseNotes:
    '''
    release-notes grouped by category. Within a category, release-notes are kept in the order
    they were added. Iteration honours the order in which categories are declared, and omits
    empty categories.
    '''
    def __init__(self):
        self._notes: dict[rnm.Category, list[rnm.NoteRecord]] = collections.defaultdict(list)

    def add(self, record: rnm.NoteRecord) -> rnm.NoteRecord:
        if record.category is None:
            record = record.with_category(rnm.Category.MISCELLANEOUS)

        self._notes[record.category].append(record)
        return record

    def notes(self, category: rnm.Category) -> tuple[rnm.NoteRecord, ...]:
        return tuple(self._notes.get(category, ()))

    def find(self, identifier: str) -> rnm.NoteRecord | None:
        '''
        returns the release-note created from the pull request with the given number, if any.
        '''
        for record in self.records():
            if record.origin_identifiers and record.primary_identifier == identifier:
                return record
        return None

    def replace(self, old: rnm.NoteRecord, new: rnm.NoteRecord):
        '''
        replaces `old` with `new`, keeping the position of `old`. The category of `old` is kept.
        '''
        notes = self._notes[old.category]
        for idx, record in enumerate(notes):
            if record is old:
                notes[idx] = dataclasses.replace(new, category=old.category)
                return

        raise ValueError(f'not a known release-note: {old=}')

    def records(self) -> collections.abc.Generator[rnm.NoteRecord, None, None]:
        for _, notes in self:
            yield from notes

    def __iter__(self) -> collections.abc.Iterator[
        tuple[rnm.Category, tuple[rnm.NoteRecord, ...]]
    ]:
        for category in rnm.Category:
            if notes := self._notes.get(category):
                yield category, tuple(notes)

    def __len__(self):
        return sum(len(notes) for notes in self._notes.values())


class MergedReleaseNotes:
    '''
    release-notes of several components, grouped by edition, category and component (in this
    order). Each level is iterated in the order its members are declared in; empty groups are
    omitted.
    '''
    def __init__(self):
        self._notes: dict[
            rnm.Edition,
            dict[rnm.Category, dict[rnm.Component, list[rnm.NoteRecord]]],
        ] = {}

    def add(self, record: rnm.NoteRecord) -> rnm.NoteRecord:
        if record.edition is None or record.component is None:
            raise ValueError(f'edition and component must be set: {record=}')
        if record.category is None:
            record = record.with_category(rnm.Category.MISCELLANEOUS)

        if record.edition.strips_pull_request_numbers and record.text:
            stripped = rnc.strip_pull_request_numbers(record.text)
            if stripped != record.text:
                logger.debug(
                    f'{record.category}::{record.component}: stripped PR-numbers from {record.text}'
                )
                record = dataclasses.replace(record, text=stripped)

        self._notes.setdefault(
            record.edition, {},
        ).setdefault(
            record.category, {},
        ).setdefault(
            record.component, [],
        ).append(record)

        return record

    def add_all(self, records: collections.abc.Iterable[rnm.NoteRecord]):
        for record in records:
            self.add(record)

    def editions(self) -> collections.abc.Generator[rnm.Edition, None, None]:
        for edition in rnm.Edition:
            if any(True for _ in self.categories(edition)):
                yield edition

    def categories(
        self,
        edition: rnm.Edition,
    ) -> collections.abc.Generator[rnm.Category, None, None]:
        for category in rnm.Category:
            if any(True for _ in self.components(edition, category)):
                yield category

    def components(
        self,
        edition: rnm.Edition,
        category: rnm.Category,
    ) -> collections.abc.Generator[rnm.Component, None, None]:
        components = self._notes.get(edition, {}).get(category, {})
        for component in rnm.Component:
            if components.get(component):
                yield component

    def notes(
        self,
        edition: rnm.Edition,
        category: rnm.Category,
        component: rnm.Component,
    ) -> tuple[rnm.NoteRecord, ...]:
        return tuple(self._notes.get(edition, {}).get(category, {}).get(component, ()))
