import collections.abc
import dataclasses
import logging

import release_notes.classify as rnc
import release_notes.model as rnm

logger = logging.getLogger(__name__)


def iter_document_release_notes(
    lines: collections.abc.Iterable[str],
    edition: rnm.Edition,
    component: rnm.Component,
) -> collections.abc.Generator[rnm.NoteRecord, None, None]:
    '''
    yields a release-note entry for each bullet of the given release-notes document (as rendered
    for a single repository). Each entry is tagged with the category of the section it was found
    in, and with the given edition and component.

    The `Summary` header is skipped. Scanning ends at the first header not naming a category.
    `N/A` entries are dropped.

    :raises MalformedReleaseNotesError: if a bullet precedes the first category header
    '''
    category = None

    for line in lines:
        logger.debug(f'read line: {line.rstrip()}')
        classified = rnc.classify_line(line)

        if classified.kind is rnc.LineKind.HEADER:
            if classified.is_summary_header():
                continue
            if not rnm.is_category_display_name(classified.text):
                logger.debug(f'{classified.text=} is not a category - stop reading')
                return
            category = rnm.Category.from_display_name(classified.text)
            logger.debug(f'matched category: {category.display_name}')
            continue

        if not classified.is_dashed_bullet:
            continue

        if classified.kind is rnc.LineKind.NOT_APPLICABLE:
            logger.debug(f'skipping not user-facing entry: {classified.text}')
            continue

        if category is None:
            raise rnm.MalformedReleaseNotesError(
                f'missing category for release-note text: {classified.text}'
            )

        yield rnm.NoteRecord(
            text=classified.text,
            category=category,
            edition=edition,
            component=component,
        )


@dataclasses.dataclass(frozen=True)
class ExtractedReleaseNote:
    '''
    the release-note of a single pull request, along with the numbers of the pull requests it
    was declared to be the "same as".
    '''
    record: rnm.NoteRecord
    same_as_references: tuple[str, ...] = ()


def extract_pull_request_release_note(
    lines: collections.abc.Iterable[str],
    pull_request_number: str | int,
    category: rnm.Category | None=None,
) -> ExtractedReleaseNote | None:
    '''
    extracts the release-note from the given pull request body. The release-note is expected
    below a `## Release note(s)` header, and ends with the next header.

    If the release-note section contains more than one text, the last one wins. Returns `None`
    if the pull request was marked as not being user-facing (`N/A`). Otherwise, a release-note
    is returned, even if no text was found.
    '''
    pull_request_number = str(pull_request_number)
    lines = iter(lines)

    for line in lines:
        if rnc.is_release_note_section_header(line):
            break

    text = None
    same_as_references = []

    for line in lines:
        classified = rnc.classify_line(line)

        if classified.is_heading or line.startswith('##'):
            break # end of release-note section

        if classified.kind is rnc.LineKind.NOT_APPLICABLE:
            logger.debug(f'PR #{pull_request_number} is not user-facing')
            return None

        if classified.kind is rnc.LineKind.SAME_AS:
            logger.debug(f'PR #{pull_request_number} is same as #{classified.reference}')
            same_as_references.append(classified.reference)
            continue

        if classified.kind is rnc.LineKind.BULLET:
            logger.debug(f'matched: {classified.text}')
            text = classified.text

    return ExtractedReleaseNote(
        record=rnm.NoteRecord(
            origin_identifiers=(pull_request_number,),
            text=text,
            category=category,
        ),
        same_as_references=tuple(same_as_references),
    )
