import dataclasses

import release_notes.aggregate as rna
import release_notes.classify as rnc
import release_notes.model as rnm


@dataclasses.dataclass
class Header:
    level: int
    title: str

    def __str__(self):
        return f"{'#' * self.level} {self.title}"


@dataclasses.dataclass
class ListItem:
    text: str

    def __str__(self):
        return f'- {self.text}'


def _as_markdown(lines: list[Header | ListItem | str]) -> str:
    return '\n'.join(str(line) for line in lines) + '\n'


def _summary() -> list[Header | str]:
    return [Header(level=2, title=rnc.SUMMARY_HEADER), '']


def pull_request_references(record: rnm.NoteRecord) -> str:
    return ' '.join(f'#{identifier}' for identifier in record.origin_identifiers)


def list_item_from_record(record: rnm.NoteRecord) -> ListItem:
    references = pull_request_references(record)

    if not record.text:
        return ListItem(text=f'({references})')

    return ListItem(text=f'{record.text} ({references})')


def render_release_note(categorised: rna.CategorisedReleaseNotes) -> str:
    '''
    renders the release-note of a single repository:

        ## Summary

        ## <category>
        - <text> (#<PR-number> ...)

    with an empty line after each category. Empty categories are omitted.
    '''
    lines = _summary()

    for category, records in categorised:
        lines.append(Header(level=2, title=category.display_name))
        lines.extend(list_item_from_record(record) for record in records)
        lines.append('')

    return _as_markdown(lines)


def render_merged_release_notes(merged: rna.MergedReleaseNotes) -> str:
    '''
    renders the release-notes of all components, grouped by edition:

        ## Summary

        ## <edition> edition
        ### <category>
        #### <component>
        - <text>

    Component headings are only rendered for editions aggregating several components. Each
    edition is followed by an empty line. Empty groups are omitted.
    '''
    lines = _summary()

    for edition in merged.editions():
        lines.append(Header(level=2, title=f'{edition.display_name} edition'))

        for category in merged.categories(edition):
            lines.append(Header(level=3, title=category.display_name))

            for component in merged.components(edition, category):
                if edition.shows_component_headings:
                    lines.append(Header(level=4, title=component.display_name))

                lines.extend(
                    ListItem(text=record.text)
                    for record in merged.notes(edition, category, component)
                )

        lines.append('')

    return _as_markdown(lines)
