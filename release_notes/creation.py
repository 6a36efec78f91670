import logging

import release_notes.aggregate as rna
import release_notes.extract as rne
import release_notes.fetch as rnf
import release_notes.markdown as rnmd
import release_notes.model as rnm
import release_notes.resolve as rnr

logger = logging.getLogger(__name__)


class ReleaseNoteCreation:
    '''
    creates the release-note of a single repository from the (merged) pull requests tracked by
    the release's project.

    Each run should use a new instance, as extracted release-notes are accumulated.
    '''
    def __init__(self, pull_request_lookup: rnf.PullRequestLookup):
        self.pull_request_lookup = pull_request_lookup
        self.categorised = rna.CategorisedReleaseNotes()
        self.same_as_registry = rnr.SameAsRegistry()

    def extract_release_note_info(self, pull_request_number: str) -> rnm.NoteRecord | None:
        '''
        extracts the release-note of the given pull request and adds it to the categorised
        release-notes. Pull requests which were not merged, or which are not user-facing, are
        ignored.
        '''
        pull_request = self.pull_request_lookup.pull_request(pull_request_number)
        if not pull_request.merged:
            logger.debug(f'PR #{pull_request_number} was not merged - ignoring')
            return None

        extracted = rne.extract_pull_request_release_note(
            lines=pull_request.body_lines(),
            pull_request_number=pull_request.number,
            category=pull_request.category,
        )
        if not extracted:
            return None

        self.same_as_registry.register_all(extracted.same_as_references, extracted.record)
        return self.categorised.add(extracted.record)

    def resolved_release_notes(self) -> rna.CategorisedReleaseNotes:
        return self.same_as_registry.resolve(self.categorised)

    def render(self) -> str:
        return rnmd.render_release_note(self.resolved_release_notes())

    def create_release_note(self) -> str:
        project_number = self.pull_request_lookup.project_number()

        for pull_request_number in self.pull_request_lookup.pull_request_numbers(project_number):
            self.extract_release_note_info(pull_request_number)

        logger.info(f'extracted {len(self.categorised)} release-notes')
        return self.render()
