from unittest.mock import MagicMock

import pytest

import release_notes.creation as rncr
import release_notes.fetch as rnf
import release_notes.model as rnm


def pull_request_body(text: str) -> str:
    return (
        '## Dummy section\n'
        'dummy message\n'
        '\n'
        '## Release note\n'
        f'{text}\n'
    )


def pull_request_lookup(
    pull_requests: dict[str, tuple[rnm.Category | None, str]],
    merged: bool=True,
) -> rnf.PullRequestLookup:
    '''
    returns a lookup yielding pull requests with the given category (as label) and release-note
    text. The project is assumed to contain exactly the given pull requests.
    '''
    def pull_request(number):
        category, text = pull_requests[number]
        return rnf.PullRequestInfo(
            number=number,
            merged=merged,
            labels=('dependencies', category.label) if category else (),
            body=pull_request_body(text),
        )

    lookup = MagicMock(spec=rnf.PullRequestLookup)
    lookup.project_number.return_value = '7'
    lookup.pull_request_numbers.return_value = list(pull_requests)
    lookup.pull_request.side_effect = pull_request
    return lookup


@pytest.fixture
def topic_pull_requests() -> dict[str, tuple[rnm.Category, str]]:
    return {
        '1': (rnm.Category.ENHANCEMENT, 'A topic pull request.'),
        '2': (rnm.Category.ENHANCEMENT, 'Same as #1'),
        '3': (rnm.Category.IMPROVEMENT, 'Additional comment 1.\nSame as #1'),
        '4': (rnm.Category.BUGFIX, 'Same as #1\nAdditional comment 2.'),
    }


@pytest.mark.parametrize('category', list(rnm.Category))
def test_not_applicable_is_not_categorised(category):
    sut = rncr.ReleaseNoteCreation(pull_request_lookup({'1': (category, 'N/A')}))

    assert sut.extract_release_note_info('1') is None
    assert len(sut.categorised) == 0


def test_without_category_added_to_miscellaneous():
    sut = rncr.ReleaseNoteCreation(pull_request_lookup({'1': (None, 'miscellaneous test')}))

    sut.extract_release_note_info('1')

    (record,) = sut.categorised.notes(rnm.Category.MISCELLANEOUS)
    assert record.origin_identifiers == ('1',)
    assert record.category is rnm.Category.MISCELLANEOUS
    assert record.text == 'miscellaneous test'


def test_unmerged_pull_requests_are_ignored():
    sut = rncr.ReleaseNoteCreation(
        pull_request_lookup({'1': (rnm.Category.BUGFIX, 'a fix')}, merged=False),
    )

    assert sut.extract_release_note_info('1') is None
    assert len(sut.categorised) == 0


def test_same_as_items_are_merged_into_topic(topic_pull_requests):
    topic_pull_requests['5'] = (rnm.Category.BACKWARD_INCOMPATIBLE, 'Same as #1\n')
    sut = rncr.ReleaseNoteCreation(pull_request_lookup(topic_pull_requests))

    for number in topic_pull_requests:
        sut.extract_release_note_info(number)

    resolved = sut.resolved_release_notes()

    assert resolved.notes(rnm.Category.BACKWARD_INCOMPATIBLE) == ()
    assert resolved.notes(rnm.Category.IMPROVEMENT) == ()
    assert resolved.notes(rnm.Category.BUGFIX) == ()

    (record,) = resolved.notes(rnm.Category.ENHANCEMENT)
    assert record.origin_identifiers == ('1', '2', '3', '4', '5')
    assert record.category is rnm.Category.ENHANCEMENT
    assert record.text == 'A topic pull request. Additional comment 1. Additional comment 2.'


def test_create_release_note(topic_pull_requests):
    topic_pull_requests.update({
        '5': (rnm.Category.IMPROVEMENT, 'An improvement text.'),
        '6': (rnm.Category.BUGFIX, 'A bugfix text.'),
        '7': (rnm.Category.BACKWARD_INCOMPATIBLE, 'A backward-incompatible text 1.'),
        '8': (rnm.Category.BACKWARD_INCOMPATIBLE, 'A backward-incompatible text 2.'),
    })
    lookup = pull_request_lookup(topic_pull_requests)

    release_note = rncr.ReleaseNoteCreation(lookup).create_release_note()

    lookup.pull_request_numbers.assert_called_once_with('7')
    assert release_note == (
        '## Summary\n'
        '\n'
        '## Backward incompatibles\n'
        '- A backward-incompatible text 1. (#7)\n'
        '- A backward-incompatible text 2. (#8)\n'
        '\n'
        '## Enhancements\n'
        '- A topic pull request. Additional comment 1. Additional comment 2. (#1 #2 #3 #4)\n'
        '\n'
        '## Improvements\n'
        '- An improvement text. (#5)\n'
        '\n'
        '## Bug fixes\n'
        '- A bugfix text. (#6)\n'
        '\n'
    )


def test_not_applicable_pull_request_is_no_same_as_source():
    sut = rncr.ReleaseNoteCreation(pull_request_lookup({
        '1': (rnm.Category.ENHANCEMENT, 'A topic.'),
        '2': (rnm.Category.ENHANCEMENT, 'Same as #1\nN/A'),
    }))

    sut.extract_release_note_info('1')
    sut.extract_release_note_info('2')

    (record,) = sut.resolved_release_notes().records()
    assert record.origin_identifiers == ('1',)
