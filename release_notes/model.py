import collections.abc
import dataclasses
import enum
import typing


class MalformedReleaseNotesError(ValueError):
    '''
    raised if a release-notes document cannot be interpreted, e.g. if it contains a release-note
    entry before any category was declared.
    '''
    pass


class Category(enum.StrEnum):
    '''
    categories of release-notes. Member values are the labels used to tag pull requests. The
    order of declaration is the order in which categories are rendered.
    '''
    BACKWARD_INCOMPATIBLE = 'backward-incompatible'
    ENHANCEMENT = 'enhancement'
    IMPROVEMENT = 'improvement'
    BUGFIX = 'bugfix'
    MISCELLANEOUS = 'miscellaneous'

    @property
    def label(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return {
            Category.BACKWARD_INCOMPATIBLE: 'Backward incompatibles',
            Category.ENHANCEMENT: 'Enhancements',
            Category.IMPROVEMENT: 'Improvements',
            Category.BUGFIX: 'Bug fixes',
            Category.MISCELLANEOUS: 'Miscellaneous',
        }[self]

    @staticmethod
    def from_display_name(display_name: str) -> typing.Self:
        normalised = display_name.strip().lower()
        for category in Category:
            if category.display_name.lower() == normalised:
                return category

        # headings written before the categories were renamed
        if normalised == 'backward incompatible changes':
            return Category.BACKWARD_INCOMPATIBLE

        raise ValueError(f'invalid category display name: {display_name}')

    @staticmethod
    def from_label(label: str) -> typing.Self:
        normalised = label.strip().lower()
        for category in Category:
            if category.label == normalised:
                return category

        raise ValueError(f'invalid category label: {label}')


def is_category_display_name(display_name: str) -> bool:
    try:
        Category.from_display_name(display_name)
        return True
    except ValueError:
        return False


def category_from_labels(labels: collections.abc.Iterable[str]) -> Category:
    '''
    returns the category named by the first of the given (pull request) labels that names one.
    Falls back to `Category.MISCELLANEOUS`.
    '''
    for label in labels:
        try:
            return Category.from_label(label)
        except ValueError:
            continue

    return Category.MISCELLANEOUS


class Edition(enum.StrEnum):
    COMMUNITY = 'community'
    ENTERPRISE = 'enterprise'

    @property
    def display_name(self) -> str:
        return {
            Edition.COMMUNITY: 'Community',
            Edition.ENTERPRISE: 'Enterprise',
        }[self]

    @property
    def shows_component_headings(self) -> bool:
        # the enterprise edition aggregates several products below one category
        return self is Edition.ENTERPRISE

    @property
    def strips_pull_request_numbers(self) -> bool:
        return self is Edition.ENTERPRISE


class Component(enum.StrEnum):
    '''
    the product repositories whose release-notes are merged.
    '''
    CORE = 'scalardb'
    CLUSTER = 'cluster'
    GRAPHQL = 'graphql'
    SQL = 'sql'

    @property
    def display_name(self) -> str:
        return {
            Component.CORE: 'ScalarDB',
            Component.CLUSTER: 'ScalarDB Cluster',
            Component.GRAPHQL: 'ScalarDB GraphQL',
            Component.SQL: 'ScalarDB SQL',
        }[self]


@dataclasses.dataclass(frozen=True, kw_only=True)
class NoteRecord:
    '''
    a single release-note entry.

    `origin_identifiers` holds the numbers of the pull requests the entry was created from. For
    entries extracted from pull requests, it starts with exactly one identifier; further ones are
    added if other pull requests are declared to be the "same as" this one. Entries read from
    already existing release-notes documents carry no identifiers, but `edition` and `component`
    instead.
    '''
    origin_identifiers: tuple[str, ...] = ()
    text: str | None = None
    category: Category | None = None
    edition: Edition | None = None
    component: Component | None = None

    @property
    def primary_identifier(self) -> str:
        return self.origin_identifiers[0]

    def with_category(self, category: Category) -> typing.Self:
        return dataclasses.replace(self, category=category)

    def merged_with(self, other: typing.Self) -> typing.Self:
        '''
        returns a new record with the text and origin-identifiers of `other` appended to those of
        this record. Absent text is treated as empty text.
        '''
        text = self.text
        if other.text:
            text = f'{text} {other.text}' if text else other.text

        return dataclasses.replace(
            self,
            text=text,
            origin_identifiers=self.origin_identifiers + other.origin_identifiers,
        )
