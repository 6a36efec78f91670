'''
recognisers for the lines of (semi-structured) release-note markdown.

Release-notes are expected in the following notation:

    ## <category display name, or "Summary">
    - <release-note text>

Pull request bodies carry their release-note below a `## Release note(s)` header. Within such a
section, a bullet of the form `Same as #<number>` links the pull request to another one, and a
bullet reading `N/A` marks the pull request as not being user-facing.
'''

import dataclasses
import enum
import re

# printable: anything but control characters (non-ASCII text is allowed)
_printable = r'[^\x00-\x1f\x7f]'

_header_pattern = re.compile(rf'^## *({_printable}*?) *$')
_sub_header_pattern = re.compile(rf'^#{{3,}} *({_printable}*)$')
_bullet_pattern = re.compile(rf'^ *(?P<dash>-)? *(?P<text>{_printable}+)$')
_same_as_pattern = re.compile(r'^ *-? *same ?as +#?([0-9]+) *$', flags=re.IGNORECASE)
_not_applicable_pattern = re.compile(r'^ *-? *N/?A *$', flags=re.IGNORECASE)
_release_note_section_pattern = re.compile(r'^## *release *notes? *$', flags=re.IGNORECASE)
_pull_request_numbers_suffix_pattern = re.compile(r'^(.*?) +(\((#[0-9]+ *)+\))$')

SUMMARY_HEADER = 'Summary'


class LineKind(enum.Enum):
    HEADER = 'header'
    SUB_HEADER = 'sub-header'
    SAME_AS = 'same-as'
    NOT_APPLICABLE = 'not-applicable'
    BULLET = 'bullet'
    TEXT = 'text'


@dataclasses.dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    text: str | None = None
    reference: str | None = None
    has_dash: bool = False

    def is_summary_header(self) -> bool:
        return (
            self.kind is LineKind.HEADER
            and self.text.lower() == SUMMARY_HEADER.lower()
        )

    @property
    def is_heading(self) -> bool:
        return self.kind in (LineKind.HEADER, LineKind.SUB_HEADER)

    @property
    def is_dashed_bullet(self) -> bool:
        '''
        true for any line of the form `- <text>`, regardless of whether the text carries a
        special meaning (same-as reference, N/A marker).
        '''
        return self.has_dash and self.kind in (
            LineKind.BULLET,
            LineKind.SAME_AS,
            LineKind.NOT_APPLICABLE,
        )


def _bullet(line: str) -> tuple[str, bool] | None:
    if not (match := _bullet_pattern.match(line)):
        return None

    text = match.group('text').strip()
    if not text.strip(' -'):
        return None # empty bullet, or horizontal rule

    return text, match.group('dash') is not None


def classify_line(line: str) -> ClassifiedLine:
    '''
    classifies the given line of markdown. Trailing line-breaks are ignored.
    '''
    line = line.rstrip('\r\n')

    if match := _sub_header_pattern.match(line):
        return ClassifiedLine(kind=LineKind.SUB_HEADER, text=match.group(1).strip())

    if match := _header_pattern.match(line):
        return ClassifiedLine(kind=LineKind.HEADER, text=match.group(1).strip())

    if not (bullet := _bullet(line)):
        return ClassifiedLine(kind=LineKind.TEXT, text=line)

    text, has_dash = bullet

    if match := _same_as_pattern.match(line):
        return ClassifiedLine(
            kind=LineKind.SAME_AS,
            text=text,
            reference=match.group(1),
            has_dash=has_dash,
        )

    if _not_applicable_pattern.match(line):
        return ClassifiedLine(kind=LineKind.NOT_APPLICABLE, text=text, has_dash=has_dash)

    return ClassifiedLine(kind=LineKind.BULLET, text=text, has_dash=has_dash)


def is_release_note_section_header(line: str) -> bool:
    return bool(_release_note_section_pattern.match(line.rstrip('\r\n')))


def strip_pull_request_numbers(text: str) -> str:
    '''
    removes a trailing group of pull request numbers, e.g.:

    `Fixed a bug. (#123 #124)` -> `Fixed a bug.`
    '''
    if match := _pull_request_numbers_suffix_pattern.match(text):
        return match.group(1)
    return text
