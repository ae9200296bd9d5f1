"""
Location descriptors for splicing, and a parser for GenBank-style location expressions.
"""
from enum import IntEnum
from re import compile as regex
from typing import Union, Any, Iterable, Iterator, ClassVar, Optional

from molseq.utils.protocols import HasLocations


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class LocationError(Exception):
    """Raised when a location expression cannot be parsed or a location does not fit a sequence."""


# Classes --------------------------------------------------------------------------------------------------------------
class Strand(IntEnum):
    """
    Enumeration for genomic strands.
    """
    FORWARD = 1
    REVERSE = -1
    _STR_CACHE: ClassVar[dict]

    def __str__(self): return self._STR_CACHE[self]

    @classmethod
    def from_symbol(cls, s: Any) -> 'Strand':
        if isinstance(s, cls): return s
        if s in (-1, '-', '-1', b'-'): return cls.REVERSE
        return cls.FORWARD

    def flip(self) -> 'Strand': return Strand(-self.value)

    @classmethod
    def _init_caches(cls):
        cls._STR_CACHE = {cls.FORWARD: '+', cls.REVERSE: '-'}


Strand._init_caches()


class Location:
    """
    A single segment of a spliced product.

    Coordinates are 1-based and inclusive, as in GenBank location expressions. A location carrying a literal
    ``sequence`` is inserted verbatim instead of being extracted from the source sequence.

    Attributes:
        start: First position (1-based, inclusive).
        end: Last position (1-based, inclusive).
        strand: The strand to read the segment from.
        sequence: Optional literal sequence that replaces the segment.
        partial_start: The segment extends beyond ``start`` ('<' in GenBank notation).
        partial_end: The segment extends beyond ``end`` ('>' in GenBank notation).
    """
    __slots__ = ('_start', '_end', '_strand', '_sequence', '_partial_start', '_partial_end')

    def __init__(self, start: int, end: int = None, strand: Any = Strand.FORWARD, sequence: Optional[str] = None,
                 partial_start: bool = False, partial_end: bool = False):
        self._start: int = int(start)
        self._end: int = int(end if end is not None else start)
        self._strand: Strand = Strand.from_symbol(strand)
        self._sequence: Optional[str] = sequence
        self._partial_start: bool = partial_start
        self._partial_end: bool = partial_end

    @property
    def start(self) -> int: return self._start
    @property
    def end(self) -> int: return self._end
    @property
    def strand(self) -> Strand: return self._strand
    @property
    def sequence(self) -> Optional[str]: return self._sequence
    @property
    def partial_start(self) -> bool: return self._partial_start
    @property
    def partial_end(self) -> bool: return self._partial_end

    def __len__(self):
        if self._sequence is not None: return len(self._sequence)
        return max(0, self._end - self._start + 1)

    def __iter__(self): return iter((self._start, self._end, self._strand))
    def __hash__(self): return hash((self._start, self._end, self._strand, self._sequence))

    def __repr__(self):
        if self._sequence is not None: return f'"{self._sequence}"'
        text = f"{'<' if self._partial_start else ''}{self._start}..{'>' if self._partial_end else ''}{self._end}"
        return f"complement({text})" if self._strand == Strand.REVERSE else text

    def __eq__(self, other):
        if not isinstance(other, Location): return False
        return (self._start == other._start and self._end == other._end and
                self._strand == other._strand and self._sequence == other._sequence)

    def complement(self) -> 'Location':
        """Returns the same segment on the opposite strand."""
        return Location(self._start, self._end, self._strand.flip(), self._sequence,
                        self._partial_start, self._partial_end)


class Locations:
    """
    Ordered list of ``Location`` objects describing how to assemble a spliced product.

    Examples:
        >>> locs = Locations.parse('complement(join(1..5,16..20))')
        >>> list(locs)
        [complement(16..20), complement(1..5)]
        >>> locs.span
        (1, 20)
    """
    __slots__ = ('_locations',)

    def __init__(self, locations: Iterable[Location] = ()):
        self._locations: list[Location] = list(locations)
        for loc in self._locations:
            if not isinstance(loc, Location): raise TypeError(f"Expected Location, not {type(loc)}")

    @classmethod
    def parse(cls, expression: str) -> 'Locations':
        """
        Parses a GenBank-style location expression.

        Args:
            expression: e.g. ``'join(1..5,complement(16..20))'``.

        Returns:
            A new ``Locations`` object.

        Raises:
            LocationError: If the expression is malformed.
        """
        return cls(LocationParser().parse(expression))

    @classmethod
    def coerce(cls, item: Union[HasLocations, Location, str, Iterable[Location]]) -> 'Locations':
        """Converts any object describing a spliced product (e.g. a feature with ``locations``) into ``Locations``."""
        if isinstance(item, Locations): return item
        if isinstance(item, HasLocations): return cls(item.locations)
        if isinstance(item, Location): return cls([item])
        if isinstance(item, str): return cls.parse(item)
        return cls(item)

    @property
    def locations(self) -> list[Location]: return self._locations

    def __len__(self): return len(self._locations)
    def __iter__(self) -> Iterator[Location]: return iter(self._locations)
    def __getitem__(self, item): return self._locations[item]
    def __repr__(self): return f"Locations({', '.join(map(repr, self._locations))})"

    def __eq__(self, other):
        if not isinstance(other, Locations): return False
        return self._locations == other._locations

    @property
    def span(self) -> tuple[int, int]:
        """Returns the smallest and largest positions covered by the extracted (non-literal) locations."""
        extracted = [loc for loc in self._locations if loc.sequence is None]
        if not extracted: return 0, 0
        return min(loc.start for loc in extracted), max(loc.end for loc in extracted)

    @property
    def length(self) -> int:
        """Returns the length of the spliced product."""
        return sum(len(loc) for loc in self._locations)


class LocationParser:
    """Parses GenBank location expressions into ``Location`` lists."""
    _TOKEN_REGEX = regex(
        r'\s*(?:(?P<func>complement|join|order|replace)\s*\(|(?P<open>\()|(?P<close>\))|(?P<comma>,)|'
        r'"(?P<literal>[^"]*)"|'
        r'(?P<lt><)?(?P<start>\d+)(?:(?P<sep>\.\.|\^|\.)(?P<gt>>)?(?P<end>\d+))?(?P<gt_only>>)?)\s*'
    )

    def parse(self, expression: str) -> list[Location]:
        tokens = self._tokenize(expression)
        locations, pos = self._expression(tokens, 0, expression)
        if pos != len(tokens): raise LocationError(f'Unexpected trailing text in location "{expression}"')
        return locations

    def _tokenize(self, expression: str) -> list[tuple[str, Any]]:
        tokens, pos = [], 0
        expression = expression.strip()
        while pos < len(expression):
            if (match := self._TOKEN_REGEX.match(expression, pos)) is None or match.end() == pos:
                raise LocationError(f'Cannot parse location "{expression}" at position {pos}')
            if match['func']: tokens.append(('func', match['func']))
            elif match['open']: tokens.append(('open', None))
            elif match['close']: tokens.append(('close', None))
            elif match['comma']: tokens.append(('comma', None))
            elif match['literal'] is not None: tokens.append(('literal', match['literal']))
            else:
                start = int(match['start'])
                end = int(match['end']) if match['end'] else start
                tokens.append(('range', Location(min(start, end), max(start, end), Strand.FORWARD, None,
                                                 bool(match['lt']), bool(match['gt'] or match['gt_only']))))
            pos = match.end()
        return tokens

    def _expression(self, tokens: list, pos: int, text: str) -> tuple[list[Location], int]:
        if pos >= len(tokens): raise LocationError(f'Unexpected end of location "{text}"')
        kind, value = tokens[pos]
        if kind == 'range': return [value], pos + 1
        if kind == 'literal': return [Location(1, len(value), Strand.FORWARD, value)], pos + 1
        if kind == 'open':  # Bare parentheses group a list
            locations, pos = self._list(tokens, pos + 1, text)
            return locations, self._expect_close(tokens, pos, text)
        if kind != 'func': raise LocationError(f'Unexpected token in location "{text}"')
        if value == 'complement':
            inner, pos = self._list(tokens, pos + 1, text)
            # Reverse strand segments are read in the opposite order
            return [loc.complement() for loc in reversed(inner)], self._expect_close(tokens, pos, text)
        if value == 'replace':
            target, pos = self._expression(tokens, pos + 1, text)
            if pos >= len(tokens) or tokens[pos][0] != 'comma' or pos + 1 >= len(tokens) or \
                    tokens[pos + 1][0] != 'literal':
                raise LocationError(f'replace() requires a location and a quoted sequence in "{text}"')
            literal = tokens[pos + 1][1]
            first, last = target[0], target[-1]
            return [Location(first.start, last.end, first.strand, literal)], self._expect_close(tokens, pos + 2, text)
        locations, pos = self._list(tokens, pos + 1, text)  # join / order
        return locations, self._expect_close(tokens, pos, text)

    def _list(self, tokens: list, pos: int, text: str) -> tuple[list[Location], int]:
        locations, pos = self._expression(tokens, pos, text)
        while pos < len(tokens) and tokens[pos][0] == 'comma':
            more, pos = self._expression(tokens, pos + 1, text)
            locations.extend(more)
        return locations, pos

    @staticmethod
    def _expect_close(tokens: list, pos: int, text: str) -> int:
        if pos >= len(tokens) or tokens[pos][0] != 'close':
            raise LocationError(f'Unbalanced parentheses in location "{text}"')
        return pos + 1
