"""
Assembly of spliced products (e.g. mRNA from exons) from location descriptors.
"""
from typing import Union, Iterable

import numpy as np

from molseq.core.location import Location, Locations, LocationError
from molseq.utils.protocols import HasLocations


# Functions ------------------------------------------------------------------------------------------------------------
def splice(seq: 'Seq', locations: Union[HasLocations, Location, str, Iterable[Location]]) -> 'Seq':
    """
    Concatenates the segments described by ``locations`` into a new sequence.

    Segments are taken in order. A location with a literal sequence is inserted verbatim; any other location is
    extracted from ``seq`` and reverse complemented if it lies on the reverse strand. Alphabets without a
    complement (amino acids) keep reverse strand segments as they are.

    Args:
        seq: The source sequence.
        locations: A ``Locations`` object or anything with ``locations`` (``HasLocations``), a single
            ``Location``, an iterable of them, or a GenBank-style location expression.

    Returns:
        A new ``Seq`` with the alphabet of ``seq``.

    Raises:
        LocationError: If the expression cannot be parsed or a location starts before the first position.

    Examples:
        >>> seq = Alphabet.NUCLEIC.seq('atgcatgcatgcatgcaaaa')
        >>> str(splice(seq, 'join(1..5,16..20)'))
        'atgcacaaaa'
        >>> str(splice(seq, 'complement(join(1..5,16..20))'))
        'ttttgtgcat'
    """
    alphabet = seq.alphabet
    data = seq.encoded
    parts = []
    for location in Locations.coerce(locations):
        if location.sequence is not None:
            parts.append(alphabet.encode(location.sequence))
            continue
        if location.start < 1 or location.end < 1:
            raise LocationError(f'Location {location!r} starts before the first position of the sequence')
        segment = data[location.start - 1:location.end]
        if location.strand < 0 and alphabet.can_complement:
            segment = alphabet.reverse_complement(segment)
        parts.append(segment)
    product = np.concatenate(parts) if parts else np.empty(0, dtype=alphabet.DTYPE)
    return alphabet.new_seq(alphabet.finish_splice(product))
