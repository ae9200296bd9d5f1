"""
Package-wide utilities: shared resources and structural protocols.
"""
from molseq.utils.resources import RESOURCES, Resources, jit
from molseq.utils.protocols import HasAlphabet, HasLocations
