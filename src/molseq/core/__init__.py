"""
Core sequence model: alphabets, sequences, composition, translation tables, locations, splicing and randomization.
"""
