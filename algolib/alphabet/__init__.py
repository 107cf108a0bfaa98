"""Alphabets of symbols: the abstract alphabet, range and set alphabets, and
alphabets built on top of other alphabets."""