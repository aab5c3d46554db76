"""
L1 Domain — pure graph and version helpers.

No I/O, no logging side effects beyond debug traces.
"""
