"""Sequences app package.

Named counters that mint strictly increasing integers for human readable
identifiers (member numbers, receipt numbers). Increments run inside a
database transaction so concurrent callers never observe the same value.
"""
