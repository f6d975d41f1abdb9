"""Finances app package.

This app contains club payments (membership fees, booking and order
payments). Each payment receives a sequential receipt number minted
from the ``receipt_number`` counter.
"""
