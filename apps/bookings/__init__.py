"""Bookings app package.

This app encapsulates field bookings: the booking model, its lifecycle
(pending -> confirmed -> completed, or cancelled) and the independent
payment flag. Booking creation checks availability and writes the
booking inside one transaction that holds a row lock on the field, so
two requests can never claim overlapping time on the same pitch.
"""
