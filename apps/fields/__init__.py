"""Fields app package.

Bookable pitches with their operating hours and rate card. The app owns
the pricing calculator and the availability engine that answers "is this
slot free" and "which slots are free on this date" against existing
bookings.
"""
