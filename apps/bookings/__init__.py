"""Bookings app package.

This app encapsulates the booking domain: the availability checker, the
booking writer, cancellation and administrative status changes. Each
booking is written inside one transaction that locks the room row so
overlap counts stay consistent between concurrent bookers.
"""
