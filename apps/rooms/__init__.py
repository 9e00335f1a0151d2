"""Rooms app package.

A room is an inventory pool of interchangeable units of one type in a
hotel. The app exposes room listing, administration and the per-stay
availability endpoint backed by the booking availability checker.
"""
