"""
Shared Kernel

Base classes, value objects, errors and API plumbing shared by the
users, hotels, rooms and bookings apps.
"""
