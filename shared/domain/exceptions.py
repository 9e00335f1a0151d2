"""
Domain Errors

Typed failures raised by domain operations. Each error carries a short
title (rendered as ``error``) and a human readable message; the HTTP
layer maps ``status_code`` onto the response.
"""


class DomainError(Exception):
    """Base class for all domain failures"""

    status_code = 400
    title = 'Bad Request'
    default_message = 'The request could not be processed.'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {'error': self.title, 'message': self.message}


class NotFound(DomainError):
    status_code = 404
    title = 'Not Found'
    default_message = 'The requested resource was not found'


class InvalidRange(DomainError):
    title = 'Invalid Dates'
    default_message = 'Check-out date must be after check-in date'


class RoomUnavailable(DomainError):
    title = 'Room Not Available'
    default_message = 'Room is not available for the selected dates'


class Forbidden(DomainError):
    status_code = 403
    title = 'Access Denied'
    default_message = 'You do not have permission to perform this action'


class AlreadyCancelled(DomainError):
    title = 'Already Cancelled'
    default_message = 'Booking is already cancelled'


class CannotCancel(DomainError):
    title = 'Cannot Cancel'
    default_message = 'Cannot cancel a completed booking'


class InvalidStatus(DomainError):
    title = 'Invalid Status'
    default_message = 'Status must be one of: PENDING, CONFIRMED, CANCELLED, COMPLETED'


class InvalidTransition(DomainError):
    title = 'Invalid Status Transition'
    default_message = 'Booking cannot move to the requested status'


class InternalFailure(DomainError):
    status_code = 500
    title = 'Internal Server Error'
    default_message = 'Something went wrong'


class DeletionBlocked(DomainError):
    title = 'Cannot Delete'
    default_message = 'Resource is still referenced by active bookings'


class MissingParameters(DomainError):
    title = 'Missing Parameters'
    default_message = 'Check-in and check-out dates are required'
