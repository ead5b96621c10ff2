"""Typed failures of the reading-submission workflow."""


class MeterBillingError(Exception):
    """Base exception for all meter billing errors."""

    code = 'meter_billing_error'
    default_message = 'Meter billing error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class InvalidInput(MeterBillingError):
    """Raised when the submitted reading value is missing or not a valid number."""

    code = 'invalid_input'
    default_message = 'Invalid reading value'


class CustomerNotFound(MeterBillingError):
    """Raised when no customer owns the submitted meter number."""

    code = 'customer_not_found'
    default_message = 'Meter number not found'


class RateNotFound(MeterBillingError):
    """Raised when the customer's type has no active rate configured."""

    code = 'rate_not_found'
    default_message = 'Rate not found for this customer type'


class StorageFailure(MeterBillingError):
    """Raised when the backing data store fails unexpectedly."""

    code = 'storage_failure'
    default_message = 'The data store could not complete the request'
