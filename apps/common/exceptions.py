"""
Typed failures raised by the domain services.

Each failure is a DRF ``APIException`` so the procedure layer can turn it
into an error envelope with a stable ``code`` and HTTP status, while the
services stay free of any transport concerns.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class DomainError(APIException):
    """Base class for failures that carry structured details."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be completed."
    default_code = "domain_error"

    def __init__(self, detail=None, code=None, **details):
        super().__init__(detail=detail, code=code)
        self.details = details


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"

    def __init__(self, entity, entity_id):
        super().__init__(
            detail=f"{entity.replace('_', ' ').capitalize()} with id {entity_id} does not exist",
            entity=entity,
            id=entity_id,
        )
        self.entity = entity
        self.entity_id = entity_id


class InvalidRole(DomainError):
    default_code = "invalid_role"

    def __init__(self, user_id, expected_role, actual_role):
        super().__init__(
            detail=f"User with id {user_id} has role '{actual_role}', expected '{expected_role}'",
            user_id=user_id,
            expected_role=expected_role,
            actual_role=actual_role,
        )


class InsufficientStock(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "insufficient_stock"

    def __init__(self, medicine_id, available, requested):
        super().__init__(
            detail=(
                f"Insufficient stock for medicine id {medicine_id}. "
                f"Available: {available}, Required: {requested}"
            ),
            medicine_id=medicine_id,
            available=available,
            requested=requested,
        )
        self.medicine_id = medicine_id
        self.available = available
        self.requested = requested


class OverfillError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "overfill"

    def __init__(self, prescribed, filled, attempted):
        super().__init__(
            detail=(
                "Cannot fill more than prescribed. "
                f"Prescribed: {prescribed}, Already filled: {filled}, Attempting to fill: {attempted}"
            ),
            prescribed=prescribed,
            filled=filled,
            attempted=attempted,
        )
        self.prescribed = prescribed
        self.filled = filled
        self.attempted = attempted


class StorageFailure(DomainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Storage operation failed."
    default_code = "storage_failure"
