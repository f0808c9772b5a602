"""Application exceptions for Intellecty Retail.

Services raise these for rejected input and unknown identifiers. The API
layer turns them into failure envelopes; see core/exception_handlers.py
for the code-to-status table.
"""

from typing import Any


class IntellectyException(Exception):
    """Root of every error the API reports with a failure envelope.

    Attributes:
        message: Text shown to the caller as "error".
        error_code: Stable code shown as "code"; the class name if not given.
        details: Optional structured context shown as "details".
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Failure envelope: success, error, code and (when present) details."""
        body: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(IntellectyException):
    """Request input was missing or malformed (400)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", {"field": field} if field else None)


class ResourceNotFoundException(IntellectyException):
    """An identifier did not match any known resource (404).

    Args:
        resource_type: Kind of resource, e.g. "product".
        resource_id: The identifier that was looked up.
        message: Overrides the default "<Type> not found".
    """

    def __init__(self, resource_type: str, resource_id: str, message: str | None = None) -> None:
        super().__init__(
            message or f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TenantNotFoundException(IntellectyException):
    """The tenant header named a tenant that is not registered (404)."""

    def __init__(self, tenant_id: str) -> None:
        super().__init__(f"Tenant not found: {tenant_id}", "TENANT_NOT_FOUND", {"tenant_id": tenant_id})


class FeatureNotAvailableException(IntellectyException):
    """The tenant's tier does not include the requested feature (403)."""

    def __init__(self, feature: str, tier: str) -> None:
        super().__init__(
            f"Feature '{feature}' not available in {tier} tier",
            "FEATURE_NOT_AVAILABLE",
            {"feature": feature, "tier": tier},
        )


class TierLimitExceededException(IntellectyException):
    """A request asks for more than the tenant's tier allows (403).

    Args:
        limit_name: Which quota was exceeded, e.g. "forecast_days".
        requested: The amount asked for.
        limit: The tier's limit.
        message: Text for the caller.
    """

    def __init__(self, limit_name: str, requested: int, limit: int, message: str) -> None:
        super().__init__(
            message,
            "TIER_LIMIT_EXCEEDED",
            {"limit": limit_name, "requested": requested, "allowed": limit},
        )
