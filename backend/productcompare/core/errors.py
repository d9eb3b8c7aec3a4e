from typing import Any, Optional


class ProductCompareError(Exception):
    """
    Base error for everything the API reports to its callers.

    `status_code` is the HTTP status the API answers with and `details`
    carries whatever diagnostic payload is available (vendor body, exception text).
    """

    status_code = 500

    def __init__(self, message: str, details: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class MissingParameter(ProductCompareError):
    status_code = 400


class InvalidProductUrl(ProductCompareError):
    status_code = 400


class InvalidProductData(ProductCompareError):
    """Vendor answered, but without a usable title."""

    status_code = 404

    def __init__(self, message: str = "Product not found", details: Any = None):
        super().__init__(message, details=details)


class UpstreamFailure(ProductCompareError):
    """
    Network / HTTP / payload error talking to the vendor.
    `vendor_status` is the vendor's HTTP status when one was received.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Failed to fetch product data",
        details: Any = None,
        vendor_status: Optional[int] = None,
    ):
        super().__init__(message, details=details)
        self.vendor_status = vendor_status


class ConfigurationError(ProductCompareError):
    status_code = 500
