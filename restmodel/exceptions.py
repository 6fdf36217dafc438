"""
Custom exceptions for restmodel
"""

from typing import Any, Optional

class RestModelError(Exception):
    """Base exception for all restmodel errors"""
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class ConfigurationError(RestModelError):
    """Raised when a model has no resolvable URL"""
    pass

class TransportError(RestModelError):
    """Raised when a request fails or the API answers with a non-2xx status"""
    def __init__(self, message: str, status_code: int = None, response: Optional[Any] = None):
        super().__init__(message, status_code=status_code)
        self.response = response

class NotFoundError(TransportError):
    """Raised when requested resource is not found"""
    pass

class AuthenticationError(TransportError):
    """Raised when API key is invalid or expired"""
    pass

class ValidationError(TransportError):
    """Raised when the API rejects the payload"""
    pass

class ConnectionError(TransportError):
    """Raised when connection to API fails"""
    pass
