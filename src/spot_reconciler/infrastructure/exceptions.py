from typing import Optional, Any

class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details

class CredentialsError(InfrastructureError):
    """Raised when AWS credentials cannot be validated."""
    pass
