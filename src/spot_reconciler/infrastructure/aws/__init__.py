"""AWS infrastructure - EC2 clients and the spot request provider."""

from .aws_client import AWSClient
from .spot_request_provider import EC2SpotRequestProvider

__all__ = ["AWSClient", "EC2SpotRequestProvider"]
