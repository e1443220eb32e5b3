"""Endpoint gateway interface and HTTP implementation."""

from .base import EndpointGateway, RawResponse
from .http import HttpGateway

__all__ = ["EndpointGateway", "RawResponse", "HttpGateway"]
