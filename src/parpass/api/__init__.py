"""
API package for the ParPass client.
Contains the clients for the ParPass REST API and the recommendation service.
"""

from .base_api import BaseAPI
from .parpass_api import ParPassAPI
from .recommendation_api import RecommendationAPI

__all__ = ['BaseAPI', 'ParPassAPI', 'RecommendationAPI']
