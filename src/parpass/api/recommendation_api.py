"""
Recommendation service client.
"""

from urllib.parse import quote

from parpass.api.base_api import BaseAPI
from parpass.exceptions import APIValidationError
from parpass.models.course import RecommendedCourse


class RecommendationAPI(BaseAPI):
    """Client for the course recommendation microservice."""

    # The model service is local and quick, or down
    DEFAULT_TIMEOUT = (2, 10)

    def get_recommendations(self, member_id: str) -> list[RecommendedCourse]:
        """Ranked course suggestions for a member.

        Raises:
            APIError: If the service is unreachable or answers with an error
            APIValidationError: If the payload has no recommendation list
        """
        result = self._get(f"/recommendations/{quote(str(member_id), safe='')}")
        if not isinstance(result, dict) or not isinstance(result.get('recommendations'), list):
            raise APIValidationError("Recommendation payload has no 'recommendations' list")
        return [RecommendedCourse.from_dict(item) for item in result['recommendations']]
