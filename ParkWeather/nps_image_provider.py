"""National Park Service image lookup."""
import logging
from typing import List, Optional

import requests

from openweather_provider import mask_key
from weather_provider import ProviderError, RateLimitedError


class NPSImageProvider:
    """
    Fetches park photos from the NPS Data API: https://www.nps.gov/subjects/developer/

    Returns bare image URLs; deciding what to show when there are none is the
    caller's job.
    """

    BASE_URL = "https://developer.nps.gov/api/v1/parks"

    def __init__(self, api_key: Optional[str], timeout: int = 10):
        self.api_key = api_key.strip() if api_key else None
        self.timeout = timeout

    def get_images(self, park_code: str) -> List[str]:
        """
        Fetch image URLs for a park code.

        Returns:
            List of image URLs (possibly empty)

        Raises:
            ProviderError: On network errors, non-2xx responses or bad JSON
            RateLimitedError: On HTTP 429 or a payload flagged as rate limited
        """
        if not self.api_key:
            logging.error("NPS API key is not configured")
            raise ProviderError("NPS API key is not configured")

        try:
            logging.info(f"Fetching NPS images for park code {park_code} (key {mask_key(self.api_key)})")
            response = requests.get(
                self.BASE_URL,
                params={"parkCode": park_code, "fields": "images"},
                headers={"X-Api-Key": self.api_key, "Accept": "application/json"},
                timeout=self.timeout,
            )

            if response.status_code == 429:
                logging.warning("Rate limited by NPS API")
                raise RateLimitedError("NPS API rate limit exceeded")

            if not response.ok:
                logging.error(f"NPS API error ({response.status_code}): {response.text[:200]}")
                if response.status_code == 403:
                    raise ProviderError("Invalid NPS API key")
                raise ProviderError(f"NPS API responded with status: {response.status_code}")

            data = response.json()
        except ValueError as e:
            logging.error(f"Error parsing NPS API response: {e}")
            raise ProviderError(f"Failed to parse response: {str(e)}")
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during NPS request: {e}")
            raise ProviderError(f"Network error: {str(e)}")

        if not isinstance(data, dict):
            raise ProviderError("Unexpected response body")
        if data.get("rateLimited"):
            raise RateLimitedError("NPS API reported rate limiting")

        parks = data.get("data") or []
        if not parks:
            return []
        images = parks[0].get("images") or []
        urls = [image["url"] for image in images if image.get("url")]
        logging.info(f"Found {len(urls)} images for park code {park_code}")
        return urls
