from typing import Optional, Sequence, Tuple

from .client import TourAPIClient
from .content_types import CONTENT_TYPES, REGION_NAMES, find_content_type, find_region
from .errors import ResolutionError
from .schemas import SearchTourInfoArgs
from .utils import logger


class AreaCodeResolver:
    """Area name ('서울') -> TourAPI areaCode ('1'), by substring match over the top-level area list."""

    def __init__(self, client: TourAPIClient):
        self.client = client

    async def resolve(self, area_name: str) -> Optional[str]:
        try:
            areas = await self.client.area_codes()
        except Exception as e:
            raise ResolutionError(str(e)) from e
        for area in areas:
            if area_name in area.name:
                return area.code
        return None


class KeywordIntentResolver:
    """
    Infer areaCode / contentTypeId from a free-text keyword when no areaCode was given.

    Both scans are ordered and stop at the first textual match:
    - region: the first region name found is resolved; if it does not resolve the scan still stops
    - content type: the first type name found overrides contentTypeId
    Each matched name is removed (first occurrence) from the keyword.
    """

    def __init__(
        self,
        area_resolver: AreaCodeResolver,
        regions: Sequence[str] = REGION_NAMES,
        content_types: Sequence[Tuple[str, str]] = CONTENT_TYPES,
    ):
        self.area_resolver = area_resolver
        self.regions = regions
        self.content_types = content_types

    async def resolve(self, request: SearchTourInfoArgs) -> SearchTourInfoArgs:
        keyword = request.keyword
        if not keyword or request.area_code:
            return request

        area_code = request.area_code
        content_type_id = request.content_type_id

        region = find_region(keyword, self.regions)
        if region:
            code = await self.area_resolver.resolve(region)
            if code:
                area_code = code
                keyword = keyword.replace(region, "", 1).strip()

        match = find_content_type(keyword, self.content_types)
        if match:
            type_name, content_type_id = match
            keyword = keyword.replace(type_name, "", 1).strip()

        logger.debug(
            "keyword_intent",
            extra={
                "keyword_in": request.keyword,
                "keyword_out": keyword,
                "area_code": area_code,
                "content_type_id": content_type_id,
            },
        )
        return request.model_copy(
            update={"area_code": area_code, "content_type_id": content_type_id, "keyword": keyword}
        )
