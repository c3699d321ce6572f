from .schemas import SearchTourInfoArgs, UpstreamQuery

DEFAULT_RADIUS_M = "2000"


def _params(**kw) -> dict:
    # unset filters are left out of the query string
    return {k: v for k, v in kw.items() if v}


def select_operation(request: SearchTourInfoArgs) -> UpstreamQuery:
    """
    Pick exactly one list operation, by strict priority:
      1. mapX + mapY                          -> locationBasedList1
      2. areaCode + contentTypeId, no keyword -> areaBasedList1
      3. keyword                              -> searchKeyword1
      4. anything else                        -> areaBasedList1 (possibly unfiltered)
    """
    r = request
    if r.map_x and r.map_y:
        return UpstreamQuery(
            operation="locationBasedList1",
            params=_params(
                mapX=r.map_x,
                mapY=r.map_y,
                radius=r.radius or DEFAULT_RADIUS_M,
                contentTypeId=r.content_type_id,
            ),
        )
    if r.area_code and r.content_type_id and not r.keyword:
        return UpstreamQuery(
            operation="areaBasedList1",
            params=_params(areaCode=r.area_code, contentTypeId=r.content_type_id),
        )
    if r.keyword:
        return UpstreamQuery(
            operation="searchKeyword1",
            params=_params(keyword=r.keyword, areaCode=r.area_code, contentTypeId=r.content_type_id),
        )
    return UpstreamQuery(
        operation="areaBasedList1",
        params=_params(areaCode=r.area_code, contentTypeId=r.content_type_id),
    )
