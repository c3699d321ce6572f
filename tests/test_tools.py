import pytest

from ktour_mcp.errors import UpstreamError, ValidationError
from ktour_mcp.formatter import NOT_FOUND, NO_RESULTS
from ktour_mcp.schemas import DetailRecord, GetDetailCommonArgs, SearchTourInfoArgs, TourItem, UpstreamQuery
from ktour_mcp.tools import TourTools, fetch_event_period, normalize_arguments


@pytest.fixture
def tools(settings, fake_client):
    return TourTools(settings, client_factory=lambda s: fake_client)


def _text(result):
    return result.content[0].text


FESTIVAL = DetailRecord.model_validate({
    "contentid": "141105", "contenttypeid": "15", "title": "진해군항제",
    "addr1": "경상남도 창원시 진해구", "tel": "055-225-2341",
})


def test_detail_flags_default_to_y():
    p = normalize_arguments("get_detail_common", GetDetailCommonArgs, {"contentId": "1", "overviewYN": "N", "mapinfoYN": None})
    assert p.flags() == {
        "defaultYN": "Y",
        "firstImageYN": "Y",
        "areacodeYN": "Y",
        "addrinfoYN": "Y",
        "mapinfoYN": "Y",
        "overviewYN": "N",
    }


def test_missing_content_id_names_tool_and_field():
    with pytest.raises(ValidationError) as ei:
        normalize_arguments("get_detail_common", GetDetailCommonArgs, {})
    msg = str(ei.value)
    assert msg.startswith("get_detail_common 도구의 인자가 잘못되었습니다: ")
    assert "contentId" in msg


def test_search_arguments_accept_numbers():
    p = normalize_arguments("search_tour_info", SearchTourInfoArgs, {"mapX": 126.98, "mapY": 37.56, "radius": 1000})
    assert (p.map_x, p.map_y, p.radius) == ("126.98", "37.56", "1000")
    assert normalize_arguments("search_tour_info", SearchTourInfoArgs, None) == SearchTourInfoArgs()


def test_list_tools_catalog(tools):
    catalog = {t.name: t for t in tools.list_tools()}
    assert set(catalog) == {"get_area_code", "search_tour_info", "get_detail_common"}
    detail_schema = catalog["get_detail_common"].inputSchema
    assert detail_schema["required"] == ["contentId"]
    assert "keyword" in catalog["search_tour_info"].inputSchema["properties"]


@pytest.mark.asyncio
async def test_get_area_code(tools, fake_client):
    result = await tools.call("get_area_code", {"areaCode": "1"})
    assert not result.isError
    assert _text(result).startswith("[1] 서울\n[2] 인천")
    fake_client.area_codes.assert_awaited_once_with("1")
    fake_client.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_search_keyword_emptied_by_inference(tools, fake_client):
    result = await tools.call("search_tour_info", {"keyword": "서울 축제"})
    fake_client.run_query.assert_awaited_once_with(
        UpstreamQuery(operation="areaBasedList1", params={"areaCode": "1", "contentTypeId": "15"})
    )
    assert _text(result) == NO_RESULTS


@pytest.mark.asyncio
async def test_search_keyword_with_residual_text(tools, fake_client):
    fake_client.run_query.return_value = [
        TourItem.model_validate({"contentid": "1", "contenttypeid": "39", "title": "해운대 암소갈비", "addr1": "부산"}),
    ]
    result = await tools.call("search_tour_info", {"keyword": "부산 해운대 음식점"})
    fake_client.run_query.assert_awaited_once_with(
        UpstreamQuery(
            operation="searchKeyword1",
            params={"keyword": "해운대", "areaCode": "6", "contentTypeId": "39"},
        )
    )
    assert _text(result) == "[음식점] 해운대 암소갈비\n주소: 부산\n콘텐츠ID: 1\n"


@pytest.mark.asyncio
async def test_search_resolution_failure_is_tool_error(tools, fake_client):
    fake_client.area_codes.side_effect = UpstreamError("HTTP 502")
    result = await tools.call("search_tour_info", {"keyword": "제주 올레길"})
    assert result.isError
    assert _text(result) == "오류: 지역코드 조회 오류: TourAPI 호출 오류: HTTP 502"
    fake_client.run_query.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_upstream_failure_is_tool_error(tools, fake_client):
    fake_client.run_query.side_effect = UpstreamError("SERVICE KEY IS NOT REGISTERED ERROR.")
    result = await tools.call("search_tour_info", {"mapX": "126.98", "mapY": "37.56"})
    assert result.isError
    assert _text(result) == "오류: TourAPI 호출 오류: SERVICE KEY IS NOT REGISTERED ERROR."
    fake_client.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_detail_festival_with_period(tools, fake_client):
    fake_client.detail_common.return_value = FESTIVAL
    fake_client.detail_intro.return_value = {"eventstartdate": "20240322", "eventenddate": "20240401"}

    result = await tools.call("get_detail_common", {"contentId": "141105"})

    fake_client.detail_intro.assert_awaited_once_with("141105", "15")
    assert _text(result) == (
        "[축제/행사] 진해군항제\n"
        "주소: 경상남도 창원시 진해구\n"
        "\n축제 기간: 2024-03-22 ~ 2024-04-01\n"
        "전화번호: 055-225-2341\n"
    )


@pytest.mark.asyncio
async def test_detail_festival_period_failure_is_not_fatal(tools, fake_client):
    fake_client.detail_common.return_value = FESTIVAL
    fake_client.detail_intro.side_effect = UpstreamError("HTTP 500")

    result = await tools.call("get_detail_common", {"contentId": "141105"})

    assert not result.isError
    assert "축제 기간" not in _text(result)
    assert _text(result).startswith("[축제/행사] 진해군항제\n")


@pytest.mark.asyncio
async def test_detail_not_found_skips_secondary_call(tools, fake_client):
    fake_client.detail_common.return_value = DetailRecord.model_validate({"contenttypeid": "15"})
    result = await tools.call("get_detail_common", {"contentId": "0"})
    assert _text(result) == NOT_FOUND
    fake_client.detail_intro.assert_not_awaited()


@pytest.mark.asyncio
async def test_detail_non_festival_skips_secondary_call(tools, fake_client):
    fake_client.detail_common.return_value = DetailRecord.model_validate({"contenttypeid": "12", "title": "경복궁"})
    await tools.call("get_detail_common", {"contentId": "126508", "overviewYN": "N"})
    fake_client.detail_intro.assert_not_awaited()
    args = fake_client.detail_common.await_args.args
    assert args[0] == "126508"
    assert args[1]["overviewYN"] == "N"


@pytest.mark.asyncio
async def test_detail_missing_content_id(tools, fake_client):
    result = await tools.call("get_detail_common", {})
    assert result.isError
    assert _text(result).startswith("오류: get_detail_common 도구의 인자가 잘못되었습니다")
    fake_client.detail_common.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_tool(tools):
    result = await tools.call("get_weather", {})
    assert result.isError
    assert _text(result) == "오류: 알 수 없는 도구: get_weather"


@pytest.mark.asyncio
async def test_event_period_requires_both_dates(fake_client):
    fake_client.detail_intro.return_value = {"eventstartdate": "20240322", "eventenddate": ""}
    assert await fetch_event_period(fake_client, "1") is None
    fake_client.detail_intro.return_value = None
    assert await fetch_event_period(fake_client, "1") is None


@pytest.mark.asyncio
async def test_event_period_swallows_failure(fake_client):
    fake_client.detail_intro.side_effect = UpstreamError("timeout")
    assert await fetch_event_period(fake_client, "1") is None


@pytest.mark.asyncio
async def test_search_invalid_keyword_names_tool(tools, fake_client):
    result = await tools.call("search_tour_info", {"keyword": {"text": "서울"}})
    assert result.isError
    assert _text(result).startswith("오류: search_tour_info 도구의 인자가 잘못되었습니다: ")
    assert "keyword" in _text(result)
    fake_client.run_query.assert_not_awaited()


@pytest.mark.asyncio
async def test_area_code_invalid_argument_names_tool(tools, fake_client):
    result = await tools.call("get_area_code", {"areaCode": ["1", "2"]})
    assert result.isError
    assert _text(result).startswith("오류: get_area_code 도구의 인자가 잘못되었습니다: ")
    assert "areaCode" in _text(result)
    fake_client.area_codes.assert_not_awaited()
