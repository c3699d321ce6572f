from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

import mcp.types as types
from pydantic import BaseModel, ValidationError as PydanticValidationError

from .client import TourAPIClient
from .config import Settings
from .content_types import FESTIVAL_CONTENT_TYPE
from .dispatcher import select_operation
from .errors import TourToolError, UnknownToolError, ValidationError
from .formatter import format_area_codes, format_detail, format_search_results
from .resolver import AreaCodeResolver, KeywordIntentResolver
from .schemas import EventPeriod, GetAreaCodeArgs, GetDetailCommonArgs, SearchTourInfoArgs
from .utils import format_ymd, logger, new_request_id, Timer

ArgsT = TypeVar("ArgsT", bound=BaseModel)


def normalize_arguments(tool: str, model: Type[ArgsT], arguments: Optional[Dict[str, Any]]) -> ArgsT:
    """Raw tool arguments -> typed request; failures name the tool."""
    try:
        return model.model_validate(arguments or {})
    except PydanticValidationError as e:
        raise ValidationError(tool, str(e)) from e


async def fetch_event_period(client: TourAPIClient, content_id: str) -> Optional[EventPeriod]:
    """
    Festival start/end dates from detailIntro1.
    Non-fatal: any failure is logged and yields None so the detail still renders.
    """
    try:
        intro = await client.detail_intro(content_id, FESTIVAL_CONTENT_TYPE)
    except Exception as e:
        logger.warning("event_period_lookup_failed", extra={"content_id": content_id, "error": str(e)})
        return None

    intro = intro or {}
    start, end = intro.get("eventstartdate"), intro.get("eventenddate")
    if not (start and end):
        return None
    return EventPeriod(start=format_ymd(str(start)), end=format_ymd(str(end)))


class TourTools:
    """The three TourAPI tools: catalog + invocation."""

    def __init__(
        self,
        settings: Settings,
        client_factory: Callable[[Settings], TourAPIClient] = TourAPIClient,
    ):
        self.settings = settings
        self.client_factory = client_factory
        self._handlers = {
            "get_area_code": self.get_area_code,
            "search_tour_info": self.search_tour_info,
            "get_detail_common": self.get_detail_common,
        }

    # ---------- tools catalog ----------
    def list_tools(self) -> List[types.Tool]:
        return [
            types.Tool(
                name="get_area_code",
                description=(
                    "한국의 지역코드를 조회합니다. 상위 지역코드를 입력하면 하위 지역 목록을 반환하고, "
                    "입력하지 않으면 광역시/도 목록을 반환합니다."
                ),
                inputSchema=GetAreaCodeArgs.model_json_schema(by_alias=True),
            ),
            types.Tool(
                name="search_tour_info",
                description=(
                    "지역, 유형, 키워드 등을 기반으로 관광 정보를 검색합니다. "
                    "지역기반, 키워드 기반, 위치기반 검색을 지원합니다."
                ),
                inputSchema=SearchTourInfoArgs.model_json_schema(by_alias=True),
            ),
            types.Tool(
                name="get_detail_common",
                description=(
                    "특정 관광지, 축제, 숙박 등의 상세 정보를 조회합니다. "
                    "contentId를 기반으로 해당 콘텐츠의 공통 상세정보(제목, 주소, 개요 등)를 제공합니다."
                ),
                inputSchema=GetDetailCommonArgs.model_json_schema(by_alias=True),
            ),
        ]

    # ---------- tools handler ----------
    async def call(self, name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        """Run one tool; every failure becomes an isError result, nothing is raised."""
        rid = new_request_id()
        client: Optional[TourAPIClient] = None

        try:
            with Timer() as t:
                handler = self._handlers.get(name)
                if handler is None:
                    raise UnknownToolError(name)
                client = self.client_factory(self.settings)
                text = await handler(client, arguments)

            logger.info("tool_done", extra={"rid": rid, "tool": name, "elapsed_ms": t.elapsed_ms})
            return types.CallToolResult(content=[types.TextContent(type="text", text=text)])

        except TourToolError as e:
            logger.info("tool_failed", extra={"rid": rid, "tool": name, "error": str(e)})
            return self._error(str(e))
        except Exception as e:
            logger.exception("tool_crashed", extra={"rid": rid, "tool": name})
            return self._error(str(e) or type(e).__name__)

        finally:
            if client is not None:
                await client.close()

    @staticmethod
    def _error(message: str) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=f"오류: {message}")],
            isError=True,
        )

    async def get_area_code(self, client: TourAPIClient, arguments: Optional[Dict[str, Any]]) -> str:
        p = normalize_arguments("get_area_code", GetAreaCodeArgs, arguments)
        areas = await client.area_codes(p.area_code)
        return format_area_codes(areas)

    async def search_tour_info(self, client: TourAPIClient, arguments: Optional[Dict[str, Any]]) -> str:
        p = normalize_arguments("search_tour_info", SearchTourInfoArgs, arguments)
        p = await KeywordIntentResolver(AreaCodeResolver(client)).resolve(p)
        query = select_operation(p)
        logger.debug("search_dispatch", extra={"operation": query.operation, "params": query.params})
        items = await client.run_query(query)
        return format_search_results(items)

    async def get_detail_common(self, client: TourAPIClient, arguments: Optional[Dict[str, Any]]) -> str:
        p = normalize_arguments("get_detail_common", GetDetailCommonArgs, arguments)
        record = await client.detail_common(p.content_id, p.flags())
        if record is None or not record.title:
            return format_detail(None)

        period = None
        if record.contenttypeid == FESTIVAL_CONTENT_TYPE:
            period = await fetch_event_period(client, p.content_id)
        return format_detail(record, period)
