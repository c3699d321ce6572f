import os
import aiohttp
import asyncio
import time
import json
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

from .config import Settings, load_settings
from .errors import UpstreamError
from .utils import logger, new_request_id
from .schemas import AreaCode, TourItem, DetailRecord, UpstreamQuery


class TourAPIClient:
    """
    REST client for the Korea Tourism Organization open API (KorService1).
    - Endpoint: GET http://apis.data.go.kr/B551011/KorService1/<operation>
    - Auth:     serviceKey=<TOUR_API_KEY> query parameter
    No retries: any fault surfaces immediately as UpstreamError.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.s = settings or load_settings()
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure(self):
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.s.timeout_s)
            self._session = aiohttp.ClientSession(timeout=timeout)

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "TourAPIClient":
        return self

    async def __aexit__(self, *_):
        await self.close()

    # ---------- REST helper ----------
    def _params(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
        # portal hands out both an URL-encoded and a decoded key; aiohttp encodes again
        out = {
            "serviceKey": unquote(self.s.api_key),
            "MobileOS": self.s.mobile_os,
            "MobileApp": self.s.mobile_app,
            "_type": "json",
            "numOfRows": str(self.s.num_of_rows),
            "pageNo": str(self.s.page_no),
        }
        for k, v in (params or {}).items():
            if v is not None:
                out[k] = str(v)
        return out

    async def call(self, operation: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Call one TourAPI operation and return the decoded JSON document.
        - Log response preview if TOUR_API_DEBUG_RESP=1
        - Raise UpstreamError on network/timeout, HTTP error, non-JSON body or resultCode != '0000'
        """
        await self._ensure()
        assert self._session is not None

        url = f"{str(self.s.base_url).rstrip('/')}/{operation}"
        debug_resp = os.getenv("TOUR_API_DEBUG_RESP") == "1"
        body_limit = int(os.getenv("TOUR_API_LOG_BODY_LIMIT", "4000"))
        rid = new_request_id()

        t0 = time.perf_counter()
        try:
            async with self._session.get(url, params=self._params(params)) as resp:
                elapsed_ms = (time.perf_counter() - t0) * 1000.0
                text = await resp.text()
                preview = text if len(text) <= body_limit else text[:body_limit] + "\n...<truncated>"

                if resp.status >= 400:
                    logger.warning(
                        "tour_api_resp_error",
                        extra={
                            "rid": rid,
                            "operation": operation,
                            "status": resp.status,
                            "elapsed_ms": round(elapsed_ms, 2),
                            "body_preview": preview,
                        },
                    )
                    raise UpstreamError(f"HTTP {resp.status}")

                if debug_resp:
                    logger.info(
                        "tour_api_resp_ok",
                        extra={
                            "rid": rid,
                            "operation": operation,
                            "status": resp.status,
                            "elapsed_ms": round(elapsed_ms, 2),
                            "body_size": len(text),
                            "body_preview": preview,
                        },
                    )
        except (asyncio.TimeoutError, aiohttp.ClientError) as neterr:
            logger.warning(
                "tour_api_network_or_timeout",
                extra={"rid": rid, "operation": operation, "error": str(neterr)},
            )
            raise UpstreamError(str(neterr) or type(neterr).__name__) from neterr

        # key/quota errors come back as XML even with _type=json
        try:
            data = json.loads(text)
        except json.JSONDecodeError as je:
            logger.warning(
                "tour_api_json_decode_error",
                extra={"rid": rid, "operation": operation, "error": str(je), "body_preview": preview},
            )
            raise UpstreamError(f"unexpected response: {text[:200]}") from je

        if not isinstance(data, dict) or "response" not in data:
            msg = data.get("resultMsg") if isinstance(data, dict) else None
            raise UpstreamError(msg or "unexpected response: no 'response'")

        header = data["response"].get("header") or {}
        code = str(header.get("resultCode", "0000"))
        if code != "0000":
            raise UpstreamError(str(header.get("resultMsg") or f"resultCode {code}"))

        return data

    @staticmethod
    def extract_items(data: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        response.body.items.item -> list.
        - items is "" when there are no results
        - item is a single object when there is exactly one result
        """
        body = (data.get("response") or {}).get("body") or {}
        items = body.get("items")
        if not isinstance(items, dict):
            return []
        item = items.get("item")
        if item is None:
            return []
        if isinstance(item, dict):
            return [item]
        return [r for r in item if isinstance(r, dict)]

    async def _items(self, operation: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return self.extract_items(await self.call(operation, params))

    # ---------- Public high-level methods ----------
    async def area_codes(self, area_code: Optional[str] = None) -> List[AreaCode]:
        rows = await self._items("areaCode1", {"areaCode": area_code or None})
        return [AreaCode.model_validate(r) for r in rows]

    async def run_query(self, query: UpstreamQuery) -> List[TourItem]:
        """Execute a dispatcher-selected list operation."""
        rows = await self._items(query.operation, query.params)
        return [TourItem.model_validate(r) for r in rows]

    async def detail_common(self, content_id: str, flags: Optional[Dict[str, str]] = None) -> Optional[DetailRecord]:
        rows = await self._items("detailCommon1", {"contentId": content_id, **(flags or {})})
        return DetailRecord.model_validate(rows[0]) if rows else None

    async def detail_intro(self, content_id: str, content_type_id: str) -> Optional[Dict[str, Any]]:
        rows = await self._items("detailIntro1", {"contentId": content_id, "contentTypeId": content_type_id})
        return rows[0] if rows else None
