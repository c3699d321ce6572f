from typing import Iterable, List, Optional

from .content_types import label_for
from .schemas import AreaCode, DetailRecord, EventPeriod, TourItem
from .utils import compose_address, strip_tags

NO_AREA_CODES = "조회된 지역코드가 없습니다."
NO_RESULTS = "검색 결과가 없습니다."
NOT_FOUND = "해당 콘텐츠 ID에 대한 정보를 찾을 수 없습니다."


def format_area_codes(areas: Iterable[AreaCode]) -> str:
    text = "\n".join(f"[{a.code}] {a.name}" for a in areas)
    return text or NO_AREA_CODES


def format_item(item: TourItem) -> str:
    return (
        f"{label_for(item.contenttypeid)} {item.title}\n"
        f"주소: {compose_address(item.addr1, item.addr2)}\n"
        f"콘텐츠ID: {item.contentid}\n"
    )


def format_search_results(items: List[TourItem]) -> str:
    if not items:
        return NO_RESULTS
    return "\n".join(format_item(i) for i in items)


def format_detail(record: Optional[DetailRecord], period: Optional[EventPeriod] = None) -> str:
    if record is None or not record.title:
        return NOT_FOUND

    out = f"{label_for(record.contenttypeid)} {record.title}\n"
    if record.addr1:
        out += f"주소: {compose_address(record.addr1, record.addr2)}\n"
    if period is not None:
        out += f"\n축제 기간: {period.start} ~ {period.end}\n"
    if record.tel:
        out += f"전화번호: {record.tel}\n"
    if record.homepage:
        out += f"홈페이지: {strip_tags(record.homepage)}\n"
    if record.overview:
        out += f"\n개요:\n{strip_tags(record.overview)}\n"
    if record.firstimage:
        out += f"\n이미지 URL: {record.firstimage}\n"
    return out
