from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Dict, Optional


# =========================
# TOOL ARGUMENTS
# =========================
class _ToolArgs(BaseModel):
    # MCP clients often send coordinates/codes as numbers
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True, extra="ignore")


class GetAreaCodeArgs(_ToolArgs):
    area_code: Optional[str] = Field(default=None, alias="areaCode", description="상위 지역코드 (선택)")


class SearchTourInfoArgs(_ToolArgs):
    area_code: Optional[str] = Field(default=None, alias="areaCode", description="지역코드")
    content_type_id: Optional[str] = Field(
        default=None,
        alias="contentTypeId",
        description="관광타입(12:관광지, 14:문화시설, 15:축제공연행사, 25:여행코스, 28:레포츠, 32:숙박, 38:쇼핑, 39:음식점)",
    )
    keyword: Optional[str] = Field(default=None, description="검색 키워드")
    map_x: Optional[str] = Field(default=None, alias="mapX", description="경도 좌표")
    map_y: Optional[str] = Field(default=None, alias="mapY", description="위도 좌표")
    radius: Optional[str] = Field(default=None, description="거리 반경(미터)")


class GetDetailCommonArgs(_ToolArgs):
    content_id: str = Field(..., alias="contentId", description="관광 콘텐츠 ID")
    default_yn: str = Field(default="Y", alias="defaultYN", description="기본정보 조회여부(Y/N)")
    first_image_yn: str = Field(default="Y", alias="firstImageYN", description="대표이미지 조회여부(Y/N)")
    areacode_yn: str = Field(default="Y", alias="areacodeYN", description="지역코드 조회여부(Y/N)")
    addrinfo_yn: str = Field(default="Y", alias="addrinfoYN", description="주소정보 조회여부(Y/N)")
    mapinfo_yn: str = Field(default="Y", alias="mapinfoYN", description="좌표정보 조회여부(Y/N)")
    overview_yn: str = Field(default="Y", alias="overviewYN", description="개요정보 조회여부(Y/N)")

    @field_validator(
        "default_yn", "first_image_yn", "areacode_yn", "addrinfo_yn", "mapinfo_yn", "overview_yn",
        mode="before",
    )
    @classmethod
    def _default_flag(cls, v):
        # explicit null behaves like "not supplied"
        return "Y" if v is None else v

    def flags(self) -> Dict[str, str]:
        return {
            "defaultYN": self.default_yn,
            "firstImageYN": self.first_image_yn,
            "areacodeYN": self.areacode_yn,
            "addrinfoYN": self.addrinfo_yn,
            "mapinfoYN": self.mapinfo_yn,
            "overviewYN": self.overview_yn,
        }


# =========================
# UPSTREAM RECORDS
# =========================
class _Record(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class AreaCode(_Record):
    code: str
    name: str = ""


class TourItem(_Record):
    contentid: str = ""
    contenttypeid: str = ""
    title: str = ""
    addr1: str = ""
    addr2: str = ""


class DetailRecord(TourItem):
    tel: str = ""
    homepage: str = ""
    overview: str = ""
    firstimage: str = ""


class EventPeriod(BaseModel):
    start: str
    end: str


# =========================
# DISPATCH
# =========================
class UpstreamQuery(BaseModel):
    operation: str
    params: Dict[str, str] = Field(default_factory=dict)
