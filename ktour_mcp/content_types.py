from typing import Optional, Sequence, Tuple

# name -> contentTypeId, scanned in declaration order (first substring match wins)
CONTENT_TYPES: Tuple[Tuple[str, str], ...] = (
    ("관광지", "12"),
    ("문화시설", "14"),
    ("축제", "15"),
    ("행사", "15"),
    ("축제/행사", "15"),
    ("여행코스", "25"),
    ("레포츠", "28"),
    ("숙박", "32"),
    ("쇼핑", "38"),
    ("음식점", "39"),
)

CONTENT_TYPE_LABELS = {
    "12": "[관광지]",
    "14": "[문화시설]",
    "15": "[축제/행사]",
    "25": "[여행코스]",
    "28": "[레포츠]",
    "32": "[숙박]",
    "38": "[쇼핑]",
    "39": "[음식점]",
}
OTHER_LABEL = "[기타]"

FESTIVAL_CONTENT_TYPE = "15"

# metropolitan cities / provinces, scanned in this order against free-text keywords
REGION_NAMES: Tuple[str, ...] = (
    "서울", "부산", "대구", "인천", "광주", "대전", "울산", "세종",
    "경기", "강원", "충북", "충남", "전북", "전남", "경북", "경남", "제주",
)


def label_for(content_type_id: Optional[str]) -> str:
    return CONTENT_TYPE_LABELS.get(str(content_type_id or ""), OTHER_LABEL)


def find_content_type(
    text: str, table: Sequence[Tuple[str, str]] = CONTENT_TYPES
) -> Optional[Tuple[str, str]]:
    """Return the first (name, code) whose name occurs in text, or None."""
    for name, code in table:
        if name in text:
            return name, code
    return None


def find_region(text: str, regions: Sequence[str] = REGION_NAMES) -> Optional[str]:
    for name in regions:
        if name in text:
            return name
    return None
