class TourToolError(RuntimeError):
    """Invocation-level failure -> surfaced to the caller as an error tool result."""
    pass


class ValidationError(TourToolError):
    """Malformed or missing tool argument."""

    def __init__(self, tool: str, detail: str):
        super().__init__(f"{tool} 도구의 인자가 잘못되었습니다: {detail}")
        self.tool = tool
        self.detail = detail


class UpstreamError(TourToolError):
    """TourAPI call failed (network, HTTP status, non-JSON body, resultCode != 0000)."""

    def __init__(self, detail: str):
        super().__init__(f"TourAPI 호출 오류: {detail}")
        self.detail = detail


class ResolutionError(TourToolError):
    """Area-name lookup failed because of an upstream fault."""

    def __init__(self, detail: str):
        super().__init__(f"지역코드 조회 오류: {detail}")
        self.detail = detail


class UnknownToolError(TourToolError):
    def __init__(self, name: str):
        super().__init__(f"알 수 없는 도구: {name}")
        self.name = name
