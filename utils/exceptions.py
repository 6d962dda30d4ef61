"""커스텀 예외 클래스 정의"""


class PipelineError(Exception):
    """변환 파이프라인 처리 중 발생하는 기본 예외"""

    status_code: int = 500
    default_message: str = "서버 오류가 발생했습니다."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(PipelineError):
    """요청 형식 오류 (생성 호출 전에 거부)"""
    status_code = 400
    default_message = "잘못된 요청입니다."


class AuthorizationError(PipelineError):
    """티어에 허용되지 않은 모델 또는 관리자 키 불일치"""
    status_code = 403
    default_message = "접근 권한이 없습니다."


class QuotaExceededError(PipelineError):
    """일일 사용 한도 초과"""
    status_code = 429
    default_message = "오늘 사용 가능한 횟수를 모두 사용했습니다."


class LLMAPIError(PipelineError):
    """LLM API 호출 실패 예외"""
    status_code = 502
    default_message = "변환 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요."


class AnalysisParseError(PipelineError):
    """1단계 분석 응답 파싱 실패 (내부 복구용, 사용자에게 노출하지 않음)"""
    default_message = "분석 결과를 해석할 수 없습니다."


class TransformParseError(PipelineError):
    """2단계 변환 응답 파싱 실패 (원문 텍스트로 감싸서 복구)"""
    default_message = "변환 결과를 해석할 수 없습니다."


class FeedbackStorageError(PipelineError):
    """피드백 로그 기록/조회 실패"""
    default_message = "피드백 저장 중 오류가 발생했습니다."
